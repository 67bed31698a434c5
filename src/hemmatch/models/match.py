"""
Resultado de matching entre preferencias y una propiedad.

Se serializa con las claves camelCase que usa el campo JSONB
'preference_match' de 'property_analyses'.
"""

from pydantic import BaseModel, ConfigDict, Field


class FeatureMatch(BaseModel):
    """Detalle de una feature evaluada."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    matched: bool
    importance: int
    feature_label: str = Field(..., alias="featureLabel")


class MatchResult(BaseModel):
    """Score normalizado y diagnóstico por feature."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    score: float = Field(..., ge=0, description="Suma de contribuciones ponderadas")
    max_score: float = Field(..., ge=0, alias="maxScore", description="Máximo posible")
    percentage: int = Field(..., ge=0, le=100, description="score / max_score en %")
    matches: dict[str, FeatureMatch] = Field(default_factory=dict)

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para el campo 'preference_match'."""
        return self.model_dump(by_alias=True)

    @property
    def matched_count(self) -> int:
        return sum(1 for m in self.matches.values() if m.matched and m.importance > 0)

    @property
    def evaluated_count(self) -> int:
        return sum(1 for m in self.matches.values() if m.importance > 0)
