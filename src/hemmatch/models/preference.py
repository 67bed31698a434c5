"""
Preferencias del usuario.

Cada PreferenceEntry es un requisito ponderado sobre una feature:
el valor deseado y la importancia (0 = no importa, 4 = imprescindible).
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MIN_IMPORTANCE = 0
MAX_IMPORTANCE = 4

# Importancia 4
MUST_HAVE_IMPORTANCE = MAX_IMPORTANCE


def unwrap_stored_value(value: Any) -> Any:
    """
    Desenvuelve el valor tal como se guarda en JSONB.

    Los valores se persisten como {"value": x}; filas viejas pueden
    tener el escalar directo.
    """
    if isinstance(value, Mapping) and "value" in value:
        return value["value"]
    return value


class PreferenceEntry(BaseModel):
    """Requisito del usuario sobre una feature."""

    model_config = ConfigDict(frozen=True)

    feature_id: str = Field(..., description="FK a FeatureDefinition.id")
    value: Any = Field(None, description="Valor deseado, según el tipo de la feature")
    importance: int = Field(
        ..., ge=MIN_IMPORTANCE, le=MAX_IMPORTANCE, description="0 = no importa, 4 = imprescindible"
    )

    @classmethod
    def from_db_row(cls, row: Mapping[str, Any]) -> "PreferenceEntry":
        """Construye la preferencia desde una fila de 'user_property_requirements'."""
        return cls(
            feature_id=row["feature_id"],
            value=unwrap_stored_value(row.get("value")),
            importance=row.get("importance") or 0,
        )

    def to_db_dict(self, user_id: str) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return {
            "user_id": user_id,
            "feature_id": self.feature_id,
            "value": {"value": self.value},
            "importance": self.importance,
        }


def preferences_from_mapping(
    requirements: Mapping[str, Mapping[str, Any]],
) -> list[PreferenceEntry]:
    """
    Adapta el formato {feature_id: {"value": ..., "importance": ...}}
    usado por el formulario de preferencias a una lista de PreferenceEntry.
    """
    return [
        PreferenceEntry(
            feature_id=feature_id,
            value=unwrap_stored_value(requirement.get("value")),
            importance=requirement.get("importance") or 0,
        )
        for feature_id, requirement in requirements.items()
    ]
