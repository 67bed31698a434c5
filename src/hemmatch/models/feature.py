"""
Definición de features puntuables.

Cada feature describe un atributo de la propiedad (ambientes, balcón, etc.)
y el tipo que determina cómo se compara contra la preferencia del usuario.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FeatureType(str, Enum):
    """Semántica de comparación de una feature."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    SELECT = "select"


DEFAULT_MIN_VALUE = 0.0
DEFAULT_MAX_VALUE = 100.0


class FeatureDefinition(BaseModel):
    """
    Atributo puntuable de una propiedad.

    Se mapea a la tabla 'property_features' en Supabase.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Clave compartida entre preferencias y valores de la propiedad")
    label: str = Field(..., description="Nombre legible de la feature")
    type: FeatureType = Field(..., description="boolean, number o select")

    # Solo para type=number
    min_value: Optional[float] = Field(None, description="Cota inferior (default 0)")
    max_value: Optional[float] = Field(None, description="Cota superior (default 100)")

    # Solo para type=select (informativo, el engine compara por igualdad)
    options: Optional[list[str]] = Field(None, description="Valores permitidos")

    @property
    def value_range(self) -> float:
        """Rango numérico de la feature, con defaults [0, 100]."""
        upper = DEFAULT_MAX_VALUE if self.max_value is None else self.max_value
        lower = DEFAULT_MIN_VALUE if self.min_value is None else self.min_value
        return upper - lower
