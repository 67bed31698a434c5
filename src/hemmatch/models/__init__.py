"""
Modelos de datos del sistema.

- FeatureDefinition: atributos puntuables de una propiedad
- PreferenceEntry: requisitos ponderados del usuario
- MatchResult: resultado del scoring
"""

from hemmatch.models.feature import FeatureDefinition, FeatureType
from hemmatch.models.preference import (
    PreferenceEntry,
    preferences_from_mapping,
    unwrap_stored_value,
    MUST_HAVE_IMPORTANCE,
)
from hemmatch.models.match import FeatureMatch, MatchResult

__all__ = [
    # Features
    "FeatureDefinition",
    "FeatureType",
    # Preferencias
    "PreferenceEntry",
    "preferences_from_mapping",
    "unwrap_stored_value",
    "MUST_HAVE_IMPORTANCE",
    # Resultado
    "FeatureMatch",
    "MatchResult",
]
