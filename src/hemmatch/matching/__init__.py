"""
Servicio de matching.

Carga los datos de Supabase, extrae features y aplica el motor de scoring.
"""

from hemmatch.matching.service import (
    PreferenceMatchService,
    PreferenceMatchReport,
    HemmatchError,
    PropertyNotFoundError,
    PreferencesNotFoundError,
)

__all__ = [
    "PreferenceMatchService",
    "PreferenceMatchReport",
    "HemmatchError",
    "PropertyNotFoundError",
    "PreferencesNotFoundError",
]
