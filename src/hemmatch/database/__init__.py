"""
Módulo de base de datos.

Provee acceso a Supabase y operaciones CRUD.
"""

from hemmatch.database.supabase_client import get_supabase_client, SupabaseClient
from hemmatch.database.repositories import (
    FeatureRepository,
    PreferenceRepository,
    PropertyRepository,
    AnalysisRepository,
)

__all__ = [
    "get_supabase_client",
    "SupabaseClient",
    "FeatureRepository",
    "PreferenceRepository",
    "PropertyRepository",
    "AnalysisRepository",
]
