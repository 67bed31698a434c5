"""
Repositorios para operaciones CRUD en Supabase.

Cada repositorio maneja una tabla/entidad específica.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

import structlog
from pydantic import ValidationError

from hemmatch.database.supabase_client import get_supabase_client, SupabaseClient
from hemmatch.models import FeatureDefinition, MatchResult, PreferenceEntry

logger = structlog.get_logger()


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseRepository:
    """Clase base para repositorios."""

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or get_supabase_client()

    @property
    def client(self) -> SupabaseClient:
        return self._client


class FeatureRepository(BaseRepository):
    """Repositorio para las definiciones de features (property_features)."""

    TABLE = "property_features"

    def list_all(self) -> list[FeatureDefinition]:
        """
        Obtiene todas las definiciones de features.

        Las filas inválidas (tipo desconocido, cotas ilegibles) se descartan
        con un warning: para el scoring equivalen a features inexistentes.
        """
        response = self.client.execute(
            self.client.table(self.TABLE).select("*"),
            operation="list_features",
        )

        features = []
        for row in response.data or []:
            try:
                features.append(FeatureDefinition.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    "Feature inválida descartada",
                    feature_id=row.get("id"),
                    error=str(e),
                )
        return features

    def get_by_id(self, feature_id: str) -> Optional[FeatureDefinition]:
        """Obtiene una feature por su id."""
        response = self.client.execute(
            self.client.table(self.TABLE)
            .select("*")
            .eq("id", feature_id)
            .limit(1),
            operation="get_feature",
            feature_id=feature_id,
        )
        if not response.data:
            return None
        try:
            return FeatureDefinition.model_validate(response.data[0])
        except ValidationError as e:
            logger.warning("Feature inválida", feature_id=feature_id, error=str(e))
            return None


class PreferenceRepository(BaseRepository):
    """Repositorio para requisitos de usuario (user_property_requirements)."""

    TABLE = "user_property_requirements"

    def get_for_user(self, user_id: str) -> list[PreferenceEntry]:
        """Obtiene las preferencias de un usuario."""
        response = self.client.execute(
            self.client.table(self.TABLE)
            .select("feature_id, value, importance")
            .eq("user_id", user_id),
            operation="get_preferences",
            user_id=user_id,
        )

        preferences = []
        for row in response.data or []:
            try:
                preferences.append(PreferenceEntry.from_db_row(row))
            except (ValidationError, KeyError) as e:
                logger.warning(
                    "Preferencia inválida descartada",
                    user_id=user_id,
                    feature_id=row.get("feature_id"),
                    error=str(e),
                )
        return preferences

    def save_for_user(
        self, user_id: str, preferences: Iterable[PreferenceEntry]
    ) -> list[dict]:
        """
        Reemplaza las preferencias de un usuario.

        Borra las existentes e inserta las nuevas, así las features
        quitadas del formulario desaparecen.
        """
        rows = [preference.to_db_dict(user_id) for preference in preferences]

        self.client.execute(
            self.client.table(self.TABLE).delete().eq("user_id", user_id),
            operation="delete_preferences",
            user_id=user_id,
        )

        if not rows:
            logger.info("Preferencias eliminadas", user_id=user_id)
            return []

        response = self.client.execute(
            self.client.table(self.TABLE).insert(rows),
            operation="insert_preferences",
            user_id=user_id,
        )
        logger.info("Preferencias guardadas", user_id=user_id, count=len(rows))
        return response.data or []


class PropertyRepository(BaseRepository):
    """Repositorio para propiedades guardadas (saved_properties)."""

    TABLE = "saved_properties"

    def get_by_id(self, property_id: str) -> Optional[dict]:
        """Obtiene una propiedad por su UUID."""
        response = self.client.execute(
            self.client.table(self.TABLE)
            .select("*")
            .eq("id", property_id)
            .limit(1),
            operation="get_property",
            property_id=property_id,
        )
        return response.data[0] if response.data else None


class AnalysisRepository(BaseRepository):
    """Repositorio para análisis de propiedades (property_analyses)."""

    TABLE = "property_analyses"

    def get_by_property_id(self, property_id: str) -> Optional[dict]:
        """Obtiene el análisis de una propiedad."""
        response = self.client.execute(
            self.client.table(self.TABLE)
            .select("*")
            .eq("property_id", property_id)
            .limit(1),
            operation="get_analysis",
            property_id=property_id,
        )
        return response.data[0] if response.data else None

    def update_preference_match(self, analysis_id: str, result: MatchResult) -> bool:
        """Guarda el resultado de matching en el análisis."""
        response = self.client.execute(
            self.client.table(self.TABLE)
            .update({
                "preference_match": result.to_db_dict(),
                "updated_at": _utcnow_iso(),
            })
            .eq("id", analysis_id),
            operation="update_preference_match",
            analysis_id=analysis_id,
        )
        logger.info(
            "Preference match guardado",
            analysis_id=analysis_id,
            percentage=result.percentage,
        )
        return len(response.data or []) > 0
