"""
Servicio de matching de preferencias.

Orquesta el cálculo para una propiedad y un usuario:
1. Cargar propiedad, preferencias y features (siempre frescos)
2. Extraer los valores de features de la propiedad
3. Calcular el score con el motor puro
4. Guardar el resultado en el análisis de la propiedad, si existe
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

import structlog

from hemmatch.config import get_settings
from hemmatch.database import (
    AnalysisRepository,
    FeatureRepository,
    PreferenceRepository,
    PropertyRepository,
)
from hemmatch.extraction import KeywordFeatureExtractor
from hemmatch.models import FeatureDefinition, MatchResult, PreferenceEntry
from hemmatch.scoring import ScoringPolicy, compute_match_score

logger = structlog.get_logger()


class HemmatchError(Exception):
    """Error base del sistema."""


class PropertyNotFoundError(HemmatchError):
    """La propiedad no existe."""

    def __init__(self, property_id: str):
        super().__init__(f"Propiedad no encontrada: {property_id}")
        self.property_id = property_id


class PreferencesNotFoundError(HemmatchError):
    """El usuario no tiene preferencias guardadas."""

    def __init__(self, user_id: str):
        super().__init__(f"El usuario no tiene preferencias: {user_id}")
        self.user_id = user_id


@dataclass
class PreferenceMatchReport:
    """Resultado del cálculo con los datos usados para obtenerlo."""

    property_id: str
    user_id: str
    property_row: dict[str, Any]
    property_features: dict[str, Any]
    preferences: list[PreferenceEntry]
    features: list[FeatureDefinition]
    result: MatchResult
    persisted: bool = False


class PreferenceMatchService:
    """Calcula y persiste el match de preferencias de una propiedad."""

    def __init__(
        self,
        property_repo: Optional[PropertyRepository] = None,
        preference_repo: Optional[PreferenceRepository] = None,
        feature_repo: Optional[FeatureRepository] = None,
        analysis_repo: Optional[AnalysisRepository] = None,
        extractor: Optional[KeywordFeatureExtractor] = None,
        policy: Optional[ScoringPolicy] = None,
    ):
        self.property_repo = property_repo or PropertyRepository()
        self.preference_repo = preference_repo or PreferenceRepository()
        self.feature_repo = feature_repo or FeatureRepository()
        self.analysis_repo = analysis_repo or AnalysisRepository()
        self.extractor = extractor or KeywordFeatureExtractor()
        self.policy = policy or get_settings().scoring_policy()

    def score_property(
        self,
        property_row: Mapping[str, Any],
        preferences: Iterable[PreferenceEntry],
        features: Iterable[FeatureDefinition],
    ) -> MatchResult:
        """Calcula el match de una propiedad ya cargada (sin I/O)."""
        property_features = self.extractor.extract(property_row)
        return compute_match_score(property_features, preferences, features, self.policy)

    def calculate(
        self,
        property_id: str,
        user_id: str,
        persist: bool = True,
    ) -> PreferenceMatchReport:
        """
        Calcula el match de preferencias de un usuario para una propiedad.

        Args:
            property_id: UUID de la propiedad guardada
            user_id: UUID del usuario
            persist: Guardar el resultado en 'property_analyses'

        Returns:
            PreferenceMatchReport con el resultado y los datos de entrada

        Raises:
            PropertyNotFoundError: Si la propiedad no existe
            PreferencesNotFoundError: Si el usuario no tiene preferencias
        """
        property_row = self.property_repo.get_by_id(property_id)
        if not property_row:
            raise PropertyNotFoundError(property_id)

        preferences = self.preference_repo.get_for_user(user_id)
        if not preferences:
            raise PreferencesNotFoundError(user_id)

        features = self.feature_repo.list_all()
        known_ids = {feature.id for feature in features}
        orphaned = [p.feature_id for p in preferences if p.feature_id not in known_ids]
        if orphaned:
            logger.info("Preferencias sin feature asociada", user_id=user_id, feature_ids=orphaned)

        property_features = self.extractor.extract(property_row)
        result = compute_match_score(property_features, preferences, features, self.policy)

        logger.info(
            "Preference match calculado",
            property_id=property_id,
            user_id=user_id,
            preferences=len(preferences),
            percentage=result.percentage,
        )

        persisted = False
        if persist:
            persisted = self._persist(property_id, result)

        return PreferenceMatchReport(
            property_id=property_id,
            user_id=user_id,
            property_row=property_row,
            property_features=property_features,
            preferences=preferences,
            features=features,
            result=result,
            persisted=persisted,
        )

    def _persist(self, property_id: str, result: MatchResult) -> bool:
        # Solo se actualiza un análisis existente; no se crean análisis nuevos
        analysis = self.analysis_repo.get_by_property_id(property_id)
        if not analysis:
            logger.info("Propiedad sin análisis, no se guarda el match", property_id=property_id)
            return False
        return self.analysis_repo.update_preference_match(analysis["id"], result)
