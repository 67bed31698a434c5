"""
Motor de scoring de preferencias.

Calcula qué tan bien una propiedad cumple los requisitos ponderados
de un usuario:
- Cada preferencia con importancia > 0 aporta un peso de importancia × 10
- La fracción de match depende del tipo de la feature (boolean, number, select)
- El porcentaje final es score / max_score redondeado

Función pura: sin I/O, sin estado, no muta sus entradas.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from hemmatch.models.feature import FeatureDefinition, FeatureType
from hemmatch.models.match import FeatureMatch, MatchResult
from hemmatch.models.preference import PreferenceEntry

PropertyFeatureValues = Mapping[str, Any]

FeatureDefinitions = Union[Iterable[FeatureDefinition], Mapping[str, FeatureDefinition]]

_TRUE_STRINGS = {"true", "1", "yes", "ja"}
_FALSE_STRINGS = {"false", "0", "no", "nej", ""}


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Parámetros ajustables del scoring.

    Los defaults reproducen el comportamiento histórico de la aplicación.
    """

    # Una preferencia numérica cuenta como 'matched' solo por encima de este umbral
    numeric_match_threshold: float = 0.7
    # Una diferencia de esta fracción del rango (o más) da fracción 0
    numeric_tolerance_fraction: float = 0.5
    # Puntos por nivel de importancia
    importance_weight: int = 10


DEFAULT_POLICY = ScoringPolicy()


def compute_match_score(
    property_features: PropertyFeatureValues,
    preferences: Iterable[PreferenceEntry],
    feature_definitions: FeatureDefinitions,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> MatchResult:
    """
    Calcula el match entre una propiedad y las preferencias de un usuario.

    Args:
        property_features: Valores de la propiedad por feature_id (pueden faltar)
        preferences: Preferencias del usuario, en cualquier orden
        feature_definitions: Definiciones de features (lista o dict por id)
        policy: Parámetros de scoring

    Returns:
        MatchResult con score, max_score, porcentaje y detalle por feature
    """
    definitions = _index_definitions(feature_definitions)

    score = 0.0
    max_score = 0.0
    matches: dict[str, FeatureMatch] = {}

    for preference in preferences:
        feature = definitions.get(preference.feature_id)
        if feature is None:
            # Preferencia huérfana: no suma ni aparece en el detalle
            continue

        if preference.importance == 0:
            matches[preference.feature_id] = FeatureMatch(
                matched=True,
                importance=0,
                feature_label=feature.label,
            )
            continue

        weight = preference.importance * policy.importance_weight
        max_score += weight

        fraction, matched = _match_feature(
            feature,
            property_features.get(preference.feature_id),
            preference.value,
            policy,
        )
        score += weight * fraction

        matches[preference.feature_id] = FeatureMatch(
            matched=matched,
            importance=preference.importance,
            feature_label=feature.label,
        )

    return MatchResult(
        score=score,
        max_score=max_score,
        percentage=_to_percentage(score, max_score),
        matches=matches,
    )


def _index_definitions(
    feature_definitions: FeatureDefinitions,
) -> Mapping[str, FeatureDefinition]:
    if isinstance(feature_definitions, Mapping):
        return feature_definitions
    return {feature.id: feature for feature in feature_definitions}


def _match_feature(
    feature: FeatureDefinition,
    property_value: Any,
    desired_value: Any,
    policy: ScoringPolicy,
) -> tuple[float, bool]:
    """Devuelve (fracción de match en [0, 1], matched)."""
    if feature.type == FeatureType.NUMBER:
        fraction = _numeric_fraction(
            _to_number(property_value),
            _to_number(desired_value),
            feature.value_range,
            policy.numeric_tolerance_fraction,
        )
        return fraction, fraction > policy.numeric_match_threshold

    if feature.type == FeatureType.BOOLEAN:
        actual = _to_bool(property_value, default=False)
        desired = _to_bool(desired_value, default=None)
        matched = actual is not None and desired is not None and actual == desired
    else:
        matched = _same_option(property_value, desired_value)

    return (1.0 if matched else 0.0), matched


def _numeric_fraction(
    actual: float,
    desired: float,
    value_range: float,
    tolerance_fraction: float,
) -> float:
    diff = abs(actual - desired)
    tolerance = value_range * tolerance_fraction

    # Rango degenerado: solo igualdad exacta
    if tolerance <= 0:
        return 1.0 if diff == 0 else 0.0

    normalized_diff = min(diff / tolerance, 1.0)
    return 1.0 - normalized_diff


def _to_number(value: Any) -> float:
    """Valor numérico; faltante o ilegible cuenta como 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except (ValueError, TypeError):
            return 0.0
    return number if math.isfinite(number) else 0.0


def _to_bool(value: Any, default: Optional[bool]) -> Optional[bool]:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


def _same_option(actual: Any, desired: Any) -> bool:
    # Igualdad exacta del mismo tipo: 2 == 2, pero "2" != 2 y True != 1
    if actual is None or desired is None:
        return False
    return type(actual) is type(desired) and actual == desired


def _to_percentage(score: float, max_score: float) -> int:
    """Redondeo half-up de score / max_score; 100 si no hay nada evaluado."""
    if max_score <= 0:
        return 100
    ratio = min(max(score / max_score, 0.0), 1.0)
    return int(math.floor(ratio * 100 + 0.5))
