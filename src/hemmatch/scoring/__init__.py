"""
Motor de scoring de preferencias.

Calcula el porcentaje de match entre una propiedad y los requisitos
ponderados de un usuario, con detalle por feature.
"""

from hemmatch.scoring.engine import (
    compute_match_score,
    ScoringPolicy,
    DEFAULT_POLICY,
    PropertyFeatureValues,
)
from hemmatch.scoring.quality import (
    match_quality_description,
    importance_label,
    sorted_matches,
    group_matches,
    GroupedMatches,
    ImportanceGroups,
)

__all__ = [
    "compute_match_score",
    "ScoringPolicy",
    "DEFAULT_POLICY",
    "PropertyFeatureValues",
    "match_quality_description",
    "importance_label",
    "sorted_matches",
    "group_matches",
    "GroupedMatches",
    "ImportanceGroups",
]
