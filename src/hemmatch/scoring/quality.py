"""
Helpers de presentación del resultado de matching.

Traducen un MatchResult a los textos y agrupaciones que se muestran
en la tarjeta de match (barra de progreso + badges por feature).
"""

from dataclasses import dataclass, field

from hemmatch.models.match import FeatureMatch, MatchResult
from hemmatch.models.preference import MUST_HAVE_IMPORTANCE

# (umbral mínimo de porcentaje, descripción)
QUALITY_DESCRIPTIONS: list[tuple[int, str]] = [
    (90, "Perfekt matchning"),
    (80, "Utmärkt matchning"),
    (70, "Mycket bra matchning"),
    (60, "Bra matchning"),
    (50, "Acceptabel matchning"),
    (40, "Mindre bra matchning"),
    (30, "Dålig matchning"),
]
LOWEST_QUALITY_DESCRIPTION = "Mycket dålig matchning"

IMPORTANCE_LABELS: dict[int, str] = {
    4: "Måste ha",
    3: "Mycket viktigt",
    2: "Ganska viktigt",
    1: "Trevligt att ha",
    0: "Inte viktigt",
}

VERY_IMPORTANT = 3


def match_quality_description(percentage: int) -> str:
    """Descripción textual de la calidad del match."""
    for threshold, description in QUALITY_DESCRIPTIONS:
        if percentage >= threshold:
            return description
    return LOWEST_QUALITY_DESCRIPTION


def importance_label(importance: int) -> str:
    return IMPORTANCE_LABELS.get(importance, str(importance))


def sorted_matches(result: MatchResult) -> list[tuple[str, FeatureMatch]]:
    """Detalle por feature ordenado por importancia (más alta primero)."""
    return sorted(
        result.matches.items(),
        key=lambda item: item[1].importance,
        reverse=True,
    )


@dataclass
class ImportanceGroups:
    """Labels de features agrupados por nivel de importancia."""

    must_have: list[str] = field(default_factory=list)
    very_important: list[str] = field(default_factory=list)
    other: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.must_have or self.very_important or self.other)


@dataclass
class GroupedMatches:
    matched: ImportanceGroups = field(default_factory=ImportanceGroups)
    unmatched: ImportanceGroups = field(default_factory=ImportanceGroups)


def group_matches(result: MatchResult) -> GroupedMatches:
    """
    Agrupa las features evaluadas en matched/unmatched por importancia.

    Las preferencias con importancia 0 no aparecen en ningún grupo.
    """
    grouped = GroupedMatches()

    for match in result.matches.values():
        if match.importance <= 0:
            continue

        groups = grouped.matched if match.matched else grouped.unmatched
        if match.importance == MUST_HAVE_IMPORTANCE:
            groups.must_have.append(match.feature_label)
        elif match.importance == VERY_IMPORTANT:
            groups.very_important.append(match.feature_label)
        else:
            groups.other.append(match.feature_label)

    return grouped
