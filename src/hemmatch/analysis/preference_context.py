"""
Contexto textual de preferencias para prompts de LLM.

Agrupa las preferencias del usuario por nivel de importancia,
con el label de cada feature y el valor deseado.
"""

from collections.abc import Iterable
from typing import Any

from hemmatch.models import FeatureDefinition, PreferenceEntry
from hemmatch.scoring.quality import importance_label


def format_preference_value(value: Any) -> str:
    """Valor deseado en texto legible."""
    if isinstance(value, bool):
        return "Ja" if value else "Nej"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_preference_context(
    preferences: Iterable[PreferenceEntry],
    features: Iterable[FeatureDefinition],
) -> str:
    """
    Arma el bloque de texto con las preferencias agrupadas por importancia.

    Las preferencias con importancia 0 se omiten. Si la feature no existe
    se usa el feature_id como label.
    """
    labels = {feature.id: feature.label for feature in features}
    significant = [p for p in preferences if p.importance > 0]
    if not significant:
        return ""

    lines = ["ANVÄNDARENS PREFERENSER:"]
    for importance in (4, 3, 2, 1):
        group = [p for p in significant if p.importance == importance]
        if not group:
            continue
        lines.append(f"{importance_label(importance)}:")
        for preference in group:
            label = labels.get(preference.feature_id, preference.feature_id)
            lines.append(f"- {label}: {format_preference_value(preference.value)}")

    return "\n".join(lines) + "\n"
