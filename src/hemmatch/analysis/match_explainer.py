"""
Explicación en lenguaje natural de un resultado de matching.

Se ejecuta bajo demanda, después del scoring: el LLM solo redacta,
nunca modifica el score.
"""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

import structlog
from tenacity import retry, stop_after_attempt, wait_exponential

from hemmatch.analysis.llm_providers import get_llm_provider, BaseLLMProvider, LLMResponse
from hemmatch.analysis.preference_context import build_preference_context
from hemmatch.models import FeatureDefinition, MatchResult, PreferenceEntry
from hemmatch.scoring.quality import group_matches, match_quality_description

logger = structlog.get_logger()


EXPLAINER_SYSTEM_PROMPT = (
    "Du är en ärlig och kunnig bostadsrådgivare. Följ instruktionerna i användarens prompt exakt."
)

EXPLAINER_USER_PROMPT_TEMPLATE = """Förklara för användaren hur väl bostaden matchar deras preferenser.

Regler:
- Skriv på svenska, tilltala användaren med "du".
- Max 300 tecken för sammanfattningen.
- Hitta inte på fakta som inte finns nedan.
- Om ett "Måste ha" saknas, säg det tydligt men vänligt.
- Svara ENDAST med giltig JSON med exakt denna struktur:
{{
  "summary": "2-3 korta meningar om matchningen",
  "strengths": ["upp till 3 saker som matchar"],
  "gaps": ["upp till 3 saker som saknas"]
}}

{preference_context}
[BOSTAD]
- Titel: {title}
- Adress: {address}
- Pris: {price}
- Rum: {rooms}
- Storlek: {size}
- Egenskaper: {features}

[MATCHNING]
- Procent: {percentage}% ({quality})
- Uppfyllda: {matched}
- Ej uppfyllda: {unmatched}
"""

FALLBACK_SUMMARY = "Bostaden matchar {percentage}% av dina preferenser ({quality})."


@dataclass
class MatchExplanation:
    """Resultado estructurado de la explicación."""

    summary: str
    strengths: list[str]
    gaps: list[str]


class MatchExplainer:
    """Redacta una explicación corta de un MatchResult con el LLM configurado."""

    def __init__(self, provider: Optional[BaseLLMProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> BaseLLMProvider:
        if self._provider is None:
            self._provider = get_llm_provider()
        return self._provider

    def _build_prompt(
        self,
        property_row: Mapping[str, Any],
        result: MatchResult,
        preferences: Iterable[PreferenceEntry],
        features: Iterable[FeatureDefinition],
    ) -> str:
        grouped = group_matches(result)
        matched = grouped.matched.must_have + grouped.matched.very_important + grouped.matched.other
        unmatched = (
            grouped.unmatched.must_have
            + grouped.unmatched.very_important
            + grouped.unmatched.other
        )
        amenities = property_row.get("features") or []

        return EXPLAINER_USER_PROMPT_TEMPLATE.format(
            preference_context=build_preference_context(preferences, features),
            title=property_row.get("title", ""),
            address=property_row.get("address", ""),
            price=property_row.get("price", ""),
            rooms=property_row.get("rooms", ""),
            size=property_row.get("size", ""),
            features=", ".join(str(a) for a in amenities) if amenities else "inga",
            percentage=result.percentage,
            quality=match_quality_description(result.percentage),
            matched=", ".join(matched) if matched else "inga",
            unmatched=", ".join(unmatched) if unmatched else "inga",
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _generate(self, user_prompt: str) -> LLMResponse:
        return await self.provider.generate(
            system_prompt=EXPLAINER_SYSTEM_PROMPT,
            user_prompt=user_prompt,
        )

    def _parse(self, text: str) -> dict:
        # Los proveedores piden salida JSON nativa: no hay bloques ``` que limpiar
        data = json.loads(text or "")
        if not isinstance(data, dict):
            raise ValueError("La respuesta del LLM no es un objeto JSON")
        return data

    def _fallback(self, result: MatchResult) -> MatchExplanation:
        grouped = group_matches(result)
        return MatchExplanation(
            summary=FALLBACK_SUMMARY.format(
                percentage=result.percentage,
                quality=match_quality_description(result.percentage).lower(),
            ),
            strengths=(grouped.matched.must_have + grouped.matched.very_important)[:3],
            gaps=(grouped.unmatched.must_have + grouped.unmatched.very_important)[:3],
        )

    async def explain(
        self,
        property_row: Mapping[str, Any],
        result: MatchResult,
        preferences: Iterable[PreferenceEntry],
        features: Iterable[FeatureDefinition],
    ) -> MatchExplanation:
        """
        Genera la explicación del match.

        Nunca falla: ante cualquier error del LLM o respuesta ilegible
        devuelve una explicación armada a partir del propio resultado.
        """
        try:
            prompt = self._build_prompt(property_row, result, list(preferences), list(features))
            response = await self._generate(prompt)
            data = self._parse(response.text)

            summary = str(data.get("summary", "")).strip()
            if not summary:
                return self._fallback(result)

            return MatchExplanation(
                summary=summary[:400],
                strengths=[str(s).strip() for s in data.get("strengths") or [] if str(s).strip()][:3],
                gaps=[str(g).strip() for g in data.get("gaps") or [] if str(g).strip()][:3],
            )

        except Exception as e:
            logger.warning(
                "Error generando explicación del match",
                property_id=property_row.get("id"),
                error=str(e),
            )
            return self._fallback(result)
