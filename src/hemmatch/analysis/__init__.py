"""
Módulo de análisis con IA.

Explica resultados de matching usando LLM (Gemini/Groq).
"""

from hemmatch.analysis.match_explainer import MatchExplainer, MatchExplanation
from hemmatch.analysis.preference_context import build_preference_context, format_preference_value
from hemmatch.analysis.llm_providers import (
    get_llm_provider,
    BaseLLMProvider,
    GeminiProvider,
    GroqProvider,
    LLMResponse,
)

__all__ = [
    # Explicación
    "MatchExplainer",
    "MatchExplanation",
    "build_preference_context",
    "format_preference_value",
    # Proveedores LLM
    "get_llm_provider",
    "BaseLLMProvider",
    "GeminiProvider",
    "GroqProvider",
    "LLMResponse",
]
