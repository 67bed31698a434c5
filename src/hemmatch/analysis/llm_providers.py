"""
Proveedores LLM para redactar explicaciones de matches.

El explicador solo necesita una operación: pedir una respuesta JSON
corta a partir de un prompt de sistema y uno de usuario. Cada proveedor
fuerza salida JSON con el mecanismo nativo de su API y toma temperatura
y límite de tokens de la configuración.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import structlog

from hemmatch.config import get_settings

logger = structlog.get_logger()


@dataclass
class LLMResponse:
    """Respuesta normalizada de cualquier LLM."""
    text: str
    model: str
    provider: str
    tokens_used: Optional[int] = None


class BaseLLMProvider(ABC):
    """Proveedor que devuelve un objeto JSON como texto."""

    provider_name: str = "base"

    def __init__(self, model: str, temperature: float, max_tokens: int):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """
        Genera una respuesta JSON.

        Args:
            system_prompt: Instrucciones del sistema
            user_prompt: Prompt con los datos del match
            temperature: Default: settings.llm_temperature
            max_tokens: Default: settings.llm_max_tokens
        """
        response = await self._generate_json(
            system_prompt,
            user_prompt,
            self.temperature if temperature is None else temperature,
            self.max_tokens if max_tokens is None else max_tokens,
        )
        logger.debug(
            "Respuesta LLM recibida",
            provider=self.provider_name,
            model=self.model,
            tokens=response.tokens_used,
        )
        return response

    @abstractmethod
    async def _generate_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> LLMResponse:
        ...


class GeminiProvider(BaseLLMProvider):
    """Google Gemini con response_mime_type JSON."""

    provider_name = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        from google import genai

        settings = get_settings()
        super().__init__(
            model=model or settings.gemini_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            raise ValueError("GEMINI_API_KEY no configurada")

        self.client = genai.Client(api_key=api_key)
        logger.info("GeminiProvider inicializado", model=self.model)

    async def _generate_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> LLMResponse:
        from google.genai import types

        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=[user_prompt],
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                temperature=temperature,
                max_output_tokens=max_tokens,
                response_mime_type="application/json",
            ),
        )

        usage = getattr(response, "usage_metadata", None)
        return LLMResponse(
            text=(response.text or "").strip(),
            model=self.model,
            provider=self.provider_name,
            tokens_used=getattr(usage, "total_token_count", None),
        )


class GroqProvider(BaseLLMProvider):
    """
    Groq con JSON mode (response_format json_object).

    JSON mode exige que el prompt mencione JSON; los prompts del
    explicador lo hacen.
    """

    provider_name = "groq"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        from groq import AsyncGroq

        settings = get_settings()
        super().__init__(
            model=model or settings.groq_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )
        api_key = api_key or settings.groq_api_key
        if not api_key:
            raise ValueError("GROQ_API_KEY no configurada")

        self.client = AsyncGroq(api_key=api_key)
        logger.info("GroqProvider inicializado", model=self.model)

    async def _generate_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> LLMResponse:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
        )

        text = response.choices[0].message.content or ""
        return LLMResponse(
            text=text.strip(),
            model=self.model,
            provider=self.provider_name,
            tokens_used=response.usage.total_tokens if response.usage else None,
        )


PROVIDERS: dict[str, type[BaseLLMProvider]] = {
    GroqProvider.provider_name: GroqProvider,
    GeminiProvider.provider_name: GeminiProvider,
}


def get_llm_provider(
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> BaseLLMProvider:
    """
    Proveedor configurado para el explicador.

    Args:
        provider: 'gemini' o 'groq' (default: settings.llm_provider)
        api_key: Default: la key del provider en settings
        model: Default: el modelo del provider en settings

    Raises:
        ValueError: Proveedor desconocido o sin API key
    """
    name = (provider or get_settings().llm_provider).lower()
    provider_class = PROVIDERS.get(name)
    if provider_class is None:
        raise ValueError(f"Proveedor LLM no soportado: {name}. Usar 'gemini' o 'groq'")
    return provider_class(api_key=api_key, model=model)
