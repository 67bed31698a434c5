"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hemmatch.scoring.engine import ScoringPolicy

# config.py -> hemmatch/ -> src/ -> raíz del proyecto (donde está el .env)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase
    supabase_url: str = Field(..., description="URL del proyecto Supabase")
    supabase_key: str = Field(..., description="Anon key de Supabase")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key para operaciones admin"
    )

    # LLM Provider
    llm_provider: str = Field(
        "groq",
        description="Proveedor de LLM a usar: 'gemini' o 'groq'"
    )

    # Gemini
    gemini_api_key: Optional[str] = Field(None, description="API key de Google Gemini")
    gemini_model: str = Field("gemini-2.0-flash", description="Modelo de Gemini a usar")

    # Groq
    groq_api_key: Optional[str] = Field(None, description="API key de Groq")
    groq_model: str = Field(
        "llama-3.1-8b-instant",
        description="Modelo de Groq a usar (llama-3.1-8b-instant, llama-3.3-70b-versatile)"
    )

    # Explicaciones (respuesta JSON corta)
    llm_temperature: float = Field(0.3, ge=0.0, le=2.0, description="Temperatura del explicador")
    llm_max_tokens: int = Field(400, gt=0, description="Máximo de tokens por explicación")

    # Scoring
    numeric_match_threshold: float = Field(
        0.7,
        ge=0.0,
        le=1.0,
        description="Similitud mínima para considerar 'matched' una preferencia numérica",
    )
    numeric_tolerance_fraction: float = Field(
        0.5,
        gt=0.0,
        description="Fracción del rango de la feature a partir de la cual el match numérico es 0",
    )
    importance_weight: int = Field(
        10, gt=0, description="Puntos por cada nivel de importancia"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")

    def scoring_policy(self) -> ScoringPolicy:
        """Construye la política de scoring a partir de la configuración."""
        return ScoringPolicy(
            numeric_match_threshold=self.numeric_match_threshold,
            numeric_tolerance_fraction=self.numeric_tolerance_fraction,
            importance_weight=self.importance_weight,
        )


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()
