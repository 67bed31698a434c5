"""
Cliente de Supabase.

Singleton para conexión a la base de datos.
"""

from functools import lru_cache
from typing import Optional

import structlog
from supabase import create_client, Client

from hemmatch.config import get_settings

logger = structlog.get_logger()


class SupabaseClient:
    """Wrapper del cliente de Supabase con métodos de utilidad."""

    def __init__(self, client: Client):
        self._client = client

    @property
    def client(self) -> Client:
        """Acceso directo al cliente de Supabase."""
        return self._client

    def table(self, name: str):
        """Acceso a una tabla específica."""
        return self._client.table(name)

    def execute(self, query, operation: str, **context):
        """
        Ejecuta un query builder y loguea el error antes de propagarlo.

        Args:
            query: Query builder de postgrest listo para .execute()
            operation: Nombre de la operación (para logs)

        Returns:
            Respuesta de postgrest
        """
        try:
            return query.execute()
        except Exception as e:
            logger.error(
                "Error ejecutando query",
                operation=operation,
                error=str(e),
                **context,
            )
            raise


@lru_cache
def get_supabase_client() -> SupabaseClient:
    """
    Obtiene el cliente de Supabase (singleton cacheado).

    Returns:
        SupabaseClient configurado

    Raises:
        ValueError: Si las credenciales no están configuradas
    """
    settings = get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        raise ValueError(
            "SUPABASE_URL y SUPABASE_KEY son requeridos. "
            "Configura las variables de entorno."
        )

    # Usar service key si está disponible para operaciones admin
    key: Optional[str] = settings.supabase_service_key or settings.supabase_key

    client = create_client(settings.supabase_url, key)
    logger.info("Cliente de Supabase inicializado", url=settings.supabase_url)

    return SupabaseClient(client)
