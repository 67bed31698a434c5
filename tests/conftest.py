"""Fixtures compartidas: features de ejemplo y cliente Supabase simulado."""

from unittest.mock import MagicMock

import pytest

from hemmatch.database import SupabaseClient
from hemmatch.models import FeatureDefinition, FeatureType


def make_supabase_client(data=None) -> tuple[SupabaseClient, MagicMock]:
    """
    Construye un SupabaseClient sobre un mock de postgrest.

    Todos los métodos del query builder devuelven el mismo mock,
    y execute() devuelve una respuesta con `data`.
    """
    query = MagicMock()
    for method in ("select", "eq", "limit", "delete", "insert", "update", "order"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data if data is not None else [])

    raw = MagicMock()
    raw.table.return_value = query
    return SupabaseClient(raw), query


@pytest.fixture()
def features() -> list[FeatureDefinition]:
    return [
        FeatureDefinition(id="balcony", label="Balkong", type=FeatureType.BOOLEAN),
        FeatureDefinition(id="elevator", label="Hiss", type=FeatureType.BOOLEAN),
        FeatureDefinition(
            id="rooms", label="Antal rum", type=FeatureType.NUMBER, min_value=1, max_value=11
        ),
        FeatureDefinition(id="score", label="Läge", type=FeatureType.NUMBER),
        FeatureDefinition(
            id="heating",
            label="Uppvärmning",
            type=FeatureType.SELECT,
            options=["fjärrvärme", "bergvärme", "el"],
        ),
    ]


@pytest.fixture()
def supabase_factory():
    return make_supabase_client
