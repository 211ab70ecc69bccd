"""Unit tests for entity store selection."""

from __future__ import annotations

import pytest

from core.errors import SeedConfigError
from store.entity_store import open_entity_store


@pytest.mark.parametrize("url", ["mysql://localhost/db", "", "catalog.db"])
def test_open_entity_store_rejects_unsupported_schemes(url: str) -> None:
    """Only PostgreSQL connection strings are supported."""
    with pytest.raises(SeedConfigError):
        open_entity_store(url)


def test_open_entity_store_connects_postgres(monkeypatch: pytest.MonkeyPatch) -> None:
    """PostgreSQL urls should be routed to the pooled store."""
    from store import postgres_store

    captured: dict[str, object] = {}

    def _fake_connect(cls, connection_string, max_connections=None):
        captured["url"] = connection_string
        captured["max_connections"] = max_connections
        return "store"

    monkeypatch.setattr(
        postgres_store.PostgresEntityStore, "connect", classmethod(_fake_connect)
    )

    store = open_entity_store("postgresql://seed@localhost/catalog", max_connections=4)

    assert store == "store" and captured == {
        "url": "postgresql://seed@localhost/catalog",
        "max_connections": 4,
    }
