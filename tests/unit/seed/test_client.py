"""Unit tests for the seed SDK client."""

from __future__ import annotations

import pytest

from core.config import SeedConfig
from core.errors import SeedConfigError
from seed.client import SeedClient
from tests.fixture_paths import fixture_path
from tests.store_helpers import memory_store, store_opener


def _config(database_url: str | None = "memory://catalog", concurrency: int | None = 2) -> SeedConfig:
    return SeedConfig(
        database_url=database_url,
        concurrency=concurrency,
        max_line_bytes=4096,
        s3_region=None,
        s3_profile=None,
    )


def test_seed_dataset_uses_preset_table_and_config_defaults() -> None:
    """Preset seeding should target the preset table and trim fields."""
    store = memory_store("pkm_sets")
    client = SeedClient(_config(), store_opener=store_opener(store))

    stats = client.seed_dataset("pkm-sets", str(fixture_path("seed/pkm_sets.jsonl")))

    assert (stats.processed, stats.skipped) == (2, 0)
    assert stats.ignored_field_counts == {"total": 2, "updatedAt": 1}
    assert sorted(entity.slug for entity in store.entities("pkm_sets")) == ["base1", "jungle"]


def test_seed_dataset_honors_table_override() -> None:
    """An explicit table should replace the preset default."""
    store = memory_store("staging_cards")
    client = SeedClient(_config(), store_opener=store_opener(store))

    stats = client.seed_dataset(
        "pkm-cards",
        str(fixture_path("seed/pkm_cards.jsonl")),
        table_name="staging_cards",
        concurrency=1,
    )
    entity = store.entities("staging_cards")[0]

    assert stats.processed == 1
    assert entity.slug == "pkm-0001-base1-4-en-4-charizard-42382-alt"
    assert "prices" not in entity.payload and entity.payload["hp"] == "120"


def test_seed_dataset_without_database_url_fails() -> None:
    """A missing connection string should be a configuration error."""
    client = SeedClient(_config(database_url=None), store_opener=store_opener(memory_store("x")))

    with pytest.raises(SeedConfigError):
        client.seed_dataset("mtg-sets", str(fixture_path("seed/pkm_sets.jsonl")))


def test_datasets_returns_presets_in_name_order() -> None:
    """The client should expose preset metadata."""
    client = SeedClient(_config())

    assert [preset.name for preset in client.datasets()] == [
        "mtg-cards",
        "mtg-sets",
        "pkm-cards",
        "pkm-sets",
    ]
