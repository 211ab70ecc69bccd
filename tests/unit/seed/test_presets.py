"""Unit tests for built-in dataset presets and extractors."""

from __future__ import annotations

from uuid import NAMESPACE_URL, uuid5

import pytest

from core.errors import MissingFieldError, SeedConfigError
from seed.extractors import mtg_card_key, pokemon_card_slug_source
from seed.presets import available_presets, get_preset


def test_available_presets_lists_all_datasets() -> None:
    """All four card datasets should be registered."""
    assert available_presets() == ("mtg-cards", "mtg-sets", "pkm-cards", "pkm-sets")


@pytest.mark.parametrize("name", ["mtg-cards", "mtg-sets", "pkm-cards", "pkm-sets"])
def test_every_preset_strategy_is_valid(name: str) -> None:
    """Preset strategies should pass start-up validation."""
    preset = get_preset(name)
    preset.strategy.validate()

    assert preset.table_name == name.replace("-", "_")


def test_get_preset_rejects_unknown_name() -> None:
    """Unknown dataset names should be configuration errors."""
    with pytest.raises(SeedConfigError):
        get_preset("yugioh-cards")


def test_pokemon_sets_drop_legacy_fields_and_use_set_namespace() -> None:
    """Legacy set fields should be removed and ids derived from the set id."""
    strategy = get_preset("pkm-sets").strategy
    payload = {"id": "base1", "name": "Base", "total": 102, "updatedAt": "2020"}

    removed = strategy.mutate(payload)
    key = strategy.derive_key(payload)

    assert sorted(removed) == ["total", "updatedAt"] and payload == {"id": "base1", "name": "Base"}
    assert strategy.derive_entity_id(payload, key) == uuid5(
        uuid5(NAMESPACE_URL, "palmyra-pkm-sets"), "base1"
    )


def test_pokemon_cards_allow_list_and_entity_id() -> None:
    """Card payloads should keep allowed fields and hash the public id."""
    strategy = get_preset("pkm-cards").strategy
    payload = {"tcgLandPublicId": "PKM-0001", "name": "Charizard", "prices": {"usd": 100}}

    removed = strategy.mutate(payload)
    key = strategy.derive_key(payload)

    assert removed == ["prices"] and key == "PKM-0001"
    assert strategy.derive_entity_id(payload, key) == uuid5(
        uuid5(NAMESPACE_URL, "palmyra-pkm-cards-entity"), "PKM-0001"
    )


def test_pokemon_card_slug_source_joins_identifying_fields() -> None:
    """Slug text should join present fields then the player ids."""
    payload = {
        "tcgLandPublicId": "PKM-0001",
        "sId": "base1",
        "cId": "4",
        "lang": "",
        "number": 4,
        "name": "Charizard",
        "tcgPlayerIds": [42382, "alt"],
    }

    assert pokemon_card_slug_source(payload) == "PKM-0001-base1-4-Charizard-42382-alt"


def test_mtg_sets_allow_list_fields() -> None:
    """Magic sets should keep only the set summary fields."""
    strategy = get_preset("mtg-sets").strategy
    payload = {"id": "lea", "name": "Alpha", "path": "/lea", "numberCardsInSet": 295, "icon": "x"}

    removed = strategy.mutate(payload)

    assert removed == ["icon"] and set(payload) == {"id", "name", "path", "numberCardsInSet"}


def test_mtg_card_key_joins_set_and_card_ids() -> None:
    """Magic card keys should combine set and card ids."""
    assert mtg_card_key({"sId": "lea", "cId": "161"}) == "lea-161"
    with pytest.raises(MissingFieldError):
        mtg_card_key({"sId": "lea"})


def test_presets_are_built_fresh_per_call() -> None:
    """Each request should return an independent but equivalent strategy."""
    first = get_preset("mtg-cards")
    second = get_preset("mtg-cards")

    assert first is not second and first.strategy.namespace == second.strategy.namespace
