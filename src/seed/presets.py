"""Built-in dataset presets.

A preset pairs a record strategy with the table it seeds by default.
Namespaces are built when a preset is requested so each caller owns its
strategy values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from core.errors import SeedConfigError
from seed.extractors import (
    mtg_card_key,
    mtg_set_key,
    pokemon_card_key,
    pokemon_card_slug_source,
    pokemon_set_key,
    public_id_entity_id,
)
from seed.strategy import RecordStrategy, allow_list_fields, drop_fields, namespace_from_seed

POKEMON_CARD_FIELDS = (
    "abilities",
    "ancientTrait",
    "artist",
    "attacks",
    "cId",
    "convertedRetreatCost",
    "evolvesFrom",
    "evolvesTo",
    "flavorText",
    "hp",
    "images",
    "lang",
    "legalities",
    "level",
    "name",
    "nationalPokedexNumbers",
    "number",
    "oracleId",
    "path",
    "rarity",
    "regulationMark",
    "resistances",
    "retreatCost",
    "rules",
    "sId",
    "subtypes",
    "supertype",
    "tcgLandPublicId",
    "tcgPlayerIds",
    "types",
    "weaknesses",
)
POKEMON_SET_LEGACY_FIELDS = ("total", "updatedAt")
MTG_SET_FIELDS = ("id", "name", "path", "numberCardsInSet")


@dataclass(frozen=True)
class DatasetPreset:
    """Strategy and default table for one dataset.

    Attributes:
        name: Preset name used on the command line.
        table_name: Default target table.
        description: One-line summary for listings.
        strategy: Record strategy for the dataset.
    """

    name: str
    table_name: str
    description: str
    strategy: RecordStrategy


def _pokemon_sets() -> DatasetPreset:
    return DatasetPreset(
        name="pkm-sets",
        table_name="pkm_sets",
        description="Pokemon TCG sets keyed by set id",
        strategy=RecordStrategy(
            key=pokemon_set_key,
            mutate=drop_fields(POKEMON_SET_LEGACY_FIELDS),
            namespace=namespace_from_seed("palmyra-pkm-sets"),
        ),
    )


def _pokemon_cards() -> DatasetPreset:
    return DatasetPreset(
        name="pkm-cards",
        table_name="pkm_cards",
        description="Pokemon TCG cards keyed by public id",
        strategy=RecordStrategy(
            key=pokemon_card_key,
            mutate=allow_list_fields(POKEMON_CARD_FIELDS),
            slug_source=pokemon_card_slug_source,
            entity_id=public_id_entity_id(namespace_from_seed("palmyra-pkm-cards-entity")),
        ),
    )


def _mtg_sets() -> DatasetPreset:
    return DatasetPreset(
        name="mtg-sets",
        table_name="mtg_sets",
        description="Magic sets keyed by set id",
        strategy=RecordStrategy(
            key=mtg_set_key,
            mutate=allow_list_fields(MTG_SET_FIELDS),
            namespace=namespace_from_seed("palmyra-mtg-sets"),
        ),
    )


def _mtg_cards() -> DatasetPreset:
    return DatasetPreset(
        name="mtg-cards",
        table_name="mtg_cards",
        description="Magic cards keyed by set and card id",
        strategy=RecordStrategy(
            key=mtg_card_key,
            namespace=namespace_from_seed("palmyra-mtg-cards"),
        ),
    )


_PRESET_FACTORIES: dict[str, Callable[[], DatasetPreset]] = {
    "pkm-sets": _pokemon_sets,
    "pkm-cards": _pokemon_cards,
    "mtg-sets": _mtg_sets,
    "mtg-cards": _mtg_cards,
}


def available_presets() -> tuple[str, ...]:
    """Return preset names in sorted order."""
    return tuple(sorted(_PRESET_FACTORIES))


def get_preset(name: str) -> DatasetPreset:
    """Build a dataset preset by name.

    Raises:
        SeedConfigError: If the name is unknown.
    """
    factory = _PRESET_FACTORIES.get(name)
    if factory is None:
        supported = ", ".join(available_presets())
        raise SeedConfigError(f"Unknown dataset '{name}'. Supported datasets: {supported}.")
    return factory()
