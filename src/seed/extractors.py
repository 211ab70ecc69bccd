"""Key, slug, and id extractors for the built-in card datasets."""

from __future__ import annotations

from typing import Callable
from uuid import UUID, uuid5

from seed.payload import RecordPayload, id_list, optional_string, require_string

POKEMON_CARD_SLUG_FIELDS = (
    "tcgLandPublicId",
    "sId",
    "cId",
    "lang",
    "number",
    "name",
    "oracleId",
)
POKEMON_CARD_EXTERNAL_IDS_FIELD = "tcgPlayerIds"


def pokemon_card_key(payload: RecordPayload) -> str:
    return require_string(payload, "tcgLandPublicId")


def pokemon_set_key(payload: RecordPayload) -> str:
    return require_string(payload, "id")


def mtg_set_key(payload: RecordPayload) -> str:
    return require_string(payload, "id")


def mtg_card_key(payload: RecordPayload) -> str:
    """Return ``<set id>-<card id>`` for a Magic card."""
    set_id = require_string(payload, "sId")
    card_id = require_string(payload, "cId")
    return f"{set_id}-{card_id}"


def pokemon_card_slug_source(payload: RecordPayload) -> str:
    """Join identifying card fields into slug text.

    Missing or empty fields are left out. External player ids are joined
    with dashes and appended as one trailing part.
    """
    parts = [
        value
        for value in (optional_string(payload, name) for name in POKEMON_CARD_SLUG_FIELDS)
        if value is not None
    ]
    external_ids = id_list(payload, POKEMON_CARD_EXTERNAL_IDS_FIELD)
    if external_ids:
        parts.append("-".join(external_ids))
    return "-".join(parts)


def public_id_entity_id(namespace: UUID) -> Callable[[RecordPayload, str], UUID]:
    """Build an entity id function hashing ``tcgLandPublicId`` in a namespace."""

    def entity_id(payload: RecordPayload, _key: str) -> UUID:
        return uuid5(namespace, require_string(payload, "tcgLandPublicId"))

    return entity_id
