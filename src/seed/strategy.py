"""Pluggable record strategies.

A strategy bundles the dataset-specific functions that trim a payload
and derive its key, slug source, and entity id. It is selected once per
run and shared read-only by every worker, so its functions must not
mutate shared state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, cast
from uuid import NAMESPACE_URL, UUID, uuid5

from core.errors import SeedConfigError
from seed.payload import RecordPayload

KeyFunc = Callable[[RecordPayload], str]
MutateFunc = Callable[[RecordPayload], list[str]]
SlugSourceFunc = Callable[[RecordPayload], str]
EntityIdFunc = Callable[[RecordPayload, str], UUID]


@dataclass(frozen=True)
class RecordStrategy:
    """Dataset-specific derivation functions.

    Functions run per record in this order: ``mutate``, ``key``,
    ``slug_source``, ``entity_id``.

    Attributes:
        key: Derives the stable record key. Required.
        mutate: Trims the payload in place and returns removed field names.
        slug_source: Derives slug text; the key is used when absent.
        entity_id: Derives the entity id from payload and key.
        namespace: Seed for version-5 ids when ``entity_id`` is absent.
    """

    key: KeyFunc | None
    mutate: MutateFunc | None = None
    slug_source: SlugSourceFunc | None = None
    entity_id: EntityIdFunc | None = None
    namespace: UUID | None = None

    def validate(self) -> None:
        """Check the strategy is complete before any I/O happens.

        Raises:
            SeedConfigError: If the key extractor is missing, or if not
                exactly one entity id source is configured.
        """
        if self.key is None:
            raise SeedConfigError(
                "Record strategy has no key extractor. Configure a key function."
            )
        if self.entity_id is None and self.namespace is None:
            raise SeedConfigError(
                "Record strategy needs an entity id source: "
                "configure either an entity id function or a uuid namespace."
            )
        if self.entity_id is not None and self.namespace is not None:
            raise SeedConfigError(
                "Record strategy configures both an entity id function and a uuid "
                "namespace. Keep exactly one."
            )

    def derive_key(self, payload: RecordPayload) -> str:
        """Return the record key for a mutated payload."""
        key_func = cast(KeyFunc, self.key)
        return key_func(payload)

    def derive_slug_source(self, payload: RecordPayload, key: str) -> str:
        """Return the text to slugify, falling back to the key."""
        if self.slug_source is None:
            return key
        return self.slug_source(payload)

    def derive_entity_id(self, payload: RecordPayload, key: str) -> UUID:
        """Return a stable entity id for the record.

        Without an entity id function the id is ``uuid5(namespace, key)``,
        so the same key always maps to the same id.
        """
        if self.entity_id is not None:
            return self.entity_id(payload, key)
        return uuid5(cast(UUID, self.namespace), key)


def namespace_from_seed(seed: str) -> UUID:
    """Build a dataset namespace from a fixed seed string."""
    return uuid5(NAMESPACE_URL, seed)


def allow_list_fields(allowed: Iterable[str]) -> MutateFunc:
    """Build a mutator that keeps only the allowed top-level fields.

    Args:
        allowed: Field names to keep.

    Returns:
        Mutator deleting every other field and returning its names.
    """
    allowed_fields = frozenset(allowed)

    def mutate(payload: RecordPayload) -> list[str]:
        removed = [name for name in payload if name not in allowed_fields]
        for name in removed:
            del payload[name]
        return removed

    return mutate


def drop_fields(fields: Iterable[str]) -> MutateFunc:
    """Build a mutator that deletes the named fields when present."""
    dropped_fields = tuple(fields)

    def mutate(payload: RecordPayload) -> list[str]:
        removed: list[str] = []
        for name in dropped_fields:
            if name in payload:
                del payload[name]
                removed.append(name)
        return removed

    return mutate
