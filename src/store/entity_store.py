"""Entity store contracts and backend selection.

The seed pipeline talks to persistence only through these protocols.
Backends resolve a table's active schema, hand out schema-bound writers,
and own the slug canonicalization rule.
"""

from __future__ import annotations

from typing import Callable, Protocol
from urllib.parse import urlsplit

from core.constants import POSTGRES_URL_SCHEMES
from core.errors import SeedConfigError
from core.types import CreateEntityParams, EntityRecord, SchemaRecord


class EntityWriter(Protocol):
    """Schema-bound entity writer."""

    def create_entity(self, params: CreateEntityParams) -> EntityRecord:
        """Insert one entity atomically.

        Raises:
            EntityAlreadyExistsError: If the id or slug is already taken.
            SeedStoreError: For any other store failure.
        """
        ...


class EntityStore(Protocol):
    """Connection-pool-backed entity store."""

    def resolve_active_schema(self, table_name: str) -> SchemaRecord: ...

    def new_entity_writer(self, schema: SchemaRecord) -> EntityWriter: ...

    def normalize_slug(self, candidate: str) -> str: ...

    def close(self) -> None: ...


StoreOpener = Callable[[str], EntityStore]


def open_entity_store(connection_string: str, max_connections: int | None = None) -> EntityStore:
    """Open an entity store for a connection string.

    Args:
        connection_string: ``postgres://`` or ``postgresql://`` URL.
        max_connections: Optional pool size upper bound.

    Returns:
        Opened entity store; callers must ``close()`` it.

    Raises:
        SeedConfigError: If the URL scheme is unsupported.
        SeedStoreError: If the backend cannot connect.
    """
    scheme = urlsplit(connection_string).scheme.lower()
    if scheme in POSTGRES_URL_SCHEMES:
        from store.postgres_store import PostgresEntityStore

        return PostgresEntityStore.connect(connection_string, max_connections=max_connections)
    raise SeedConfigError(
        f"Unsupported database url scheme '{scheme or '<none>'}'. "
        "Use a postgres:// or postgresql:// connection string."
    )
