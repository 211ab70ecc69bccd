"""PostgreSQL entity store backed by a psycopg connection pool.

Expected layout (created by the platform's migrations, not by Seedkit):

    schema_repository(schema_id uuid, table_name text, schema_version text,
                      schema_definition jsonb, is_active boolean,
                      created_at timestamptz)
    <entity table>(entity_id uuid primary key, slug text unique not null,
                   schema_id uuid not null, payload jsonb not null,
                   created_at timestamptz default now())

Each insert runs in its own transaction and uses ON CONFLICT DO NOTHING,
so a duplicate id or slug is reported as EntityAlreadyExistsError.
"""

from __future__ import annotations

import json
import re
from typing import Any

import psycopg
from psycopg import sql
from psycopg_pool import ConnectionPool, PoolTimeout

from core.constants import (
    DEFAULT_POOL_MIN_SIZE,
    POOL_SIZE_HEADROOM,
    SCHEMA_REPOSITORY_TABLE,
    TABLE_NAME_PATTERN,
)
from core.errors import (
    EntityAlreadyExistsError,
    SchemaNotFoundError,
    SeedConfigError,
    SeedStoreError,
)
from core.logging_config import get_logger
from core.types import CreateEntityParams, EntityRecord, SchemaRecord
from store.schema_validation import PayloadValidator
from store.slug_rules import normalize_slug

_LOGGER = get_logger(__name__)
_TABLE_NAME_RE = re.compile(TABLE_NAME_PATTERN)
_CONNECT_TIMEOUT_SECONDS = 10.0


class PostgresEntityStore:
    """Entity store over a shared psycopg connection pool."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def connect(
        cls,
        connection_string: str,
        max_connections: int | None = None,
    ) -> "PostgresEntityStore":
        """Open a connection pool and wait until it can serve connections.

        Args:
            connection_string: libpq connection URL.
            max_connections: Expected concurrent writers; the pool adds headroom.

        Returns:
            Connected store.

        Raises:
            SeedStoreError: If the database is unreachable.
        """
        max_size = (max_connections or DEFAULT_POOL_MIN_SIZE) + POOL_SIZE_HEADROOM
        pool = ConnectionPool(
            conninfo=connection_string,
            min_size=DEFAULT_POOL_MIN_SIZE,
            max_size=max_size,
            open=False,
        )
        try:
            pool.open(wait=True, timeout=_CONNECT_TIMEOUT_SECONDS)
        except (PoolTimeout, psycopg.Error) as error:
            pool.close()
            raise SeedStoreError(
                f"Failed to connect to PostgreSQL: {error}. "
                "Check the database url and that the server is reachable."
            ) from error
        _LOGGER.info("entity_store_opened", backend="postgres", max_connections=max_size)
        return cls(pool)

    def resolve_active_schema(self, table_name: str) -> SchemaRecord:
        """Return the active schema row for a table.

        Raises:
            SchemaNotFoundError: If the table has no active schema.
            SeedStoreError: If the lookup fails.
        """
        _validate_table_name(table_name)
        query = sql.SQL(
            "SELECT schema_id, table_name, schema_version, schema_definition "
            "FROM {} WHERE table_name = %s AND is_active "
            "ORDER BY created_at DESC LIMIT 1"
        ).format(sql.Identifier(SCHEMA_REPOSITORY_TABLE))
        try:
            with self._pool.connection() as conn:
                row = conn.execute(query, (table_name,)).fetchone()
        except psycopg.Error as error:
            raise SeedStoreError(
                f"Failed to resolve schema for table '{table_name}': {error}."
            ) from error
        if row is None:
            raise SchemaNotFoundError(
                f"No active schema for table '{table_name}'. "
                "Publish a schema for the table before seeding."
            )
        return SchemaRecord(
            schema_id=row[0],
            table_name=str(row[1]),
            schema_version=str(row[2]),
            definition=_as_mapping(row[3]),
        )

    def new_entity_writer(self, schema: SchemaRecord) -> "PostgresEntityWriter":
        _validate_table_name(schema.table_name)
        return PostgresEntityWriter(self._pool, schema, PayloadValidator(schema.definition))

    def normalize_slug(self, candidate: str) -> str:
        return normalize_slug(candidate)

    def close(self) -> None:
        self._pool.close()
        _LOGGER.info("entity_store_closed", backend="postgres")


class PostgresEntityWriter:
    """Writer bound to one schema and entity table."""

    def __init__(self, pool: ConnectionPool, schema: SchemaRecord, validator: PayloadValidator):
        self._pool = pool
        self._schema = schema
        self._validator = validator
        self._insert_query = sql.SQL(
            "INSERT INTO {} (entity_id, slug, schema_id, payload) "
            "VALUES (%s, %s, %s, %s::jsonb) "
            "ON CONFLICT DO NOTHING "
            "RETURNING created_at"
        ).format(sql.Identifier(schema.table_name))

    def create_entity(self, params: CreateEntityParams) -> EntityRecord:
        """Validate and insert one entity in its own transaction.

        Raises:
            EntityAlreadyExistsError: If the id or slug is taken.
            SchemaValidationError: If the payload violates the schema.
            InvalidSlugError: If the slug is not canonical.
            SeedStoreError: For database failures.
        """
        slug = normalize_slug(params.slug)
        payload_text = params.payload.decode("utf-8")
        try:
            payload = json.loads(payload_text)
        except json.JSONDecodeError as error:
            raise SeedStoreError(f"Entity payload is not valid JSON: {error.msg}.") from error
        self._validator.validate(payload)
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    self._insert_query,
                    (params.entity_id, slug, self._schema.schema_id, payload_text),
                ).fetchone()
        except psycopg.Error as error:
            raise SeedStoreError(
                f"Failed to insert entity {params.entity_id} into "
                f"'{self._schema.table_name}': {error}."
            ) from error
        if row is None:
            raise EntityAlreadyExistsError(
                f"Entity {params.entity_id} or slug '{slug}' already exists in "
                f"'{self._schema.table_name}'."
            )
        return EntityRecord(
            entity_id=params.entity_id,
            slug=slug,
            schema_id=self._schema.schema_id,
            payload=payload,
            created_at=row[0],
        )


def _validate_table_name(table_name: str) -> None:
    if not _TABLE_NAME_RE.match(table_name):
        raise SeedConfigError(
            f"Invalid table name '{table_name}': use lower-case letters, digits, "
            "and underscores."
        )


def _as_mapping(raw_definition: Any) -> dict[str, Any]:
    """Return a schema definition column as a dictionary."""
    definition = json.loads(raw_definition) if isinstance(raw_definition, str) else raw_definition
    if not isinstance(definition, dict):
        raise SeedStoreError("Active schema definition is not a JSON object.")
    return definition
