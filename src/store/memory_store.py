"""In-process entity store.

This store keeps schemas and entities in memory behind one lock. It
honors the same contract as the Postgres backend (active schema lookup,
payload validation, id and slug uniqueness) and backs tests and
embedded SDK use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
import threading
from typing import Any, Mapping
from uuid import UUID, uuid4

from core.errors import (
    EntityAlreadyExistsError,
    SchemaNotFoundError,
    SeedStoreError,
)
from core.types import CreateEntityParams, EntityRecord, SchemaRecord
from store.schema_validation import PayloadValidator
from store.slug_rules import normalize_slug


@dataclass
class _EntityTable:
    by_id: dict[UUID, EntityRecord] = field(default_factory=dict)
    slugs: set[str] = field(default_factory=set)


class InMemoryEntityStore:
    """Thread-safe entity store held in process memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._schemas: dict[str, SchemaRecord] = {}
        self._tables: dict[str, _EntityTable] = {}
        self.close_calls = 0

    def register_schema(
        self,
        table_name: str,
        definition: Mapping[str, Any],
        schema_version: str = "1.0.0",
    ) -> SchemaRecord:
        """Register a schema and make it the active one for a table."""
        schema = SchemaRecord(
            schema_id=uuid4(),
            table_name=table_name,
            schema_version=schema_version,
            definition=dict(definition),
        )
        with self._lock:
            self._schemas[table_name] = schema
            self._tables.setdefault(table_name, _EntityTable())
        return schema

    def resolve_active_schema(self, table_name: str) -> SchemaRecord:
        """Return the active schema for a table.

        Raises:
            SchemaNotFoundError: If no schema was registered.
        """
        with self._lock:
            schema = self._schemas.get(table_name)
        if schema is None:
            raise SchemaNotFoundError(
                f"No active schema for table '{table_name}'. Register a schema first."
            )
        return schema

    def new_entity_writer(self, schema: SchemaRecord) -> "InMemoryEntityWriter":
        return InMemoryEntityWriter(self, schema, PayloadValidator(schema.definition))

    def normalize_slug(self, candidate: str) -> str:
        return normalize_slug(candidate)

    def entities(self, table_name: str) -> list[EntityRecord]:
        """Return a copy of the entities stored in a table."""
        with self._lock:
            table = self._tables.get(table_name)
            return list(table.by_id.values()) if table else []

    def close(self) -> None:
        self.close_calls += 1

    def insert_validated(
        self,
        schema: SchemaRecord,
        params: CreateEntityParams,
        payload: Any,
    ) -> EntityRecord:
        """Insert a validated entity, enforcing id and slug uniqueness."""
        with self._lock:
            table = self._tables.get(schema.table_name)
            if table is None:
                raise SeedStoreError(f"Entity table '{schema.table_name}' does not exist.")
            if params.entity_id in table.by_id:
                raise EntityAlreadyExistsError(
                    f"Entity {params.entity_id} already exists in '{schema.table_name}'."
                )
            if params.slug in table.slugs:
                raise EntityAlreadyExistsError(
                    f"Slug '{params.slug}' already exists in '{schema.table_name}'."
                )
            record = EntityRecord(
                entity_id=params.entity_id,
                slug=params.slug,
                schema_id=schema.schema_id,
                payload=payload,
                created_at=datetime.now(timezone.utc),
            )
            table.by_id[params.entity_id] = record
            table.slugs.add(params.slug)
            return record


class InMemoryEntityWriter:
    """Writer bound to one schema of an in-memory store."""

    def __init__(
        self,
        store: InMemoryEntityStore,
        schema: SchemaRecord,
        validator: PayloadValidator,
    ) -> None:
        self._store = store
        self._schema = schema
        self._validator = validator

    def create_entity(self, params: CreateEntityParams) -> EntityRecord:
        """Validate and insert one entity.

        Raises:
            EntityAlreadyExistsError: If the id or slug is taken.
            SchemaValidationError: If the payload violates the schema.
            InvalidSlugError: If the slug is not canonical.
        """
        slug = normalize_slug(params.slug)
        try:
            payload = json.loads(params.payload)
        except json.JSONDecodeError as error:
            raise SeedStoreError(f"Entity payload is not valid JSON: {error.msg}.") from error
        self._validator.validate(payload)
        canonical = CreateEntityParams(
            entity_id=params.entity_id, slug=slug, payload=params.payload
        )
        return self._store.insert_validated(self._schema, canonical, payload)
