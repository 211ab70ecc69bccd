"""Shared typed models.

This module defines immutable data models used by the seed pipeline,
the store adapters, and the CLI to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping
from uuid import UUID

from core.constants import DEFAULT_MAX_LINE_BYTES, DEFAULT_PROGRESS_INTERVAL

if TYPE_CHECKING:
    from seed.strategy import RecordStrategy


@dataclass(frozen=True)
class SeedJob:
    """One raw input line awaiting processing.

    Attributes:
        line_number: One-based line number in reader order.
        raw: Line bytes without the trailing newline.
    """

    line_number: int
    raw: bytes


@dataclass(frozen=True)
class DerivedIdentity:
    """Identity computed for a record before persistence.

    Attributes:
        key: Stable non-empty record key.
        slug: Canonical URL-safe slug.
        entity_id: Stable 128-bit entity identifier.
    """

    key: str
    slug: str
    entity_id: UUID


@dataclass(frozen=True)
class SeedStats:
    """Final statistics of one seed run.

    Attributes:
        processed: Records inserted.
        skipped: Records already present in the store.
        ignored_field_counts: Removed field name to occurrence count.
    """

    processed: int
    skipped: int
    ignored_field_counts: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class SchemaRecord:
    """Active schema resolved for a target table.

    Attributes:
        schema_id: Store identifier of the schema row.
        table_name: Entity table governed by the schema.
        schema_version: Human-readable schema version label.
        definition: JSON Schema document for payload validation.
    """

    schema_id: UUID
    table_name: str
    schema_version: str
    definition: Mapping[str, Any]


@dataclass(frozen=True)
class CreateEntityParams:
    """Insert request for one entity.

    Attributes:
        entity_id: Stable entity identifier.
        slug: Candidate slug, canonicalized by the store.
        payload: JSON-encoded record payload.
    """

    entity_id: UUID
    slug: str
    payload: bytes


@dataclass(frozen=True)
class EntityRecord:
    """Entity row persisted by a store.

    Attributes:
        entity_id: Stable entity identifier.
        slug: Canonical slug.
        schema_id: Schema the payload was validated against.
        payload: Decoded JSON payload.
        created_at: UTC creation timestamp.
    """

    entity_id: UUID
    slug: str
    schema_id: UUID
    payload: Mapping[str, Any]
    created_at: datetime


@dataclass(frozen=True)
class SeedOptions:
    """Options for one seed run.

    Attributes:
        input_path: Local JSONL path or ``s3://bucket/key`` object.
        table_name: Target entity table.
        database_url: Store connection string.
        strategy: Record strategy shared read-only by all workers.
        concurrency: Worker count; ``None`` uses available CPUs.
        queue_capacity: Job queue bound; ``None`` uses twice the concurrency.
        max_line_bytes: Maximum accepted input line length.
        progress_interval: Processed-record interval between progress events.
    """

    input_path: str
    table_name: str
    database_url: str
    strategy: "RecordStrategy"
    concurrency: int | None = None
    queue_capacity: int | None = None
    max_line_bytes: int = DEFAULT_MAX_LINE_BYTES
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
