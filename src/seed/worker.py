"""Seed workers.

Each worker pulls jobs from the shared queue, runs the record strategy,
and writes the entity. Per-job state never leaves the worker; only the
stats tracker is shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

from core.errors import EntityAlreadyExistsError, SeedRecordError
from core.logging_config import get_logger
from core.types import CreateEntityParams, DerivedIdentity, SeedJob
from seed.job_queue import JobQueue
from seed.payload import RecordPayload, decode_payload, encode_payload
from seed.run_scope import RunScope
from seed.slug import build_slug
from seed.stats import StatsTracker
from seed.strategy import RecordStrategy
from store.entity_store import EntityStore, EntityWriter

_LOGGER = get_logger(__name__)
_T = TypeVar("_T")


@dataclass(frozen=True)
class WorkerContext:
    """Read-only collaborators shared by all workers of one run."""

    table_name: str
    strategy: RecordStrategy
    store: EntityStore
    writer: EntityWriter
    stats: StatsTracker
    scope: RunScope
    progress_interval: int


def run_worker(queue: JobQueue, context: WorkerContext) -> None:
    """Process jobs until the queue is drained or the run is cancelled.

    Raises:
        SeedRecordError: For the first fatal record failure.
        SeedCancelledError: If the run was cancelled.
    """
    while True:
        job = queue.get()
        if job is None:
            return
        handle_job(job, context)


def handle_job(job: SeedJob, context: WorkerContext) -> None:
    """Decode, derive, and insert one record.

    A duplicate entity counts as skipped; every other failure is raised
    as a SeedRecordError carrying the line number and stage.
    """
    payload = _stage(job, "decode payload", lambda: decode_payload(job.raw))
    raw_payload = job.raw
    if context.strategy.mutate is not None:
        mutate = context.strategy.mutate
        ignored = _stage(job, "mutate payload", lambda: mutate(payload))
        context.stats.add_ignored(ignored or ())
        raw_payload = _stage(job, "encode payload", lambda: encode_payload(payload))
    identity = derive_identity(job, payload, context)
    context.scope.raise_if_cancelled()
    params = CreateEntityParams(
        entity_id=identity.entity_id,
        slug=identity.slug,
        payload=raw_payload,
    )
    try:
        context.writer.create_entity(params)
    except EntityAlreadyExistsError:
        context.stats.add_skipped()
        return
    except Exception as error:
        raise SeedRecordError(job.line_number, "insert entity", error) from error
    processed = context.stats.add_processed()
    if processed % context.progress_interval == 0:
        _LOGGER.info("seed_progress", table=context.table_name, processed=processed)


def derive_identity(job: SeedJob, payload: RecordPayload, context: WorkerContext) -> DerivedIdentity:
    """Compute key, slug, and entity id for a mutated payload."""
    strategy = context.strategy
    key = _stage(job, "derive key", lambda: strategy.derive_key(payload))
    slug_source = _stage(job, "derive slug", lambda: strategy.derive_slug_source(payload, key))
    slug = _stage(job, "slugify", lambda: context.store.normalize_slug(build_slug(slug_source)))
    entity_id = _stage(job, "derive entity id", lambda: strategy.derive_entity_id(payload, key))
    return DerivedIdentity(key=key, slug=slug, entity_id=entity_id)


def _stage(job: SeedJob, stage: str, action: Callable[[], _T]) -> _T:
    """Run one stage, annotating any failure with line and stage."""
    try:
        return action()
    except Exception as error:
        raise SeedRecordError(job.line_number, stage, error) from error
