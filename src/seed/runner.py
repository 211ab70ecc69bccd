"""Seed run orchestration.

This module validates seed options, opens the input and the entity
store in order, and runs one stream reader plus a bounded worker pool
until the input is drained or the first fatal error cancels the run.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from contextlib import ExitStack
from dataclasses import dataclass
from functools import partial
import os
from typing import Callable, TypeVar

from core.config import SeedConfig
from core.constants import QUEUE_CAPACITY_FACTOR
from core.errors import (
    SeedCancelledError,
    SeedConfigError,
    SeedIngestError,
    SeedResourceError,
)
from core.logging_config import get_logger
from core.types import SeedOptions, SeedStats
from seed.job_queue import JobQueue
from seed.run_scope import RunScope
from seed.stats import StatsTracker
from seed.stream_reader import ByteStream, StreamReader, open_input
from seed.worker import WorkerContext, run_worker
from store.entity_store import EntityStore, EntityWriter, StoreOpener, open_entity_store

_LOGGER = get_logger(__name__)
_T = TypeVar("_T")


@dataclass(frozen=True)
class RunPlan:
    """Resolved sizing for one run."""

    concurrency: int
    queue_capacity: int


class SeedRunner:
    """Runs one seed job from validation through the final summary."""

    def __init__(
        self,
        options: SeedOptions,
        config: SeedConfig | None = None,
        store_opener: StoreOpener | None = None,
    ) -> None:
        self._options = options
        self._config = config
        self._store_opener = store_opener
        self._scope = RunScope()

    def run(self) -> SeedStats:
        """Execute the seed run.

        Returns:
            Final statistics.

        Raises:
            SeedConfigError: If options are invalid (before any I/O).
            SeedResourceError: If input, store, schema, or writer cannot be opened.
            SeedRecordError: For the first fatal per-record failure.
            SeedIngestError: If the input cannot be read to the end.
            SeedCancelledError: If the run was cancelled by the caller.
        """
        plan = validate_seed_options(self._options)
        try:
            with ExitStack() as resources:
                self._scope.raise_if_cancelled()
                stream = _open_stage(
                    "open input",
                    lambda: resources.enter_context(
                        open_input(self._options.input_path, self._config)
                    ),
                )
                self._scope.raise_if_cancelled()
                store = _open_stage("open store", lambda: self._open_store(plan))
                resources.callback(store.close)
                self._scope.raise_if_cancelled()
                schema = _open_stage(
                    f"resolve schema for {self._options.table_name}",
                    lambda: store.resolve_active_schema(self._options.table_name),
                )
                self._scope.raise_if_cancelled()
                writer = _open_stage("init entity writer", lambda: store.new_entity_writer(schema))
                self._scope.raise_if_cancelled()
                stats = self._stream(stream, store, writer, plan)
        except Exception as error:
            _LOGGER.error(
                "seed_failed",
                table=self._options.table_name,
                input_path=self._options.input_path,
                error=str(error),
            )
            raise
        _log_seed_completion(self._options, plan, stats)
        return stats

    def cancel(self) -> None:
        """Cancel the run from another thread.

        A cancel issued while resources are still opening stops the run
        before the next stage; one issued before ``run()`` stops it at once.
        """
        self._scope.cancel()

    def _open_store(self, plan: RunPlan) -> EntityStore:
        opener = self._store_opener or partial(
            open_entity_store, max_connections=plan.concurrency
        )
        return opener(self._options.database_url)

    def _stream(
        self,
        stream: ByteStream,
        store: EntityStore,
        writer: EntityWriter,
        plan: RunPlan,
    ) -> SeedStats:
        scope = self._scope
        queue = JobQueue(plan.queue_capacity, scope)
        stats = StatsTracker()
        reader = StreamReader(stream, queue, scope, self._options.max_line_bytes)
        context = WorkerContext(
            table_name=self._options.table_name,
            strategy=self._options.strategy,
            store=store,
            writer=writer,
            stats=stats,
            scope=scope,
            progress_interval=self._options.progress_interval,
        )
        _LOGGER.info(
            "seed_started",
            table=self._options.table_name,
            input_path=self._options.input_path,
            concurrency=plan.concurrency,
            queue_capacity=plan.queue_capacity,
        )
        with ThreadPoolExecutor(
            max_workers=plan.concurrency + 1, thread_name_prefix="seed"
        ) as executor:
            futures: list[Future[None]] = [
                executor.submit(_run_task, scope, partial(_read_input, reader))
            ]
            for _ in range(plan.concurrency):
                futures.append(
                    executor.submit(_run_task, scope, partial(run_worker, queue, context))
                )
            try:
                wait(futures)
            except KeyboardInterrupt:
                scope.fail(SeedCancelledError("seed run interrupted"))
                wait(futures)
        first_error = scope.first_error
        if first_error is not None:
            raise first_error
        if scope.cancelled:
            raise SeedCancelledError("seed run cancelled before the input was drained")
        return stats.snapshot()


def run_seed(
    options: SeedOptions,
    config: SeedConfig | None = None,
    store_opener: StoreOpener | None = None,
) -> SeedStats:
    """Run one seed job and return its statistics.

    Args:
        options: Seed run options.
        config: Optional runtime configuration for S3 input.
        store_opener: Optional factory replacing ``open_entity_store``.

    Returns:
        Final statistics.
    """
    return SeedRunner(options, config, store_opener).run()


def validate_seed_options(options: SeedOptions) -> RunPlan:
    """Validate options before any resource is opened.

    Returns:
        Resolved concurrency and queue capacity.

    Raises:
        SeedConfigError: If a required option is missing or invalid.
    """
    if not options.input_path.strip():
        raise SeedConfigError("Input path is required. Pass --input with a JSONL file.")
    if not options.table_name.strip():
        raise SeedConfigError("Table name is required. Pass --table with the target table.")
    if not options.database_url.strip():
        raise SeedConfigError(
            "Database url is required. Pass --database-url or set DATABASE_URL."
        )
    if options.strategy is None:
        raise SeedConfigError("Record strategy is required.")
    options.strategy.validate()
    concurrency = options.concurrency
    if concurrency is None:
        concurrency = os.cpu_count() or 1
    _require_positive("concurrency", concurrency)
    queue_capacity = options.queue_capacity
    if queue_capacity is None:
        queue_capacity = concurrency * QUEUE_CAPACITY_FACTOR
    _require_positive("queue capacity", queue_capacity)
    _require_positive("max line bytes", options.max_line_bytes)
    _require_positive("progress interval", options.progress_interval)
    return RunPlan(concurrency=concurrency, queue_capacity=queue_capacity)


def _require_positive(option_name: str, value: int) -> None:
    if isinstance(value, bool) or value < 1:
        raise SeedConfigError(f"Invalid {option_name} {value}: expected a positive integer.")


def _open_stage(stage: str, action: Callable[[], _T]) -> _T:
    """Open one resource, annotating failures with the stage name."""
    try:
        return action()
    except Exception as error:
        raise SeedResourceError(stage, error) from error


def _read_input(reader: StreamReader) -> None:
    try:
        reader.run()
    except OSError as error:
        raise SeedIngestError(
            f"scan input after line {reader.lines_read}: {error}"
        ) from error


def _run_task(scope: RunScope, task: Callable[[], None]) -> None:
    """Run a reader or worker task inside the run scope.

    The first exception cancels the scope; cancellation observed by
    sibling tasks is not an error of its own.
    """
    try:
        task()
    except SeedCancelledError:
        return
    except Exception as error:
        scope.fail(error)


def _log_seed_completion(options: SeedOptions, plan: RunPlan, stats: SeedStats) -> None:
    """Log run completion with contextual metadata."""
    _LOGGER.info(
        "seed_completed",
        table=options.table_name,
        input_path=options.input_path,
        concurrency=plan.concurrency,
        processed=stats.processed,
        skipped=stats.skipped,
        ignored_fields=dict(stats.ignored_field_counts),
    )
