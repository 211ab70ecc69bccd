"""Unit tests for the bounded job queue."""

from __future__ import annotations

import threading

import pytest

from core.errors import SeedCancelledError, SeedIngestError
from core.types import SeedJob
from seed.job_queue import JobQueue
from seed.run_scope import RunScope


def _job(line_number: int) -> SeedJob:
    return SeedJob(line_number=line_number, raw=b"{}")


def test_queue_preserves_order_and_drains_after_close() -> None:
    """Workers should receive queued jobs in order, then None after close."""
    queue = JobQueue(4, RunScope())
    for line_number in (1, 2, 3):
        queue.put(_job(line_number))
    queue.close()

    received = [queue.get(), queue.get(), queue.get(), queue.get()]

    assert [job.line_number if job else None for job in received] == [1, 2, 3, None]


def test_put_after_close_raises() -> None:
    """Producing into a closed queue should fail."""
    queue = JobQueue(1, RunScope())
    queue.close()

    with pytest.raises(SeedIngestError):
        queue.put(_job(1))


def test_put_blocks_while_full_until_a_job_is_taken() -> None:
    """A full queue should apply backpressure to the producer."""
    queue = JobQueue(1, RunScope())
    queue.put(_job(1))
    produced = threading.Event()

    def _produce() -> None:
        queue.put(_job(2))
        produced.set()

    producer = threading.Thread(target=_produce)
    producer.start()
    blocked = not produced.wait(timeout=0.2)
    first = queue.get()
    producer.join(timeout=5)

    assert blocked and first is not None and first.line_number == 1 and produced.is_set()


def test_cancel_wakes_blocked_consumer() -> None:
    """Cancellation should release a worker waiting on an empty queue."""
    scope = RunScope()
    queue = JobQueue(2, scope)
    outcome: list[BaseException] = []

    def _consume() -> None:
        try:
            queue.get()
        except SeedCancelledError as error:
            outcome.append(error)

    consumer = threading.Thread(target=_consume)
    consumer.start()
    scope.cancel()
    consumer.join(timeout=5)

    assert not consumer.is_alive() and len(outcome) == 1


def test_cancel_wakes_blocked_producer() -> None:
    """Cancellation should release a producer waiting on a full queue."""
    scope = RunScope()
    queue = JobQueue(1, scope)
    queue.put(_job(1))
    outcome: list[BaseException] = []

    def _produce() -> None:
        try:
            queue.put(_job(2))
        except SeedCancelledError as error:
            outcome.append(error)

    producer = threading.Thread(target=_produce)
    producer.start()
    scope.fail(RuntimeError("worker failed"))
    producer.join(timeout=5)

    assert not producer.is_alive() and len(outcome) == 1


def test_queue_rejects_non_positive_capacity() -> None:
    """Capacity must be at least one."""
    with pytest.raises(ValueError):
        JobQueue(0, RunScope())
