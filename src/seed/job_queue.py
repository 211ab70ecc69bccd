"""Bounded job queue between the stream reader and workers.

The queue applies backpressure to the single producer, lets workers
drain remaining jobs after close, and observes run cancellation.
"""

from __future__ import annotations

from collections import deque
import threading

from core.errors import SeedCancelledError, SeedIngestError
from core.types import SeedJob
from seed.run_scope import RunScope


class JobQueue:
    """Bounded FIFO of seed jobs with close and cancel semantics."""

    def __init__(self, capacity: int, scope: RunScope) -> None:
        if capacity < 1:
            raise ValueError(f"job queue capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._scope = scope
        self._jobs: deque[SeedJob] = deque()
        self._closed = False
        self._condition = threading.Condition()
        scope.on_cancel(self._wake_all)

    @property
    def capacity(self) -> int:
        return self._capacity

    def put(self, job: SeedJob) -> None:
        """Enqueue a job, blocking while the queue is full.

        Raises:
            SeedCancelledError: If the run is cancelled while waiting.
            SeedIngestError: If the queue was already closed.
        """
        with self._condition:
            while len(self._jobs) >= self._capacity and not self._scope.cancelled:
                self._condition.wait()
            if self._scope.cancelled:
                raise SeedCancelledError("seed run cancelled")
            if self._closed:
                raise SeedIngestError("Cannot enqueue job: the job queue is closed.")
            self._jobs.append(job)
            self._condition.notify_all()

    def get(self) -> SeedJob | None:
        """Dequeue the next job.

        Returns:
            The next job, or None once the queue is closed and drained.

        Raises:
            SeedCancelledError: If the run is cancelled.
        """
        with self._condition:
            while not self._jobs and not self._closed and not self._scope.cancelled:
                self._condition.wait()
            if self._scope.cancelled:
                raise SeedCancelledError("seed run cancelled")
            if not self._jobs:
                return None
            job = self._jobs.popleft()
            self._condition.notify_all()
            return job

    def close(self) -> None:
        """Stop production; workers drain what is left, then stop."""
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def _wake_all(self) -> None:
        with self._condition:
            self._condition.notify_all()
