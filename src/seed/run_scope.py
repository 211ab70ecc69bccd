"""Cancellable run scope shared by the reader and workers.

The first fatal error recorded cancels the scope. Blocking operations
register wake-up callbacks so they return promptly after cancellation.
"""

from __future__ import annotations

import threading
from typing import Callable

from core.errors import SeedCancelledError


class RunScope:
    """First-error capture plus a cancellation flag."""

    def __init__(self) -> None:
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._first_error: BaseException | None = None
        self._wake_callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        """Return whether the scope has been cancelled."""
        return self._cancelled.is_set()

    @property
    def first_error(self) -> BaseException | None:
        """Return the first fatal error recorded, if any."""
        with self._lock:
            return self._first_error

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked once the scope is cancelled."""
        with self._lock:
            self._wake_callbacks.append(callback)

    def fail(self, error: BaseException) -> None:
        """Record a fatal error and cancel the scope.

        Only the first error is kept; later ones arrive after cancellation
        and are discarded.
        """
        with self._lock:
            if self._first_error is None:
                self._first_error = error
        self.cancel()

    def cancel(self) -> None:
        """Cancel the scope and wake every blocked operation."""
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            callbacks = list(self._wake_callbacks)
        for callback in callbacks:
            callback()

    def raise_if_cancelled(self) -> None:
        """Raise SeedCancelledError when the scope is cancelled."""
        if self._cancelled.is_set():
            raise SeedCancelledError("seed run cancelled")
