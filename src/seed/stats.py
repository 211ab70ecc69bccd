"""Concurrent-safe seed statistics."""

from __future__ import annotations

import threading
from typing import Iterable

from core.types import SeedStats


class StatsTracker:
    """Processed/skipped counters and ignored-field counts."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processed = 0
        self._skipped = 0
        self._ignored: dict[str, int] = {}

    def add_processed(self) -> int:
        """Count one inserted record and return the cumulative total."""
        with self._lock:
            self._processed += 1
            return self._processed

    def add_skipped(self) -> int:
        """Count one already-existing record and return the cumulative total."""
        with self._lock:
            self._skipped += 1
            return self._skipped

    def add_ignored(self, fields: Iterable[str]) -> None:
        """Count removed field names; empty names are ignored."""
        with self._lock:
            for field_name in fields:
                if not field_name:
                    continue
                self._ignored[field_name] = self._ignored.get(field_name, 0) + 1

    def snapshot(self) -> SeedStats:
        """Return a frozen copy of the current counters."""
        with self._lock:
            return SeedStats(
                processed=self._processed,
                skipped=self._skipped,
                ignored_field_counts=dict(self._ignored),
            )
