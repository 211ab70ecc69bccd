"""Unit tests for the concurrent stats tracker."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from seed.stats import StatsTracker


def test_counters_are_consistent_under_concurrency() -> None:
    """Concurrent increments should not lose updates."""
    tracker = StatsTracker()

    def _record(_index: int) -> None:
        tracker.add_processed()
        tracker.add_skipped()
        tracker.add_ignored(["extra", "prices"])

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(_record, range(500)))
    snapshot = tracker.snapshot()

    assert (snapshot.processed, snapshot.skipped) == (500, 500)
    assert snapshot.ignored_field_counts == {"extra": 500, "prices": 500}


def test_add_ignored_skips_empty_names() -> None:
    """Empty field names should not be counted."""
    tracker = StatsTracker()

    tracker.add_ignored(["", "extra"])
    tracker.add_ignored([])

    assert tracker.snapshot().ignored_field_counts == {"extra": 1}


def test_snapshot_is_detached_from_tracker() -> None:
    """Snapshots should not change when counting continues."""
    tracker = StatsTracker()
    tracker.add_ignored(["extra"])
    snapshot = tracker.snapshot()

    tracker.add_ignored(["extra"])

    assert snapshot.ignored_field_counts == {"extra": 1}
    assert tracker.add_processed() == 1
