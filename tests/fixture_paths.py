"""Fixture file locations shared by unit and integration tests."""

from __future__ import annotations

from pathlib import Path

FIXTURES_ROOT = Path(__file__).resolve().parent / "fixtures"


def fixture_path(relative_path: str) -> Path:
    """Resolve a JSONL or YAML fixture under tests/fixtures.

    Args:
        relative_path: Path under the fixtures root, e.g. ``seed/two_cards.jsonl``.

    Returns:
        Absolute fixture path.
    """
    return FIXTURES_ROOT / relative_path
