"""Pytest configuration for seedkit test runs."""

from __future__ import annotations

import sys
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def pytest_sessionstart() -> None:
    """Make ``src`` packages and the ``tests`` helpers importable."""
    for import_root in (_PROJECT_ROOT / "src", _PROJECT_ROOT):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))
