"""Unit tests for the store slug rule."""

from __future__ import annotations

import pytest

from core.constants import SLUG_MAX_LENGTH
from core.errors import InvalidSlugError
from store.slug_rules import normalize_slug


def test_normalize_slug_trims_and_lowercases() -> None:
    """Whitespace and case should be canonicalized."""
    assert normalize_slug("  SET1-C001 ") == "set1-c001"


@pytest.mark.parametrize("candidate", ["", "   ", "a--b", "-a", "a_b", "a b"])
def test_normalize_slug_rejects_malformed_values(candidate: str) -> None:
    """Only dash-separated lower-case alphanumerics are canonical."""
    with pytest.raises(InvalidSlugError):
        normalize_slug(candidate)


def test_normalize_slug_enforces_maximum_length() -> None:
    """Slugs longer than the limit should be rejected."""
    assert normalize_slug("a" * SLUG_MAX_LENGTH) == "a" * SLUG_MAX_LENGTH
    with pytest.raises(InvalidSlugError):
        normalize_slug("a" * (SLUG_MAX_LENGTH + 1))
