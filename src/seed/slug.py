"""Slug normalization for derived record identities.

This module turns arbitrary key text into a URL-safe slug.
The store applies its own canonical rule afterwards.
"""

from __future__ import annotations

import re

from core.errors import EmptySlugError

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def build_slug(candidate: str) -> str:
    """Normalize text into a lower-case dash-separated slug.

    Every maximal run of characters outside ``[a-z0-9]`` becomes a single
    dash after lower-casing, and leading/trailing dashes are trimmed.

    Args:
        candidate: Arbitrary input text.

    Returns:
        Slug matching ``[a-z0-9]+(-[a-z0-9]+)*``.

    Raises:
        EmptySlugError: If nothing survives normalization.
    """
    slug = _NON_SLUG_RUN.sub("-", candidate.lower()).strip("-")
    if not slug:
        raise EmptySlugError(candidate)
    return slug
