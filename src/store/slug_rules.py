"""Canonical slug rule enforced by entity stores."""

from __future__ import annotations

import re

from core.constants import SLUG_MAX_LENGTH, SLUG_PATTERN
from core.errors import InvalidSlugError

_SLUG_RE = re.compile(SLUG_PATTERN)


def normalize_slug(candidate: str) -> str:
    """Return the canonical form of a slug.

    Args:
        candidate: Slug proposed by a writer.

    Returns:
        Trimmed, lower-cased slug.

    Raises:
        InvalidSlugError: If the slug is empty, too long, or malformed.
    """
    slug = candidate.strip().lower()
    if not slug:
        raise InvalidSlugError("Slug is empty. Provide at least one letter or digit.")
    if len(slug) > SLUG_MAX_LENGTH:
        raise InvalidSlugError(
            f"Slug '{slug[:32]}...' is {len(slug)} characters long; "
            f"the maximum is {SLUG_MAX_LENGTH}."
        )
    if not _SLUG_RE.match(slug):
        raise InvalidSlugError(
            f"Slug '{slug}' is not canonical: use lower-case letters and digits "
            "separated by single dashes."
        )
    return slug
