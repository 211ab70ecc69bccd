"""S3 URI parsing helpers.

This module centralizes S3 URI parsing for seed input sources.
It keeps URI validation behavior consistent across the codebase.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import SeedConfigError

S3_SCHEME_PREFIX = "s3://"


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 object location."""

    bucket: str
    key: str


def is_s3_uri(uri: str) -> bool:
    """Return whether a path string names an S3 object."""
    return uri.startswith(S3_SCHEME_PREFIX)


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 object URI.

    Args:
        uri: URI in format ``s3://bucket/key``.

    Returns:
        Parsed bucket and key pair.

    Raises:
        SeedConfigError: If bucket or key is missing.
    """
    bucket, _, key = uri.removeprefix(S3_SCHEME_PREFIX).partition("/")
    if not is_s3_uri(uri) or not bucket or not key or key.endswith("/"):
        raise SeedConfigError(
            f"Invalid S3 URI '{uri}': expected s3://bucket/key. "
            "Provide both bucket and object key."
        )
    return S3Location(bucket=bucket, key=key)
