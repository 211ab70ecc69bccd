"""Runtime configuration model for Seedkit.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DATABASE_URL_ENV_VARS, DEFAULT_MAX_LINE_BYTES
from core.errors import SeedConfigError


@dataclass(frozen=True)
class SeedConfig:
    """Validated runtime configuration.

    Attributes:
        database_url: Default store connection string, if any.
        concurrency: Default worker count; ``None`` uses available CPUs.
        max_line_bytes: Maximum accepted input line length.
        s3_region: Optional default AWS region for S3 input.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    database_url: str | None
    concurrency: int | None
    max_line_bytes: int
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "SeedConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SeedConfigError: If environment values are invalid.
        """
        concurrency_value = os.getenv("SEED_CONCURRENCY")
        max_line_value = os.getenv("SEED_MAX_LINE_BYTES")
        return cls(
            database_url=_read_database_url(),
            concurrency=(
                _parse_positive_int("SEED_CONCURRENCY", concurrency_value)
                if concurrency_value
                else None
            ),
            max_line_bytes=(
                _parse_positive_int("SEED_MAX_LINE_BYTES", max_line_value)
                if max_line_value
                else DEFAULT_MAX_LINE_BYTES
            ),
            s3_region=os.getenv("SEED_S3_REGION"),
            s3_profile=os.getenv("SEED_S3_PROFILE"),
        )


def _read_database_url() -> str | None:
    """Return the first non-empty database URL variable."""
    for env_name in DATABASE_URL_ENV_VARS:
        value = os.getenv(env_name, "").strip()
        if value:
            return value
    return None


def _parse_positive_int(env_name: str, raw_value: str) -> int:
    """Parse a positive integer environment value.

    Args:
        env_name: Variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        SeedConfigError: If value is not a positive integer.
    """
    try:
        parsed = int(raw_value)
    except ValueError as error:
        raise SeedConfigError(
            f"Invalid {env_name} value: expected integer, got '{raw_value}'. "
            f"Set {env_name} to a positive number."
        ) from error
    if parsed < 1:
        raise SeedConfigError(
            f"Invalid {env_name} value: expected a positive integer, got {parsed}."
        )
    return parsed
