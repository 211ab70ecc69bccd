"""Core constants used across Seedkit modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_MAX_LINE_BYTES = 16 * 1024 * 1024
READ_BUFFER_BYTES = 1024 * 1024
QUEUE_CAPACITY_FACTOR = 2
DEFAULT_PROGRESS_INTERVAL = 1000
SLUG_MAX_LENGTH = 255
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
TABLE_NAME_PATTERN = r"^[a-z_][a-z0-9_]*$"
POSTGRES_URL_SCHEMES = ("postgres", "postgresql")
SCHEMA_REPOSITORY_TABLE = "schema_repository"
DEFAULT_POOL_MIN_SIZE = 1
POOL_SIZE_HEADROOM = 2
DATABASE_URL_ENV_VARS = ("SEED_DATABASE_URL", "DATABASE_URL")
SUPPORTED_RUN_SPEC_VERSION = 1
