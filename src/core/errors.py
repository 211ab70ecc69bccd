"""Seedkit exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class SeedError(Exception):
    """Base exception for all Seedkit failures."""


class SeedConfigError(SeedError):
    """Raised for invalid runtime configuration or seed options."""


class SeedIngestError(SeedError):
    """Raised for input stream read failures."""


class LineTooLongError(SeedIngestError):
    """Raised when an input line exceeds the configured maximum length."""

    def __init__(self, line_number: int, max_line_bytes: int) -> None:
        self.line_number = line_number
        self.max_line_bytes = max_line_bytes
        super().__init__(
            f"Input line {line_number} exceeds the maximum of {max_line_bytes} bytes. "
            "Raise --max-line-bytes or split the record."
        )


class SeedStrategyError(SeedError):
    """Raised when a record strategy cannot derive a value."""


class FieldError(SeedStrategyError):
    """Base error for a malformed payload field."""

    def __init__(self, field_name: str, message: str) -> None:
        self.field_name = field_name
        super().__init__(message)


class MissingFieldError(FieldError):
    """Raised when a required payload field is absent."""

    def __init__(self, field_name: str) -> None:
        super().__init__(field_name, f"field {field_name} is missing")


class WrongTypeError(FieldError):
    """Raised when a payload field holds an unexpected JSON type."""

    def __init__(self, field_name: str, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(field_name, f"field {field_name} is not a {expected} (got {actual})")


class EmptyFieldError(FieldError):
    """Raised when a required string field is empty."""

    def __init__(self, field_name: str) -> None:
        super().__init__(field_name, f"field {field_name} is empty")


class EmptySlugError(SeedStrategyError):
    """Raised when slug normalization leaves nothing behind."""

    def __init__(self, candidate: str) -> None:
        self.candidate = candidate
        super().__init__(f"empty slug after normalization of {candidate!r}")


class SeedStoreError(SeedError):
    """Raised for entity store failures."""


class EntityAlreadyExistsError(SeedStoreError):
    """Raised when an entity id or slug is already present in the table."""


class SchemaNotFoundError(SeedStoreError):
    """Raised when a table has no active schema."""


class SchemaValidationError(SeedStoreError):
    """Raised when a payload or schema document fails validation."""


class InvalidSlugError(SeedStoreError):
    """Raised when a slug does not match the store's canonical form."""


class SeedRecordError(SeedError):
    """Fatal per-record failure annotated with line number and stage.

    Attributes:
        line_number: One-based input line that failed.
        stage: Pipeline stage name, e.g. ``derive key``.
    """

    def __init__(self, line_number: int, stage: str, cause: BaseException) -> None:
        self.line_number = line_number
        self.stage = stage
        super().__init__(f"line {line_number}: {stage}: {cause}")


class SeedResourceError(SeedError):
    """Fatal failure while opening a run resource.

    Attributes:
        stage: Resource stage name, e.g. ``open input``.
    """

    def __init__(self, stage: str, cause: BaseException) -> None:
        self.stage = stage
        super().__init__(f"{stage}: {cause}")


class SeedCancelledError(SeedError):
    """Raised when the run scope was cancelled by the caller."""


class SeedDependencyError(SeedError):
    """Raised when an optional runtime dependency is missing."""


class SeedRunSpecError(SeedError):
    """Raised for invalid or unsupported seed plan configuration."""
