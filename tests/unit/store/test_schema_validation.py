"""Unit tests for JSON Schema payload validation."""

from __future__ import annotations

import pytest

from core.errors import SchemaValidationError
from store.schema_validation import PayloadValidator


def test_validator_accepts_conforming_payload() -> None:
    """Conforming payloads should pass silently."""
    validator = PayloadValidator({"type": "object", "required": ["id"]})

    assert validator.validate({"id": "a"}) is None


def test_validator_reports_violation_paths() -> None:
    """Violations should name the offending location."""
    validator = PayloadValidator(
        {
            "type": "object",
            "properties": {"hp": {"type": "string"}},
            "additionalProperties": False,
        }
    )

    with pytest.raises(SchemaValidationError) as error_info:
        validator.validate({"hp": 120, "extra": True})

    message = str(error_info.value)
    assert "2 error(s)" in message and "hp: 120 is not of type 'string'" in message


def test_validator_rejects_invalid_schema_document() -> None:
    """A broken schema should fail when the writer is created."""
    with pytest.raises(SchemaValidationError):
        PayloadValidator({"type": "not-a-type"})
