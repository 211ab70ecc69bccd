"""JSON Schema payload validation for entity writers.

Writers compile the active schema once and validate every payload
against it before insert.
"""

from __future__ import annotations

from typing import Any, Mapping

import jsonschema
from jsonschema.exceptions import SchemaError, relevance
from jsonschema.validators import validator_for

from core.errors import SchemaValidationError

_MAX_REPORTED_VIOLATIONS = 3


class PayloadValidator:
    """Compiled validator for one schema document."""

    def __init__(self, definition: Mapping[str, Any]) -> None:
        """Compile a schema document.

        Args:
            definition: JSON Schema document.

        Raises:
            SchemaValidationError: If the document is not a valid schema.
        """
        schema = dict(definition)
        validator_class = validator_for(schema, default=jsonschema.Draft202012Validator)
        try:
            validator_class.check_schema(schema)
        except SchemaError as error:
            raise SchemaValidationError(
                f"Active schema is invalid: {error.message}. Fix the schema definition."
            ) from error
        self._validator = validator_class(
            schema, format_checker=validator_class.FORMAT_CHECKER
        )

    def validate(self, payload: Mapping[str, Any]) -> None:
        """Validate a decoded payload.

        Raises:
            SchemaValidationError: With up to three violation messages.
        """
        violations = sorted(self._validator.iter_errors(payload), key=relevance)
        if not violations:
            return
        messages = [_describe(violation) for violation in violations[:_MAX_REPORTED_VIOLATIONS]]
        raise SchemaValidationError(
            f"Payload violates schema ({len(violations)} error(s)): " + "; ".join(messages)
        )


def _describe(violation: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in violation.absolute_path) or "<root>"
    return f"{location}: {violation.message}"
