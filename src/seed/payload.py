"""Typed access to decoded record payloads.

Payloads are JSON objects decoded per line. Field readers here turn
shape mismatches into explicit field errors instead of coercing values.
"""

from __future__ import annotations

import json
from typing import Dict, List, Union

from core.errors import EmptyFieldError, MissingFieldError, WrongTypeError

JsonValue = Union[None, bool, int, float, str, List["JsonValue"], Dict[str, "JsonValue"]]
RecordPayload = Dict[str, JsonValue]


def decode_payload(raw: bytes) -> RecordPayload:
    """Decode one input line into a record payload.

    Args:
        raw: UTF-8 JSON bytes of a single line.

    Returns:
        Decoded JSON object.

    Raises:
        ValueError: If bytes are not valid JSON or not an object.
    """
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {json_type_name(payload)}")
    return payload


def encode_payload(payload: RecordPayload) -> bytes:
    """Encode a payload for persistence."""
    encoded = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
    return encoded.encode("utf-8")


def require_string(payload: RecordPayload, field_name: str) -> str:
    """Read a required non-empty string field.

    Args:
        payload: Decoded record payload.
        field_name: Field to read.

    Returns:
        Field value.

    Raises:
        MissingFieldError: If the field is absent.
        WrongTypeError: If the field is not a string.
        EmptyFieldError: If the field is an empty string.
    """
    if field_name not in payload:
        raise MissingFieldError(field_name)
    value = payload[field_name]
    if not isinstance(value, str):
        raise WrongTypeError(field_name, "string", json_type_name(value))
    if value == "":
        raise EmptyFieldError(field_name)
    return value


def optional_string(payload: RecordPayload, field_name: str) -> str | None:
    """Return a non-empty string field, or None for anything else."""
    value = payload.get(field_name)
    if isinstance(value, str) and value:
        return value
    return None


def id_list(payload: RecordPayload, field_name: str) -> list[str]:
    """Read a list of external ids as strings.

    Integer entries are rendered without a fraction, empty strings and
    other JSON types are ignored. A missing or non-list field yields [].
    """
    raw_values = payload.get(field_name)
    if not isinstance(raw_values, list):
        return []
    values: list[str] = []
    for raw_value in raw_values:
        if isinstance(raw_value, bool):
            continue
        if isinstance(raw_value, (int, float)):
            values.append(str(int(raw_value)))
        elif isinstance(raw_value, str) and raw_value:
            values.append(raw_value)
    return values


def json_type_name(value: object) -> str:
    """Return the JSON type name of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
