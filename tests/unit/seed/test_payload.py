"""Unit tests for payload decoding and typed field access."""

from __future__ import annotations

import json

import pytest

from core.errors import EmptyFieldError, MissingFieldError, WrongTypeError
from seed.payload import decode_payload, encode_payload, id_list, optional_string, require_string


def test_decode_payload_returns_object() -> None:
    """A JSON object line should decode into a dictionary."""
    assert decode_payload(b'{"id": "a", "n": 1}') == {"id": "a", "n": 1}


@pytest.mark.parametrize("raw", [b"[1, 2]", b'"text"', b"42", b"null"])
def test_decode_payload_rejects_non_objects(raw: bytes) -> None:
    """Top-level values other than objects should be rejected."""
    with pytest.raises(ValueError):
        decode_payload(raw)


def test_decode_payload_rejects_malformed_json() -> None:
    """Truncated JSON should raise a decode error."""
    with pytest.raises(json.JSONDecodeError):
        decode_payload(b'{"id": ')


def test_encode_payload_is_compact_and_keeps_unicode() -> None:
    """Encoded payloads should be compact UTF-8 with sorted keys."""
    encoded = encode_payload({"name": "Pokémon", "id": "x"})

    assert encoded == '{"id":"x","name":"Pokémon"}'.encode("utf-8")


def test_require_string_reports_each_failure_kind() -> None:
    """Missing, mistyped, and empty fields should raise distinct errors."""
    payload = {"number": 4, "empty": ""}

    with pytest.raises(MissingFieldError):
        require_string(payload, "id")
    with pytest.raises(WrongTypeError) as wrong_type:
        require_string(payload, "number")
    with pytest.raises(EmptyFieldError):
        require_string(payload, "empty")

    assert wrong_type.value.actual == "number" and wrong_type.value.field_name == "number"


def test_optional_string_ignores_other_types() -> None:
    """Only non-empty strings should be returned."""
    payload = {"a": "x", "b": "", "c": 3}

    assert [optional_string(payload, name) for name in ("a", "b", "c", "d")] == [
        "x",
        None,
        None,
        None,
    ]


def test_id_list_renders_integers_and_skips_empty_values() -> None:
    """External ids should render as strings, skipping unusable entries."""
    payload = {"ids": [42382, "alt", "", 7.0, True, None]}

    assert id_list(payload, "ids") == ["42382", "alt", "7"]
    assert id_list(payload, "missing") == []
