"""Type-safe field parsing helpers for seed plans.

This module centralizes primitive parsing so plan loading and execution
produce consistent validation errors across CLI and SDK flows.
"""

from __future__ import annotations

from typing import Mapping

from core.errors import SeedRunSpecError


def required_string(args: Mapping[str, object], field_name: str, context: str) -> str:
    """Read a required string field from a plan mapping."""
    value = optional_string(args, field_name, context)
    if value is None:
        raise SeedRunSpecError(f"Invalid {context}: missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str, context: str) -> str | None:
    """Read an optional string field from a plan mapping."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise SeedRunSpecError(
        f"Invalid {context}: field '{field_name}' must be a string when provided."
    )


def optional_positive_int(
    args: Mapping[str, object],
    field_name: str,
    context: str,
) -> int | None:
    """Read an optional positive integer field from a plan mapping."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise SeedRunSpecError(f"Invalid {context}: field '{field_name}' must be an integer.")
    if value < 1:
        raise SeedRunSpecError(
            f"Invalid {context}: field '{field_name}' must be positive, got {value}."
        )
    return value


def reject_unknown_keys(
    mapping: Mapping[str, object],
    allowed_keys: frozenset[str],
    context: str,
) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise SeedRunSpecError(f"Invalid {context}: unknown fields {', '.join(unknown_keys)}.")
