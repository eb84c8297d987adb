"""Input validation against a tool's JSON Schema parameters (Draft 2020-12)."""

from __future__ import annotations

from typing import Any

import jsonschema


def check_schema(schema: dict[str, Any]) -> None:
    """Raise ValueError if schema is not a valid JSON Schema object schema."""
    try:
        jsonschema.Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid parameter schema: {e.message}") from e
    if schema.get("type", "object") != "object":
        raise ValueError(
            f"Parameter schema must describe an object (got type={schema.get('type')!r})"
        )


def validate_arguments(schema: dict[str, Any], arguments: dict[str, Any]) -> list[str]:
    """Return human-readable violations of arguments against schema; empty when valid.

    Violations are ordered by their location in the input so messages are stable.
    """
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(arguments), key=lambda e: [str(p) for p in e.absolute_path])
    violations: list[str] = []
    for error in errors:
        location = ".".join(str(p) for p in error.absolute_path)
        violations.append(f"{location}: {error.message}" if location else error.message)
    return violations
