"""
Schema Validation Utilities

Validates block records from the data service before they become Blocks.

- `validate_block()` performs required-field and field-type checks
  (text fields, answers and `config` must have types Block.from_dict
  can consume).
- With `strict=True` the record is also validated against
  `block.schema.json` using jsonschema.
- Fail fast on any violation with a `ValidationError` carrying the path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


# Optional record fields and the types Block.from_dict can consume
_TEXT_FIELDS = ("content", "image_ref", "imageRef", "material_title", "materialTitle")
_ANSWER_FIELDS = ("correct_answer", "correctAnswer")


def _check_type(data: dict, key: str, types: tuple, expected: str, prefix: str = "") -> None:
    value = data.get(key)
    if value is None or (isinstance(value, types) and not isinstance(value, bool)):
        return
    raise ValidationError(
        f"{prefix}{key} must be {expected}, got {type(value).__name__}",
        path=f"{prefix}{key}",
    )


def validate_block(data: Any, *, strict: bool = False) -> None:
    """
    Validate a block record.

    Unknown `type` values are accepted here; they are rendered as plain
    text downstream rather than rejected.

    Args:
        data: Record dictionary to validate
        strict: If True, also validate against the JSON schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Block record must be an object, got {type(data).__name__}",
            path="",
        )

    missing = [f for f in ("id", "type") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    options = data.get("options")
    if options is not None and not isinstance(options, list):
        raise ValidationError(
            "options must be a list",
            path="options",
        )

    for key in _TEXT_FIELDS:
        _check_type(data, key, (str,), "a string")
    for key in _ANSWER_FIELDS:
        _check_type(data, key, (str, int, float), "a string or number")

    config = data.get("config")
    if config is not None:
        if not isinstance(config, dict):
            raise ValidationError(
                f"config must be an object, got {type(config).__name__}",
                path="config",
            )
        _check_type(config, "imageUrl", (str,), "a string", prefix="config.")

    if strict:
        schema = _load_schema("block")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e
