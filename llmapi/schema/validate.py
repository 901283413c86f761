"""Check decoded JSON values against a schema definition."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from llmapi.schema.definition import DataType, Definition


class SchemaValidationError(ValueError):
    """Raised when data does not match the schema it was checked against."""


def validate(schema: Definition, data: Any) -> bool:
    """Return whether ``data`` (a decoded JSON value) matches ``schema``."""
    kind = schema.type
    if kind == DataType.OBJECT:
        return _validate_object(schema, data)
    if kind == DataType.ARRAY:
        return _validate_array(schema, data)
    if kind == DataType.STRING:
        return isinstance(data, str)
    if kind == DataType.NUMBER:
        return isinstance(data, (int, float)) and not isinstance(data, bool)
    if kind == DataType.BOOLEAN:
        return isinstance(data, bool)
    if kind == DataType.INTEGER:
        if isinstance(data, bool):
            return False
        if isinstance(data, float):
            return data.is_integer()
        return isinstance(data, int)
    if kind == DataType.NULL:
        return data is None
    return False


def _validate_object(schema: Definition, data: Any) -> bool:
    if not isinstance(data, Mapping):
        return False
    required = schema.required or []
    if any(name not in data for name in required):
        return False
    for name, prop in (schema.properties or {}).items():
        if name in data:
            if not validate(prop, data[name]):
                return False
        elif name in required:
            return False
    return True


def _validate_array(schema: Definition, data: Any) -> bool:
    if not isinstance(data, (list, tuple)):
        return False
    if schema.items is None:
        if data:
            raise ValueError("array schema has no items definition")
        return True
    return all(validate(schema.items, item) for item in data)


def verify_schema_and_unmarshal(schema: Definition, content: str | bytes) -> Any:
    """Decode JSON ``content``, check it against ``schema`` and return it."""
    data = json.loads(content)
    if not validate(schema, data):
        raise SchemaValidationError(
            "data validation failed against the provided schema"
        )
    return data