"""JSON schema definitions for function calling and structured output."""

from __future__ import annotations

import collections.abc
import dataclasses
import json
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any


class DataType(str, Enum):
    """The primitive types a schema can describe."""

    OBJECT = "object"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    BOOLEAN = "boolean"


@dataclass
class Definition:
    """A small JSON schema description, possibly nested."""

    type: DataType | str | None = None
    description: str = ""
    enum: list[str] | None = None
    properties: dict[str, Definition] | None = None
    required: list[str] | None = None
    items: Definition | None = None
    additional_properties: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form; ``properties`` is always present."""
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = str(getattr(self.type, "value", self.type))
        if self.description:
            out["description"] = self.description
        if self.enum:
            out["enum"] = list(self.enum)
        out["properties"] = {
            name: prop.to_dict() for name, prop in (self.properties or {}).items()
        }
        if self.required:
            out["required"] = list(self.required)
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.additional_properties is not None:
            extra = self.additional_properties
            out["additionalProperties"] = (
                extra.to_dict() if isinstance(extra, Definition) else extra
            )
        return out

    def to_json(self) -> str:
        """Serialise the schema to a JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: typing.Mapping[str, Any]) -> Definition:
        """Build a definition from its JSON form."""
        raw_type = data.get("type")
        if raw_type:
            try:
                schema_type: DataType | str | None = DataType(raw_type)
            except ValueError:
                schema_type = raw_type
        else:
            schema_type = None
        properties = data.get("properties") or None
        items = data.get("items")
        extra = data.get("additionalProperties")
        if isinstance(extra, collections.abc.Mapping):
            extra = cls.from_dict(extra)
        return cls(
            type=schema_type,
            description=data.get("description", ""),
            enum=list(data["enum"]) if data.get("enum") else None,
            properties=(
                {name: cls.from_dict(prop) for name, prop in properties.items()}
                if properties
                else None
            ),
            required=list(data["required"]) if data.get("required") else None,
            items=cls.from_dict(items) if items is not None else None,
            additional_properties=extra,
        )

    def unmarshal(self, content: str | bytes) -> Any:
        """Decode ``content`` as JSON, check it against this schema and return it."""
        from llmapi.schema.validate import verify_schema_and_unmarshal

        return verify_schema_and_unmarshal(self, content)


_SEQUENCE_ORIGINS = (list, set, frozenset, collections.abc.Sequence)


def generate_schema_for_type(tp: Any) -> Definition:
    """Derive a schema from a type annotation or a dataclass (type or instance).

    Dataclass fields may carry metadata: ``name`` (the JSON key),
    ``omitempty`` (not required), ``description`` and ``required``.
    Field annotations must be real types, not strings.
    """
    if dataclasses.is_dataclass(tp) and not isinstance(tp, type):
        tp = type(tp)
    return _reflect(tp)


def _reflect(tp: Any) -> Definition:
    if isinstance(tp, str):
        raise TypeError(f"unsupported type: string annotation {tp!r}")

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Union or origin is types.UnionType:
        present = [arg for arg in args if arg is not type(None)]
        if len(present) == 1 and len(args) == 2:
            return _reflect(present[0])
        raise TypeError(f"unsupported type: {tp!r}")

    if tp is str:
        return Definition(type=DataType.STRING)
    if tp is bool:
        return Definition(type=DataType.BOOLEAN)
    if tp is int:
        return Definition(type=DataType.INTEGER)
    if tp is float:
        return Definition(type=DataType.NUMBER)

    if origin in _SEQUENCE_ORIGINS and len(args) == 1:
        return Definition(type=DataType.ARRAY, items=_reflect(args[0]))
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return Definition(type=DataType.ARRAY, items=_reflect(args[0]))

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _reflect_object(tp)

    raise TypeError(f"unsupported type: {tp!r}")


def _reflect_object(cls: type) -> Definition:
    properties: dict[str, Definition] = {}
    required: list[str] = []
    for fld in dataclasses.fields(cls):
        if fld.name.startswith("_"):
            continue
        meta = fld.metadata
        name = meta.get("name") or fld.name
        is_required = not meta.get("omitempty", False)
        item = _reflect(fld.type)
        if meta.get("description"):
            item.description = meta["description"]
        properties[name] = item
        if "required" in meta:
            is_required = bool(meta["required"])
        if is_required:
            required.append(name)
    return Definition(
        type=DataType.OBJECT,
        properties=properties,
        required=required or None,
        additional_properties=False,
    )