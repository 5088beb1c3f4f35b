"""
Field descriptors for one content type.

A raw schema (as stored in the content-types JSON file) maps output keys to
one of three shapes:

- `"field_body"`                                  -> scalar or file field in `field_data_field_body`
- `{"type": "article", "table": "field_related"}` -> entity reference to entries of type `article`
- `{"table": "field_topics"}`                     -> taxonomy tag reference

`load_schema` decides the shape once and resolves every table/column name up
front, so per-row resolution never inspects raw descriptors.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union

from contentbridge_core.errors import SchemaError

FIELD_TABLE_PREFIX = "field_data_"


def field_table_name(field_name: str) -> str:
    return f"{FIELD_TABLE_PREFIX}{field_name}"


def bare_field_name(name: str) -> str:
    """`field_data_field_x` -> `field_x`; bare names are returned stripped."""
    name = name.strip()
    if name.startswith(FIELD_TABLE_PREFIX):
        name = name[len(FIELD_TABLE_PREFIX) :]
    return name


@dataclass(frozen=True)
class ScalarField:
    key: str
    field_name: str
    table: str
    value_column: str
    file_column: str


@dataclass(frozen=True)
class EntityRefField:
    key: str
    field_name: str
    table: str
    target_column: str
    target_type: str


@dataclass(frozen=True)
class TagRefField:
    key: str
    field_name: str
    table: str
    tag_column: str


FieldDescriptor = Union[ScalarField, EntityRefField, TagRefField]


@dataclass(frozen=True)
class ContentSchema:
    content_type: str
    fields: tuple[FieldDescriptor, ...]

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


def _field_name(raw: Any, *, key: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise SchemaError(f"field {key!r}: expected a non-empty field/table name, got {raw!r}")
    # Accept the physical table name as well as the bare field name.
    return bare_field_name(raw)


def parse_descriptor(key: str, raw: Any) -> FieldDescriptor:
    if isinstance(raw, str):
        name = _field_name(raw, key=key)
        return ScalarField(
            key=key,
            field_name=name,
            table=field_table_name(name),
            value_column=f"{name}_value",
            file_column=f"{name}_fid",
        )

    if not isinstance(raw, Mapping):
        raise SchemaError(f"field {key!r}: descriptor must be a string or an object, got {type(raw).__name__}")

    if "table" not in raw:
        raise SchemaError(f"field {key!r}: descriptor {dict(raw)!r} has no 'table'")
    name = _field_name(raw["table"], key=key)

    if "type" in raw:
        target_type = raw["type"]
        if not isinstance(target_type, str) or not target_type:
            raise SchemaError(f"field {key!r}: entity reference 'type' must be a non-empty string")
        return EntityRefField(
            key=key,
            field_name=name,
            table=field_table_name(name),
            target_column=f"{name}_target_id",
            target_type=target_type,
        )

    return TagRefField(
        key=key,
        field_name=name,
        table=field_table_name(name),
        tag_column=f"{name}_tid",
    )


def load_schema(content_type: str, raw_schema: Mapping[str, Any] | None) -> ContentSchema:
    """Parse a raw schema mapping, preserving its key order."""
    if raw_schema is None:
        raw_schema = {}
    if not isinstance(raw_schema, Mapping):
        raise SchemaError(f"schema for {content_type!r} must be an object, got {type(raw_schema).__name__}")
    return ContentSchema(
        content_type=content_type,
        fields=tuple(parse_descriptor(str(key), raw) for key, raw in raw_schema.items()),
    )
