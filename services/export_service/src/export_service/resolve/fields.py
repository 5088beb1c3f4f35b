from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import Any

from contentbridge_core.coercion import coerce
from contentbridge_core.errors import FieldResolutionError, SchemaError
from contentbridge_core.identity import entry_link, file_link, tag_link
from contentbridge_core.lookup import RelationalLookup, Row
from contentbridge_core.schema import ContentSchema, EntityRefField, FieldDescriptor, ScalarField, TagRefField

ENTITY_ID_COLUMN = "entity_id"


def resolve_schema_fields(
    entity_id: Any,
    schema: ContentSchema,
    *,
    lookup: RelationalLookup,
    boolean_fields: Collection[str] = frozenset(),
) -> dict[str, Any]:
    """Resolve every schema-declared field for one entity, in schema order."""
    return {
        descriptor.key: resolve_field(entity_id, descriptor, lookup=lookup, boolean_fields=boolean_fields)
        for descriptor in schema
    }


def resolve_field(
    entity_id: Any,
    descriptor: FieldDescriptor,
    *,
    lookup: RelationalLookup,
    boolean_fields: Collection[str] = frozenset(),
) -> Any:
    rows = lookup.query_table(descriptor.table, ENTITY_ID_COLUMN, entity_id)

    if isinstance(descriptor, ScalarField):
        if _is_file_field(rows, descriptor):
            return [file_link(lookup.file_exists(r[descriptor.file_column])) for r in rows]
        return _scalar_value(rows, descriptor, boolean_fields)

    if isinstance(descriptor, EntityRefField):
        return [entry_link(descriptor.target_type, r[descriptor.target_column]) for r in rows]

    if isinstance(descriptor, TagRefField):
        return [tag_link(r[descriptor.tag_column]) for r in rows]

    raise SchemaError(f"unsupported field descriptor: {descriptor!r}")


def _is_file_field(rows: Sequence[Row], descriptor: ScalarField) -> bool:
    # Decided on the first row only; zero rows or a null fid is never a file field.
    return bool(rows) and rows[0].get(descriptor.file_column) is not None


def _scalar_value(rows: Sequence[Row], descriptor: ScalarField, boolean_fields: Collection[str]) -> Any:
    if not rows:
        return coerce(None, descriptor.field_name, boolean_fields)

    first = rows[0]
    if descriptor.value_column not in first:
        raise FieldResolutionError(
            f"{descriptor.table} row for field {descriptor.key!r} has neither "
            f"{descriptor.value_column!r} nor a file id in {descriptor.file_column!r}",
            field_key=descriptor.key,
            table_name=descriptor.table,
        )
    return coerce(first[descriptor.value_column], descriptor.field_name, boolean_fields)
