from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from contentbridge_core.lookup import RelationalLookup, Row
from contentbridge_core.schema import ContentSchema
from export_service.resolve.defaults import resolve_default_fields
from export_service.resolve.fields import resolve_schema_fields


@dataclass(frozen=True)
class ResolverConfig:
    schema: ContentSchema
    boolean_fields: frozenset[str] = field(default_factory=frozenset)

    @property
    def content_type(self) -> str:
        return self.schema.content_type

    @classmethod
    def build(cls, schema: ContentSchema, boolean_fields: Iterable[str] | None = None) -> "ResolverConfig":
        return cls(schema=schema, boolean_fields=frozenset(boolean_fields or ()))


def build_document(row: Row, *, config: ResolverConfig, lookup: RelationalLookup) -> dict[str, Any]:
    """
    Resolve one `node` row into an export document.

    Default fields come first, then schema fields in declaration order; a
    schema key that collides with a default field overrides it.
    """
    document = resolve_default_fields(row, content_type=config.content_type, lookup=lookup)
    document.update(
        resolve_schema_fields(
            row["nid"],
            config.schema,
            lookup=lookup,
            boolean_fields=config.boolean_fields,
        )
    )
    return document
