"""Per-row document resolution."""

from export_service.resolve.defaults import TAGS_FIELD, epoch_to_datetime, resolve_default_fields
from export_service.resolve.document import ResolverConfig, build_document
from export_service.resolve.fields import resolve_field, resolve_schema_fields

__all__ = [
    "TAGS_FIELD",
    "ResolverConfig",
    "build_document",
    "epoch_to_datetime",
    "resolve_default_fields",
    "resolve_field",
    "resolve_schema_fields",
]
