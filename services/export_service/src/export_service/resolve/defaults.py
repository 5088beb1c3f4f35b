from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from contentbridge_core.identity import author_link, content_id, tag_link
from contentbridge_core.lookup import RelationalLookup, Row
from contentbridge_core.schema import TagRefField, field_table_name

# Every node may carry free tags in the stock `field_tags` vocabulary field.
TAGS_FIELD = TagRefField(
    key="tags",
    field_name="field_tags",
    table=field_table_name("field_tags"),
    tag_column="field_tags_tid",
)


_MIN_UTC = datetime.min.replace(tzinfo=timezone.utc)
_MAX_UTC = datetime.max.replace(tzinfo=timezone.utc)


def epoch_to_datetime(timestamp: int | float) -> datetime:
    """UTC datetime for epoch seconds; values outside years 1..9999 clamp to the nearest bound."""
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        return _MAX_UTC if timestamp > 0 else _MIN_UTC


def resolve_default_fields(row: Row, *, content_type: str, lookup: RelationalLookup) -> dict[str, Any]:
    """
    Fields present on every exported entry, derived from the `node` row.

    `tags` is omitted (not empty, not null) when the node has no tag rows.
    """
    nid = row["nid"]
    result: dict[str, Any] = {
        "id": content_id(content_type, nid),
        "title": row["title"],
        "author": author_link(row["uid"]),
    }

    tag_rows = lookup.query_table(TAGS_FIELD.table, "entity_id", nid)
    if tag_rows:
        result["tags"] = [tag_link(r[TAGS_FIELD.tag_column]) for r in tag_rows]

    result["created_at"] = epoch_to_datetime(row["created"])
    result["updated_at"] = epoch_to_datetime(row["changed"])
    return result
