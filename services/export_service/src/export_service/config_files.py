"""Loaders for the JSON files that drive an export run."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contentbridge_core.errors import SchemaError
from contentbridge_core.schema import ContentSchema, bare_field_name, load_schema


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaError(f"{path}: invalid JSON ({exc})") from exc


def load_content_types(path: Path) -> dict[str, ContentSchema]:
    """
    Read `{content_type: {output_key: descriptor, ...}, ...}`.

    Key order of both levels is kept.
    """
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise SchemaError(f"{path}: expected an object mapping content types to schemas")
    return {str(content_type): load_schema(str(content_type), schema) for content_type, schema in raw.items()}


def _flatten(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        out: list[str] = []
        for item in value:
            out.extend(_flatten(item))
        return out
    raise SchemaError(f"boolean columns must be strings or lists of strings, got {value!r}")


def load_boolean_fields(path: Path | None) -> frozenset[str]:
    """
    Boolean field names; nested lists are flattened. No file means no boolean fields.

    Entries are matched against bare field names, so `field_data_field_x` is
    stored as `field_x`.
    """
    if path is None:
        return frozenset()
    return frozenset(bare_field_name(name) for name in _flatten(_read_json(path)))
