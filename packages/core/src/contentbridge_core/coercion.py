from __future__ import annotations

from collections.abc import Collection
from decimal import Decimal
from typing import Any


def coerce(value: Any, field_name: str, boolean_fields: Collection[str] = frozenset()) -> Any:
    """
    Normalize a raw column value into something JSON can carry.

    - `Decimal` (numeric/decimal columns) becomes `float`, whatever the field.
    - Fields listed in `boolean_fields` are mapped to `True`/`False`; `None` stays `None`.
    - Anything else is returned unchanged.
    """
    if isinstance(value, Decimal):
        return float(value)
    if field_name in boolean_fields:
        return to_boolean(value)
    return value


def to_boolean(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, str):
        # List fields store the allowed-values label, not a flag.
        return value == "Yes"
    return value == 1
