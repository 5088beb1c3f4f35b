from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

Row = Mapping[str, Any]


class RowSource(Protocol):
    def rows_of_type(self, content_type: str) -> Iterable[Row]: ...


class RelationalLookup(Protocol):
    def query_table(self, table_name: str, filter_column: str, filter_value: Any) -> Sequence[Row]: ...

    def file_exists(self, file_id: Any) -> Any: ...


class DocumentSink(Protocol):
    def write(self, path: Path, document: Mapping[str, Any]) -> None: ...
