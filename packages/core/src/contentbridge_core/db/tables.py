"""Read-only access to the legacy CMS tables through SQLAlchemy Core."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from sqlalchemy import MetaData, Table, select
from sqlalchemy.engine import Engine

from contentbridge_core.errors import FileNotRegisteredError
from contentbridge_core.lookup import Row

NODE_TABLE = "node"
FILE_TABLE = "file_managed"


class SqlRelationalLookup:
    """
    Relational lookups against a reflected legacy schema.

    Tables are reflected on first use and cached for the lifetime of the
    lookup. Field tables are ordered by `delta` when they have one, so
    multi-valued fields keep their authored order between runs.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._metadata = MetaData()
        self._tables: dict[str, Table] = {}

    def table(self, table_name: str) -> Table:
        table = self._tables.get(table_name)
        if table is None:
            table = Table(table_name, self._metadata, autoload_with=self.engine)
            self._tables[table_name] = table
        return table

    def query_table(self, table_name: str, filter_column: str, filter_value: Any) -> Sequence[Row]:
        table = self.table(table_name)
        stmt = select(table).where(table.c[filter_column] == filter_value)
        if "delta" in table.c:
            stmt = stmt.order_by(table.c.delta)
        with self.engine.connect() as conn:
            return conn.execute(stmt).mappings().all()

    def file_exists(self, file_id: Any) -> Any:
        table = self.table(FILE_TABLE)
        with self.engine.connect() as conn:
            fid = conn.execute(select(table.c.fid).where(table.c.fid == file_id)).scalar_one_or_none()
        if fid is None:
            raise FileNotRegisteredError(file_id)
        return fid


class SqlRowSource:
    def __init__(self, lookup: SqlRelationalLookup):
        self.lookup = lookup

    def rows_of_type(self, content_type: str) -> Iterator[Row]:
        node = self.lookup.table(NODE_TABLE)
        stmt = select(node).where(node.c.type == content_type).order_by(node.c.nid)
        with self.lookup.engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        yield from rows
