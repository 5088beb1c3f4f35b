"""Shared fixtures: in-memory collaborators and a small SQLite copy of the legacy schema."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from sqlalchemy import Column, Integer, MetaData, Numeric, String, Table, create_engine

from contentbridge_core.errors import FileNotRegisteredError


class FakeLookup:
    """Dict-backed lookup: {table_name: [row, ...]}; records every query."""

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None, files: set[Any] | None = None):
        self.tables = tables or {}
        self.files = files if files is not None else set()
        self.queries: list[tuple[str, str, Any]] = []

    def query_table(self, table_name, filter_column, filter_value):
        self.queries.append((table_name, filter_column, filter_value))
        return [dict(r) for r in self.tables.get(table_name, []) if r.get(filter_column) == filter_value]

    def file_exists(self, file_id):
        if file_id not in self.files:
            raise FileNotRegisteredError(file_id)
        return file_id


class FakeRowSource:
    def __init__(self, rows_by_type: dict[str, list[dict[str, Any]]]):
        self.rows_by_type = rows_by_type

    def rows_of_type(self, content_type):
        return list(self.rows_by_type.get(content_type, []))


class RecordingSink:
    def __init__(self):
        self.writes: list[tuple[Path, dict[str, Any]]] = []

    def write(self, path, document):
        self.writes.append((path, dict(document)))


@pytest.fixture
def article_row() -> dict[str, Any]:
    return {"nid": 5, "type": "article", "title": "Hello", "uid": 9, "created": 1000000000, "changed": 1000000500}


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """File-backed SQLite database with the handful of tables an article export touches."""
    url = f"sqlite:///{tmp_path / 'legacy.db'}"
    engine = create_engine(url)
    md = MetaData()
    node = Table(
        "node",
        md,
        Column("nid", Integer, primary_key=True),
        Column("type", String(32)),
        Column("title", String(255)),
        Column("uid", Integer),
        Column("created", Integer),
        Column("changed", Integer),
    )
    tags = Table(
        "field_data_field_tags",
        md,
        Column("entity_id", Integer),
        Column("delta", Integer),
        Column("field_tags_tid", Integer),
    )
    image = Table(
        "field_data_field_image",
        md,
        Column("entity_id", Integer),
        Column("delta", Integer),
        Column("field_image_fid", Integer),
    )
    price = Table(
        "field_data_field_price",
        md,
        Column("entity_id", Integer),
        Column("delta", Integer),
        Column("field_price_value", Numeric(10, 2)),
    )
    files = Table("file_managed", md, Column("fid", Integer, primary_key=True), Column("uri", String(255)))
    md.create_all(engine)
    with engine.begin() as conn:
        conn.execute(
            node.insert(),
            [
                {"nid": 5, "type": "article", "title": "Hello", "uid": 9, "created": 1000000000, "changed": 1000000500},
                {"nid": 6, "type": "article", "title": "Second", "uid": 2, "created": 1000001000, "changed": 1000001000},
                {"nid": 7, "type": "page", "title": "About", "uid": 1, "created": 1000002000, "changed": 1000002000},
            ],
        )
        # Inserted out of delta order on purpose.
        conn.execute(
            tags.insert(),
            [
                {"entity_id": 6, "delta": 1, "field_tags_tid": 30},
                {"entity_id": 6, "delta": 0, "field_tags_tid": 31},
            ],
        )
        conn.execute(image.insert(), [{"entity_id": 5, "delta": 0, "field_image_fid": 42}])
        conn.execute(price.insert(), [{"entity_id": 5, "delta": 0, "field_price_value": "12.50"}])
        conn.execute(files.insert(), [{"fid": 42, "uri": "public://hello.png"}])
    engine.dispose()
    return url
