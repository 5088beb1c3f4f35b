from pathlib import Path

import pytest

from contentbridge_core.errors import FileNotRegisteredError
from contentbridge_core.schema import load_schema
from export_service.content_type import ContentTypeExporter, export_content_types
from export_service.resolve import ResolverConfig

from conftest import FakeLookup, FakeRowSource, RecordingSink

ROWS = {
    "article": [
        {"nid": 5, "title": "Hello", "uid": 9, "created": 1000000000, "changed": 1000000500},
        {"nid": 6, "title": "World", "uid": 9, "created": 1000000000, "changed": 1000000500},
    ],
    "page": [{"nid": 7, "title": "About", "uid": 1, "created": 1000000000, "changed": 1000000000}],
}


class TestContentTypeExporter:
    def test_writes_one_document_per_row(self, capsys):
        sink = RecordingSink()
        exporter = ContentTypeExporter(
            config=ResolverConfig.build(load_schema("article", {})),
            rows=FakeRowSource(ROWS),
            lookup=FakeLookup(),
            sink=sink,
            entries_dir=Path("out/entries"),
        )
        assert exporter.export() == 2
        assert [p for p, _ in sink.writes] == [
            Path("out/entries/article/article_5.json"),
            Path("out/entries/article/article_6.json"),
        ]
        assert "[export] Saving article - id: 5" in capsys.readouterr().out

    def test_dry_run_writes_nothing(self):
        exporter = ContentTypeExporter(
            config=ResolverConfig.build(load_schema("page", {})),
            rows=FakeRowSource(ROWS),
            lookup=FakeLookup(),
            sink=None,
            entries_dir=Path("out"),
        )
        assert exporter.export() == 1

    def test_failed_row_is_not_written(self):
        """Resolution errors propagate before anything reaches the sink."""
        sink = RecordingSink()
        lookup = FakeLookup({"field_data_field_image": [{"entity_id": 5, "field_image_fid": 42}]})
        exporter = ContentTypeExporter(
            config=ResolverConfig.build(load_schema("article", {"image": "field_image"})),
            rows=FakeRowSource(ROWS),
            lookup=lookup,
            sink=sink,
            entries_dir=Path("out"),
        )
        with pytest.raises(FileNotRegisteredError):
            exporter.export()
        assert sink.writes == []


class TestExportContentTypes:
    def test_all_types(self):
        schemas = {"article": load_schema("article", {}), "page": load_schema("page", {})}
        sink = RecordingSink()
        counts = export_content_types(
            schemas, rows=FakeRowSource(ROWS), lookup=FakeLookup(), sink=sink, entries_dir=Path("e")
        )
        assert counts == {"article": 2, "page": 1}
        assert len(sink.writes) == 3

    def test_only_selected(self):
        schemas = {"article": load_schema("article", {}), "page": load_schema("page", {})}
        counts = export_content_types(
            schemas, rows=FakeRowSource(ROWS), lookup=FakeLookup(), sink=None, entries_dir=Path("e"), only=["page"]
        )
        assert counts == {"page": 1}

    def test_cross_type_reference_matches_exported_id(self):
        """An article pointing at page 7 links to the id page 7 is exported under."""
        schemas = {
            "article": load_schema("article", {"related": {"type": "page", "table": "field_related"}}),
            "page": load_schema("page", {}),
        }
        lookup = FakeLookup({"field_data_field_related": [{"entity_id": 5, "field_related_target_id": 7}]})
        sink = RecordingSink()
        export_content_types(schemas, rows=FakeRowSource(ROWS), lookup=lookup, sink=sink, entries_dir=Path("e"))
        docs = {doc["id"]: doc for _, doc in sink.writes}
        assert docs["article_5"]["related"][0]["id"] in docs
