from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from contentbridge_core.lookup import DocumentSink, RelationalLookup, RowSource
from contentbridge_core.schema import ContentSchema
from export_service.resolve.document import ResolverConfig, build_document


class ContentTypeExporter:
    """
    Export every node of one content type to `<entries_dir>/<type>/<id>.json`.

    A document reaches the sink only after all of its fields resolved; lookup
    errors propagate and stop the export.
    """

    def __init__(
        self,
        *,
        config: ResolverConfig,
        rows: RowSource,
        lookup: RelationalLookup,
        sink: DocumentSink | None,
        entries_dir: Path,
    ) -> None:
        self.config = config
        self.rows = rows
        self.lookup = lookup
        self.sink = sink
        self.entries_dir = entries_dir

    @property
    def content_type(self) -> str:
        return self.config.content_type

    def document_path(self, document_id: str) -> Path:
        return self.entries_dir / self.content_type / f"{document_id}.json"

    def export(self) -> int:
        written = 0
        for row in self.rows.rows_of_type(self.content_type):
            print(f"[export] Saving {self.content_type} - id: {row['nid']}")
            document = build_document(row, config=self.config, lookup=self.lookup)
            if self.sink is not None:
                self.sink.write(self.document_path(document["id"]), document)
            written += 1
        return written


def export_content_types(
    schemas: Mapping[str, ContentSchema],
    *,
    rows: RowSource,
    lookup: RelationalLookup,
    sink: DocumentSink | None,
    entries_dir: Path,
    boolean_fields: Iterable[str] = (),
    only: Iterable[str] | None = None,
) -> dict[str, int]:
    """Run one exporter per content type; returns documents written per type."""
    selected = list(only) if only else list(schemas)
    boolean_fields = frozenset(boolean_fields)
    counts: dict[str, int] = {}
    for content_type in selected:
        exporter = ContentTypeExporter(
            config=ResolverConfig.build(schemas[content_type], boolean_fields),
            rows=rows,
            lookup=lookup,
            sink=sink,
            entries_dir=entries_dir,
        )
        counts[content_type] = exporter.export()
        print(f"[export] {content_type}: {counts[content_type]} entries")
    return counts
