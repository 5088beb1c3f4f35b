from __future__ import annotations

from pathlib import Path

import typer

from contentbridge_core.db.session import engine_for
from contentbridge_core.db.tables import SqlRelationalLookup, SqlRowSource
from contentbridge_core.schema import EntityRefField, ScalarField, TagRefField
from contentbridge_core.settings import settings
from export_service.config_files import load_boolean_fields, load_content_types
from export_service.content_type import export_content_types
from export_service.settings import entries_dir
from export_service.sink import JsonFileSink

app = typer.Typer(help="Export legacy CMS nodes as linked JSON entries.")


@app.command()
def export(
    *,
    content_type: list[str] | None = typer.Option(
        None, "--content-type", "-t", help="Content type to export (repeatable). Defaults to all."
    ),
    content_types_json: Path = typer.Option(
        settings.content_types_json, help="JSON file mapping content types to field schemas."
    ),
    boolean_columns_json: Path | None = typer.Option(
        settings.boolean_columns_json, help="JSON list of field names holding booleans."
    ),
    database_url: str = typer.Option(settings.database_url, help="SQLAlchemy URL of the source database."),
    data_dir: Path = typer.Option(settings.data_dir, help="Export root; entries go to <data-dir>/entries."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve documents without writing them."),
) -> None:
    """
    Export every node of the selected content types.

    Note: requires access to the source database.
    """
    schemas = load_content_types(content_types_json)
    unknown = [t for t in content_type or [] if t not in schemas]
    if unknown:
        raise typer.BadParameter(f"Unknown content type(s): {', '.join(unknown)}. Known: {', '.join(schemas)}")

    lookup = SqlRelationalLookup(engine_for(database_url))
    counts = export_content_types(
        schemas,
        rows=SqlRowSource(lookup),
        lookup=lookup,
        sink=None if dry_run else JsonFileSink(),
        entries_dir=entries_dir(settings.model_copy(update={"data_dir": data_dir})),
        boolean_fields=load_boolean_fields(boolean_columns_json),
        only=content_type,
    )
    total = sum(counts.values())
    typer.echo(f"{'resolved' if dry_run else 'exported'}: {total} entries across {len(counts)} content type(s)")


@app.command("show-schema")
def show_schema(
    content_type: str,
    *,
    content_types_json: Path = typer.Option(
        settings.content_types_json, help="JSON file mapping content types to field schemas."
    ),
) -> None:
    """Print how each field of a content type is resolved."""
    schemas = load_content_types(content_types_json)
    schema = schemas.get(content_type)
    if schema is None:
        raise typer.BadParameter(f"Unknown content type: {content_type}. Known: {', '.join(schemas)}")

    typer.echo(f"{content_type}: {len(schema)} field(s)")
    for d in schema:
        if isinstance(d, ScalarField):
            typer.echo(f"  {d.key}: scalar/file {d.table} ({d.value_column} | {d.file_column})")
        elif isinstance(d, EntityRefField):
            typer.echo(f"  {d.key}: entry<{d.target_type}> {d.table} ({d.target_column})")
        elif isinstance(d, TagRefField):
            typer.echo(f"  {d.key}: tags {d.table} ({d.tag_column})")


if __name__ == "__main__":
    app()
