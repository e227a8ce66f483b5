# ABOUTME: The `quotebook export` command for saving quotes to a file.
# ABOUTME: Writes the filtered quotes as TSV or JSON that `quotebook import` can read back.

from pathlib import Path
from typing import Any

import click
from rich.console import Console

from quotebook.cli.options import build_request, db_option, fail, filter_options, store_session
from quotebook.core.exporter import export_json, export_tsv
from quotebook.query.engine import QueryEngine

console = Console()


@click.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "file_format",
    type=click.Choice(["tsv", "json"]),
    default=None,
    help="File format (default: from the file extension).",
)
@filter_options
@db_option
def export_quotes(path: Path, file_format: str | None, db_path: Path | None, **filters: Any) -> None:
    """Export quotes, optionally filtered, to PATH."""
    use_json = file_format == "json" or (file_format is None and path.suffix.lower() == ".json")
    with store_session(db_path, console) as store:
        details = QueryEngine(store).search_details(build_request(**filters))

    try:
        written = export_json(details, path) if use_json else export_tsv(details, path)
    except OSError as exc:
        fail(console, f"Cannot write {path}: {exc}", exc)

    console.print(f"Exported {written} quote(s) to {path}.")
