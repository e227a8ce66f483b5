# ABOUTME: The `quotebook import` command for loading quotes from a file.
# ABOUTME: Reads tab-separated or JSON files and reports added, skipped and failed rows.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from quotebook.cli.options import db_option, fail, store_session
from quotebook.core.importer import ImportFormatError, import_json, import_tsv

console = Console()


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "file_format",
    type=click.Choice(["tsv", "json"]),
    default=None,
    help="File format (default: from the file extension).",
)
@db_option
def import_quotes(path: Path, file_format: str | None, db_path: Path | None) -> None:
    """Import quotes from a TSV or JSON file at PATH."""
    use_json = file_format == "json" or (file_format is None and path.suffix.lower() == ".json")
    with store_session(db_path, console) as store:
        try:
            result = import_json(path, store) if use_json else import_tsv(path, store)
        except ImportFormatError as exc:
            fail(console, str(exc), exc)
        except OSError as exc:
            fail(console, f"Cannot read {path}: {exc}", exc)

    console.print(
        f"\n[bold]Import complete:[/bold] {result.added} added, "
        f"{result.skipped} skipped, {result.errors} error(s)"
    )
    for where, message in result.error_details:
        console.print(f"  [red]{escape(where)}[/red]: {escape(message)}")
