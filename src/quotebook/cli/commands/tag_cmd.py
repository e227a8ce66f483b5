# ABOUTME: The `quotebook tag` command group for inspecting tags.
# ABOUTME: Lists every tag with the number of quotes carrying it.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from quotebook.cli.options import db_option, store_session
from quotebook.db.store import ByTag

console = Console()


@click.group("tag")
def tag() -> None:
    """Inspect quote tags."""


@tag.command("ls")
@click.option("--all", "show_unused", is_flag=True, help="Include tags no quote uses any more.")
@db_option
def tag_ls(show_unused: bool, db_path: Path | None) -> None:
    """List tags with quote counts, alphabetically."""
    with store_session(db_path, console) as store:
        counts = [(t.name, store.count_quotes(ByTag(t.id))) for t in store.list_tags()]

    counts = sorted(c for c in counts if show_unused or c[1] > 0)
    if not counts:
        console.print("[yellow]No tags in the library.[/yellow]")
        return

    table = Table()
    table.add_column("Tag", style="cyan")
    table.add_column("Quotes", style="dim", justify="right")
    for name, count in counts:
        table.add_row(Text(name), str(count))
    console.print(table)
