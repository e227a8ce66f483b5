# ABOUTME: The `quotebook ls` command for listing quotes.
# ABOUTME: Displays a Rich table of quotes, optionally narrowed by the shared filters.

from pathlib import Path
from typing import Any

import click
from rich.console import Console

from quotebook.cli.options import build_request, db_option, filter_options, store_session
from quotebook.cli.render import quote_card, quotes_table
from quotebook.query.engine import QueryEngine

console = Console()


@click.command("ls")
@filter_options
@click.option("--full", is_flag=True, help="Print every quote in full instead of a table.")
@db_option
def ls(full: bool, db_path: Path | None, **filters: Any) -> None:
    """List quotes, oldest first."""
    with store_session(db_path, console) as store:
        details = QueryEngine(store).search_details(build_request(**filters))

    if not details:
        console.print("[yellow]No quotes found.[/yellow]")
        return

    if full:
        for detail in details:
            console.print(quote_card(detail))
    else:
        console.print(quotes_table(details))
    console.print(f"\n[dim]{len(details)} quote(s)[/dim]")
