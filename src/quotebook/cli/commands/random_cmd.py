# ABOUTME: The `quotebook random` command for showing a random quote.
# ABOUTME: Samples uniformly among the quotes matching the shared filters.

from pathlib import Path
from typing import Any

import click
from rich.console import Console

from quotebook.cli.options import build_request, db_option, filter_options, store_session
from quotebook.cli.render import quote_card
from quotebook.query.engine import QueryEngine

console = Console()


@click.command("random")
@filter_options
@click.option("--query", "-q", "text_query", default=None, help="Only quotes fuzzily matching this text.")
@db_option
def random_quote(text_query: str | None, db_path: Path | None, **filters: Any) -> None:
    """Show a random quote."""
    with store_session(db_path, console) as store:
        quote = QueryEngine(store).random(build_request(text_query=text_query, **filters))
        if quote is None:
            console.print("[yellow]No quotes found.[/yellow]")
            return
        detail = store.describe(quote)

    console.print(quote_card(detail))
