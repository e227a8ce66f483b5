# ABOUTME: The `quotebook show` command for displaying one quote in full.
# ABOUTME: Prints the quote card with author, book, location and tags.

from pathlib import Path

import click
from rich.console import Console

from quotebook.cli.options import db_option, fail, store_session
from quotebook.cli.render import quote_card

console = Console()


@click.command("show")
@click.argument("quote_id", type=int)
@db_option
def show(quote_id: int, db_path: Path | None) -> None:
    """Show quote QUOTE_ID in full."""
    with store_session(db_path, console) as store:
        quote = store.get_quote(quote_id)
        if quote is None:
            fail(console, f"Quote {quote_id} not found.")
        detail = store.describe(quote)

    console.print(quote_card(detail))
    console.print(f"[dim]Recorded {detail.quote.created_at:%Y-%m-%d %H:%M} UTC[/dim]")
