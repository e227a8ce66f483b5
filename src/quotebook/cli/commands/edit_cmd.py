# ABOUTME: The `quotebook edit` command for changing a stored quote.
# ABOUTME: Updates text, location, tags or the favorite flag of one quote by ID.

from pathlib import Path

import click
from rich.console import Console

from quotebook.cli.options import db_option, fail, store_session
from quotebook.db.errors import NotFoundError
from quotebook.records.drafts import DraftError, QuoteEdit

console = Console()


@click.command("edit")
@click.argument("quote_id", type=int)
@click.option("--text", default=None, help="New quote text.")
@click.option("--tags", "-t", default=None, help="Replace all tags (comma separated, '' for none).")
@click.option("--location", "-l", default=None, help="New location, e.g. 'ch. 3, p. 12' ('' clears).")
@click.option("--page", "-p", default=None, help="New page number.")
@click.option("--chapter", "-c", default=None, help="New chapter.")
@click.option("--favorite/--no-favorite", default=None, help="Set or clear the favorite flag.")
@db_option
def edit(
    quote_id: int,
    text: str | None,
    tags: str | None,
    location: str | None,
    page: str | None,
    chapter: str | None,
    favorite: bool | None,
    db_path: Path | None,
) -> None:
    """Edit quote QUOTE_ID. With no options, opens its text in $EDITOR."""
    with store_session(db_path, console) as store:
        quote = store.get_quote(quote_id)
        if quote is None:
            fail(console, f"Quote {quote_id} not found.")

        try:
            change = QuoteEdit.create(
                text=text,
                tags=tags,
                location=location,
                page=page,
                chapter=chapter,
                favorite=favorite,
            )
            if change.is_empty:
                edited = click.edit(quote.text)
                if edited is None or edited.strip() == quote.text:
                    console.print("[yellow]Nothing changed.[/yellow]")
                    return
                change = QuoteEdit.create(text=edited)
        except DraftError as exc:
            fail(console, str(exc), exc)

        try:
            store.edit_quote(quote_id, change)
        except NotFoundError as exc:
            fail(console, f"Quote {quote_id} not found.", exc)

    console.print(f"Quote [bold]#{quote_id}[/bold] changed.")
