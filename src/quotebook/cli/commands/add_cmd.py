# ABOUTME: The `quotebook add` command for recording a new quote.
# ABOUTME: Takes the text as an argument or from $EDITOR, with book, author and tags as options.

from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from quotebook.cli.options import db_option, fail, store_session
from quotebook.records.drafts import DraftError, QuoteDraft

console = Console()


@click.command("add")
@click.argument("text", required=False)
@click.option("--book", "-b", prompt="Book title", help="Title of the book quoted.")
@click.option("--author", "-a", prompt="Author", help="Author of the book.")
@click.option("--tags", "-t", default="", help="Comma separated tags.")
@click.option("--page", "-p", type=int, default=None, help="Page number.")
@click.option("--chapter", "-c", default=None, help="Chapter name or number.")
@click.option("--favorite", "-f", is_flag=True, help="Mark the quote as a favorite.")
@click.option(
    "--date",
    "recorded",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date the quote was recorded (default: now).",
)
@db_option
def add(
    text: str | None,
    book: str,
    author: str,
    tags: str,
    page: int | None,
    chapter: str | None,
    favorite: bool,
    recorded: datetime | None,
    db_path: Path | None,
) -> None:
    """Add a quote. Without TEXT, opens $EDITOR to write it."""
    if text is None:
        text = click.edit("\n# Write the quote above. Lines starting with # are ignored.\n")
        if text is not None:
            text = "\n".join(line for line in text.splitlines() if not line.startswith("#"))

    try:
        draft = QuoteDraft.create(
            text=text or "",
            book=book,
            author=author,
            tags=tags,
            page=page,
            chapter=chapter,
            favorite=favorite,
            created_at=recorded.date() if recorded else None,
        )
    except DraftError as exc:
        fail(console, str(exc), exc)

    with store_session(db_path, console) as store:
        quote_id = store.put_quote(draft)

    console.print(
        f"Added quote [bold]#{quote_id}[/bold] from [italic]{escape(draft.book_title)}[/italic]."
    )
