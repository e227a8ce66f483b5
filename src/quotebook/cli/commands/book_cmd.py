# ABOUTME: The `quotebook book` command group for listing and deleting books.
# ABOUTME: Deleting a book with quotes requires --cascade.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from quotebook.cli.options import db_option, fail, store_session
from quotebook.db.errors import HasDependentsError, NotFoundError
from quotebook.db.store import ByBook

console = Console()


@click.group("book")
def book() -> None:
    """Manage books."""


@book.command("ls")
@db_option
def book_ls(db_path: Path | None) -> None:
    """List books with their authors and quote counts."""
    with store_session(db_path, console) as store:
        authors = {author.id: author.name for author in store.list_authors()}
        rows = [
            (b.id, b.title, authors.get(b.author_id, "?"), store.count_quotes(ByBook(b.id)))
            for b in store.list_books()
        ]

    if not rows:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Quotes", justify="right")
    for book_id, title, author, count in rows:
        table.add_row(str(book_id), Text(title), Text(author), str(count))

    console.print(table)
    console.print(f"\n[dim]{len(rows)} book(s)[/dim]")


@book.command("rm")
@click.argument("book_id", type=int)
@click.option("--cascade", is_flag=True, help="Also delete the book's quotes.")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@db_option
def book_rm(book_id: int, cascade: bool, yes: bool, db_path: Path | None) -> None:
    """Delete book BOOK_ID, and its author if it has no other books."""
    with store_session(db_path, console) as store:
        record = store.get_book(book_id)
        if record is None:
            fail(console, f"Book {book_id} not found.")
        if not yes:
            what = " and all of its quotes" if cascade else ""
            click.confirm(f"Delete '{record.title}'{what}?", abort=True)
        try:
            result = store.delete_book(book_id, cascade=cascade)
        except HasDependentsError as exc:
            console.print(f"[yellow]{escape(str(exc))}. Use --cascade to delete them too.[/yellow]")
            raise SystemExit(1) from exc
        except NotFoundError as exc:
            fail(console, f"Book {book_id} not found.", exc)

    message = f"Deleted book #{book_id} and {result.quotes} quote(s)"
    if result.authors:
        message += " and its author"
    console.print(message + ".")
