# ABOUTME: The `quotebook author` command group for listing and deleting authors.
# ABOUTME: Deleting an author with books requires --cascade.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from quotebook.cli.options import db_option, fail, store_session
from quotebook.db.errors import HasDependentsError, NotFoundError
from quotebook.db.store import ByAuthor

console = Console()


@click.group("author")
def author() -> None:
    """Manage authors."""


@author.command("ls")
@db_option
def author_ls(db_path: Path | None) -> None:
    """List authors with their quote counts."""
    with store_session(db_path, console) as store:
        rows = [(a.id, a.name, store.count_quotes(ByAuthor(a.id))) for a in store.list_authors()]

    if not rows:
        console.print("[yellow]No authors in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Author", style="bold")
    table.add_column("Quotes", justify="right")
    for author_id, name, count in rows:
        table.add_row(str(author_id), Text(name), str(count))
    console.print(table)


@author.command("rm")
@click.argument("author_id", type=int)
@click.option("--cascade", is_flag=True, help="Also delete the author's books and quotes.")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@db_option
def author_rm(author_id: int, cascade: bool, yes: bool, db_path: Path | None) -> None:
    """Delete author AUTHOR_ID."""
    with store_session(db_path, console) as store:
        record = store.get_author(author_id)
        if record is None:
            fail(console, f"Author {author_id} not found.")
        if not yes:
            click.confirm(f"Delete {record.name}?", abort=True)
        try:
            result = store.delete_author(author_id, cascade=cascade)
        except HasDependentsError as exc:
            console.print(f"[yellow]{escape(str(exc))}. Use --cascade to delete them too.[/yellow]")
            raise SystemExit(1) from exc
        except NotFoundError as exc:
            fail(console, f"Author {author_id} not found.", exc)

    console.print(
        f"Deleted author #{author_id} with {result.books} book(s) and {result.quotes} quote(s)."
    )
