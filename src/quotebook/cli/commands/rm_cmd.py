# ABOUTME: The `quotebook rm` command for deleting a quote.
# ABOUTME: Asks for confirmation unless --yes is given.

from pathlib import Path

import click
from rich.console import Console

from quotebook.cli.options import db_option, fail, store_session
from quotebook.db.errors import NotFoundError

console = Console()


@click.command("rm")
@click.argument("quote_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@db_option
def rm(quote_id: int, yes: bool, db_path: Path | None) -> None:
    """Delete quote QUOTE_ID."""
    with store_session(db_path, console) as store:
        if store.get_quote(quote_id) is None:
            fail(console, f"Quote {quote_id} not found.")
        if not yes:
            click.confirm(f"Delete quote #{quote_id}?", abort=True)
        try:
            store.delete_quote(quote_id)
        except NotFoundError as exc:
            fail(console, f"Quote {quote_id} not found.", exc)

    console.print(f"Quote #{quote_id} deleted.")
