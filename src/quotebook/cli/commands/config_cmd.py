# ABOUTME: The `quotebook config` command group for the store location and its contents.
# ABOUTME: Shows the settings, clears every record, or moves the store to a new directory.

import os
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from quotebook.cli.options import DB_ENVVAR, db_option, fail, store_session
from quotebook.core.config import ConfigError, Settings, config_path, load_settings, save_settings
from quotebook.db.connection import DEFAULT_DB_PATH
from quotebook.db.errors import StoreError
from quotebook.db.store import delete_store

console = Console()


@click.group("config")
def config() -> None:
    """Show or change where the quote store lives."""


@config.command("show")
@db_option
def config_show(db_path: Path | None) -> None:
    """Print the settings file and the quote store in use."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        fail(console, str(exc), exc)

    if db_path is not None:
        source = "--db or $" + DB_ENVVAR
    elif settings.db_path is not None:
        source = "settings file"
    else:
        source = "default"
    store_path = db_path or settings.db_path or DEFAULT_DB_PATH

    console.print(f"[bold]Settings file:[/bold] {escape(str(config_path()))}")
    console.print(f"[bold]Quote store:[/bold]   {escape(str(store_path))} [dim]({source})[/dim]")


@config.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@db_option
def config_clear(yes: bool, db_path: Path | None) -> None:
    """Delete every quote, book, author and tag in the store."""
    with store_session(db_path, console) as store:
        if not yes:
            click.confirm(
                f"Delete every quote, book, author and tag in {store.path}?", abort=True
            )
        removed = store.clear()

    console.print(
        f"Cleared {removed.quotes} quote(s), {removed.books} book(s), "
        f"{removed.authors} author(s) and {removed.tags} tag(s)."
    )


@config.command("move")
@click.argument("new_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--delete-old", is_flag=True, help="Delete the old store once it has been copied.")
@db_option
def config_move(new_dir: Path, delete_old: bool, db_path: Path | None) -> None:
    """Move the quote store into NEW_DIR and remember the new location."""
    with store_session(db_path, console) as store:
        old_path = store.path
        target = (new_dir.expanduser() / old_path.name).resolve()
        if target == old_path.resolve():
            fail(console, f"The quote store is already in {new_dir}.")
        if target.exists():
            fail(console, f"Cannot move the quote store: {target} already exists.")
        store.backup_to(target)

    try:
        written = save_settings(Settings(db_path=target))
    except ConfigError as exc:
        fail(console, str(exc), exc)

    console.print(f"Moved quote store to {escape(str(target))}.")
    console.print(f"[dim]Saved the new location in {escape(str(written))}.[/dim]")
    if os.environ.get(DB_ENVVAR):
        console.print(
            f"[yellow]${DB_ENVVAR} is set and still takes precedence over the saved location.[/yellow]"
        )

    if not delete_old:
        console.print(f"[dim]The old store at {escape(str(old_path))} was kept.[/dim]")
        return

    try:
        delete_store(old_path)
    except StoreError as exc:
        fail(console, str(exc), exc)
    console.print(f"Deleted the old store at {escape(str(old_path))}.")
