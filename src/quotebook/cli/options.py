# ABOUTME: Shared Click options and helpers for Quotebook CLI commands.
# ABOUTME: Provides the --db option, search filter options, and scoped store access.

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any, NoReturn, TypeVar

import click
from rich.console import Console
from rich.markup import escape

from quotebook.core.config import CONFIG_ENVVAR, ConfigError, resolve_db_path
from quotebook.db.connection import DEFAULT_DB_PATH
from quotebook.db.errors import StoreError
from quotebook.db.store import QuoteStore, open_store
from quotebook.query.request import DateRange, QueryRequest, TargetField

F = TypeVar("F", bound=Callable[..., Any])

DB_ENVVAR = "QUOTEBOOK_DB"

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=DB_ENVVAR,
    default=None,
    help=(
        f"Path to the quote database (default: ${DB_ENVVAR}, then the path saved in "
        f"${CONFIG_ENVVAR}, then {DEFAULT_DB_PATH})"
    ),
)

_DATE = click.DateTime(formats=["%Y-%m-%d"])

_FILTER_OPTIONS = [
    click.option("--book", default=None, help="Only quotes from this book title."),
    click.option("--author", default=None, help="Only quotes by this author."),
    click.option("--tag", default=None, help="Only quotes with this tag."),
    click.option("--favorite", "favorite_only", is_flag=True, help="Only favorite quotes."),
    click.option("--from", "from_day", type=_DATE, default=None, help="Recorded on or after YYYY-MM-DD."),
    click.option("--to", "to_day", type=_DATE, default=None, help="Recorded on or before YYYY-MM-DD."),
    click.option("--on", "on_day", type=_DATE, default=None, help="Recorded on YYYY-MM-DD."),
]


def filter_options(func: F) -> F:
    """Attach the shared --book/--author/--tag/--favorite/--from/--to/--on options."""
    for option in reversed(_FILTER_OPTIONS):
        func = option(func)
    return func


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def build_request(
    *,
    book: str | None = None,
    author: str | None = None,
    tag: str | None = None,
    favorite_only: bool = False,
    from_day: datetime | None = None,
    to_day: datetime | None = None,
    on_day: datetime | None = None,
    text_query: str | None = None,
    target_field: TargetField = TargetField.TEXT,
) -> QueryRequest:
    """Translate parsed filter options into a QueryRequest. --on wins over --from/--to."""
    date_range = None
    if on_day is not None:
        date_range = DateRange.on(on_day.date())
    elif from_day is not None or to_day is not None:
        date_range = DateRange.between(_as_date(from_day), _as_date(to_day))

    return QueryRequest(
        book=book,
        author=author,
        tag=tag,
        favorite_only=favorite_only,
        text_query=text_query,
        target_field=target_field,
        date_range=date_range,
    )


def fail(console: Console, message: str, exc: BaseException | None = None) -> NoReturn:
    """Print an error in red and exit with status 1."""
    console.print(f"[red]{escape(message)}[/red]")
    raise SystemExit(1) from exc


@contextmanager
def store_session(db_path: Path | None, console: Console) -> Iterator[QuoteStore]:
    """Open the store for one command and always close it again.

    Without --db or $QUOTEBOOK_DB the store path comes from the settings
    file. Store and settings errors that escape the command are printed and
    end the process with exit status 1.
    """
    try:
        store = open_store(db_path or resolve_db_path())
    except (StoreError, ConfigError) as exc:
        fail(console, str(exc), exc)

    try:
        yield store
    except StoreError as exc:
        fail(console, str(exc), exc)
    finally:
        store.close()
