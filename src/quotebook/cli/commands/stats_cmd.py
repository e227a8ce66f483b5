# ABOUTME: The `quotebook stats` command for summarizing the quote library.
# ABOUTME: Shows totals plus the most quoted authors and books and quotes per month.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from quotebook.cli.options import db_option, store_session
from quotebook.core.stats import collect_stats

console = Console()


@click.command("stats")
@click.option("--top", type=int, default=10, show_default=True, help="Rows per ranking.")
@db_option
def stats(top: int, db_path: Path | None) -> None:
    """Show library statistics."""
    with store_session(db_path, console) as store:
        summary = collect_stats(store)

    counts = summary.counts
    console.print(
        f"[bold]{counts.quotes}[/bold] quote(s), [bold]{counts.books}[/bold] book(s), "
        f"[bold]{counts.authors}[/bold] author(s), [bold]{counts.tags}[/bold] tag(s), "
        f"[bold]{summary.favorites}[/bold] favorite(s)"
    )
    if counts.quotes == 0:
        return

    authors = Table(title="Most quoted authors")
    authors.add_column("Author")
    authors.add_column("Quotes", justify="right")
    for name, count in summary.quotes_per_author[:top]:
        authors.add_row(Text(name), str(count))
    console.print(authors)

    books = Table(title="Most quoted books")
    books.add_column("Book", style="italic")
    books.add_column("Author")
    books.add_column("Quotes", justify="right")
    for title, author_name, count in summary.quotes_per_book[:top]:
        books.add_row(Text(title), Text(author_name), str(count))
    console.print(books)

    months = Table(title="Quotes per month")
    months.add_column("Month")
    months.add_column("Quotes", justify="right")
    for month, count in summary.quotes_per_month:
        months.add_row(month, str(count))
    console.print(months)
