# ABOUTME: Rich renderables for quotes: a framed card for one quote and a table for many.
# ABOUTME: User text is escaped so brackets in quotes are never read as Rich markup.

from collections.abc import Iterable

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from quotebook.records.types import QuoteDetail

_EXCERPT_WIDTH = 60


def excerpt(text: str, width: int = _EXCERPT_WIDTH) -> str:
    """First line of a quote, shortened to width characters."""
    first_line = " ".join(text.split())
    if len(first_line) <= width:
        return first_line
    return first_line[: width - 1].rstrip() + "…"


def quote_card(detail: QuoteDetail) -> Panel:
    """A framed quote with its attribution, location and tags underneath."""
    quote = detail.quote
    attribution = Text(justify="right")
    attribution.append(detail.author.name, style="blue")
    attribution.append("\n")
    attribution.append(detail.book.title, style="cyan italic")
    if quote.location is not None:
        attribution.append(f"\n{quote.location}", style="dim")
    if detail.tags:
        attribution.append("\n" + ", ".join(detail.tag_names), style="dim")

    subtitle = "★ favorite" if quote.favorite else None
    return Panel(
        Group(Text(quote.text, justify="center"), Text(""), attribution),
        title=f"#{quote.id}",
        subtitle=subtitle,
        padding=(1, 2),
    )


def quotes_table(details: Iterable[QuoteDetail]) -> Table:
    """One row per quote: id, excerpt, book, author, tags and a favorite marker."""
    table = Table()
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Quote")
    table.add_column("Book", style="italic")
    table.add_column("Author")
    table.add_column("Tags", style="cyan")
    table.add_column("★", width=1)

    for detail in details:
        table.add_row(
            str(detail.quote.id),
            Text(excerpt(detail.quote.text)),
            Text(detail.book.title),
            Text(detail.author.name),
            Text(", ".join(detail.tag_names)),
            "★" if detail.quote.favorite else "",
        )
    return table
