# ABOUTME: The `quotebook search` command for fuzzy searching quotes.
# ABOUTME: Ranks quotes by how closely a field matches the query, with an optional picker.

from pathlib import Path
from typing import Any

import click
from rich.console import Console

from quotebook.cli.options import build_request, db_option, filter_options, store_session
from quotebook.cli.picker import PickSession
from quotebook.cli.render import quote_card, quotes_table
from quotebook.query.engine import QueryEngine
from quotebook.query.request import TargetField

console = Console()


@click.command("search")
@click.argument("query")
@click.option(
    "--field",
    "target",
    type=click.Choice([f.value for f in TargetField]),
    default=TargetField.TEXT.value,
    show_default=True,
    help="Which field the query is matched against.",
)
@click.option("--limit", "-n", type=int, default=None, help="Show at most N results.")
@click.option("--pick", is_flag=True, help="Choose one result interactively and show it in full.")
@filter_options
@db_option
def search(
    query: str,
    target: str,
    limit: int | None,
    pick: bool,
    db_path: Path | None,
    **filters: Any,
) -> None:
    """Fuzzy search quotes for QUERY, best matches first."""
    request = build_request(text_query=query, target_field=TargetField(target), **filters)
    with store_session(db_path, console) as store:
        details = QueryEngine(store).search_details(request)

    if limit is not None:
        details = details[:limit]

    if not details:
        console.print("[yellow]No matches.[/yellow]")
        return

    if pick:
        chosen = PickSession(console=console).pick(details)
        if chosen is not None:
            console.print(quote_card(chosen))
        return

    console.print(quotes_table(details))
    console.print(f"\n[dim]{len(details)} match(es)[/dim]")
