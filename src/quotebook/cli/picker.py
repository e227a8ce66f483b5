# ABOUTME: Interactive picker for choosing one quote out of a list of search results.
# ABOUTME: Shows candidates a page at a time in a Rich table and prompts for a choice.

import click
from rich.console import Console
from rich.markup import escape

from quotebook.cli.render import quotes_table
from quotebook.records.types import QuoteDetail


class PickSession:
    """Interactive selection among ranked quote candidates.

    Shows one page of candidates, numbered from 1, then prompts for a
    number, the next or previous page, or quit.
    """

    def __init__(self, *, console: Console | None = None, page_size: int = 10) -> None:
        self._console = console or Console()
        self._page_size = page_size

    def pick(self, candidates: list[QuoteDetail]) -> QuoteDetail | None:
        """Let the user choose a candidate.

        Returns:
            The chosen candidate, or None if the user quits or there are none.
        """
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        pages = (len(candidates) + self._page_size - 1) // self._page_size
        page = 0
        while True:
            start = page * self._page_size
            shown = candidates[start : start + self._page_size]
            table = quotes_table(shown)
            table.title = f"Matches {start + 1}-{start + len(shown)} of {len(candidates)}"
            self._console.print(table)

            prompt = f"[1-{len(shown)}] Select"
            if page + 1 < pages:
                prompt += "  [n] Next"
            if page > 0:
                prompt += "  [p] Previous"
            prompt += "  [q] Quit"

            choice = click.prompt(prompt, type=str, default="1").strip().lower()
            if choice == "q":
                return None
            if choice == "n" and page + 1 < pages:
                page += 1
                continue
            if choice == "p" and page > 0:
                page -= 1
                continue
            if choice.isdecimal() and 1 <= int(choice) <= len(shown):
                return shown[int(choice) - 1]
            self._console.print(f"[yellow]Invalid choice: {escape(choice)}[/yellow]")
