# ABOUTME: Library statistics: totals and quote counts per author, book, and month.
# ABOUTME: Computed from the store's listing API without touching the database directly.

from collections import Counter
from dataclasses import dataclass, field

from quotebook.db.store import QuoteStore, StoreCounts


@dataclass
class LibraryStats:
    """Aggregate counts over the whole quote library."""

    counts: StoreCounts
    favorites: int = 0
    quotes_per_author: list[tuple[str, int]] = field(default_factory=list)
    quotes_per_book: list[tuple[str, str, int]] = field(default_factory=list)
    quotes_per_month: list[tuple[str, int]] = field(default_factory=list)


def collect_stats(store: QuoteStore) -> LibraryStats:
    """Count quotes by author, by book, and by month of creation.

    Author and book lists are sorted by count, most quoted first, then by
    name. Months are 'YYYY-MM' strings in calendar order.
    """
    books = {book.id: book for book in store.list_books()}
    authors = {author.id: author for author in store.list_authors()}

    per_book: Counter[int] = Counter()
    per_month: Counter[str] = Counter()
    favorites = 0
    for quote in store.list_quotes():
        per_book[quote.book_id] += 1
        per_month[f"{quote.created_at.year:04d}-{quote.created_at.month:02d}"] += 1
        favorites += quote.favorite

    per_author: Counter[int] = Counter()
    for book_id, count in per_book.items():
        per_author[books[book_id].author_id] += count

    return LibraryStats(
        counts=store.counts(),
        favorites=favorites,
        quotes_per_author=sorted(
            ((authors[aid].name, count) for aid, count in per_author.items()),
            key=lambda item: (-item[1], item[0].lower()),
        ),
        quotes_per_book=sorted(
            (
                (books[bid].title, authors[books[bid].author_id].name, count)
                for bid, count in per_book.items()
            ),
            key=lambda item: (-item[2], item[0].lower()),
        ),
        quotes_per_month=sorted(per_month.items()),
    )
