# ABOUTME: Query engine that answers QueryRequests using the quote store's indexes.
# ABOUTME: Intersects exact filters, then fuzzy scores and ranks the remaining candidates.

import logging
from dataclasses import dataclass, field

from quotebook.db.store import ByAuthor, ByBook, ByIds, ByTag, QuoteStore, RandomSource
from quotebook.query.request import QueryRequest, TargetField
from quotebook.query.scoring import Scorer, subsequence_score
from quotebook.records.types import Quote, QuoteDetail

logger = logging.getLogger(__name__)


@dataclass
class _NameCache:
    """Per-search memo of book titles, author names and tag names by id."""

    store: QuoteStore
    books: dict[int, tuple[str, int]] = field(default_factory=dict)
    authors: dict[int, str] = field(default_factory=dict)
    tags: dict[int, str] = field(default_factory=dict)

    def _book(self, book_id: int) -> tuple[str, int]:
        if book_id not in self.books:
            book = self.store.get_book(book_id)
            self.books[book_id] = (book.title, book.author_id) if book else ("", 0)
        return self.books[book_id]

    def book_title(self, quote: Quote) -> str:
        return self._book(quote.book_id)[0]

    def author_name(self, quote: Quote) -> str:
        author_id = self._book(quote.book_id)[1]
        if author_id not in self.authors:
            author = self.store.get_author(author_id)
            self.authors[author_id] = author.name if author else ""
        return self.authors[author_id]

    def tag_names(self, quote: Quote) -> list[str]:
        names = []
        for tag_id in sorted(quote.tag_ids):
            if tag_id not in self.tags:
                tag = self.store.get_tag(tag_id)
                self.tags[tag_id] = tag.name if tag else ""
            names.append(self.tags[tag_id])
        return names


class QueryEngine:
    """Turns QueryRequests into ordered quote lists. Never writes to the store."""

    def __init__(self, store: QuoteStore, scorer: Scorer = subsequence_score) -> None:
        self._store = store
        self._scorer = scorer

    def _candidate_ids(self, request: QueryRequest) -> set[int] | None:
        """Intersect the index sets named by the request.

        Returns None when the request names no book, author or tag, meaning
        every quote is a candidate. A name that matches nothing gives an
        empty set rather than an error.
        """
        if not request.has_index_filters:
            return None

        candidates: set[int] | None = None

        def narrow(ids: set[int]) -> set[int]:
            return ids if candidates is None else candidates & ids

        if request.author is not None:
            author = self._store.find_author(request.author)
            if author is None:
                return set()
            candidates = narrow(self._store.quote_ids_for(ByAuthor(author.id)))

        if request.book is not None and candidates != set():
            book_ids: set[int] = set()
            for book in self._store.find_books(request.book):
                book_ids |= self._store.quote_ids_for(ByBook(book.id))
            candidates = narrow(book_ids)

        if request.tag is not None and candidates != set():
            tag = self._store.find_tag(request.tag)
            if tag is None:
                return set()
            candidates = narrow(self._store.quote_ids_for(ByTag(tag.id)))

        return candidates if candidates is not None else set()

    def _filtered(self, request: QueryRequest) -> list[Quote]:
        ids = self._candidate_ids(request)
        if ids is None:
            quotes = list(self._store.list_quotes())
        elif not ids:
            return []
        else:
            quotes = self._store.get_quotes(ids)

        if request.favorite_only:
            quotes = [q for q in quotes if q.favorite]
        if request.date_range is not None:
            quotes = [q for q in quotes if request.date_range.contains(q.created_at)]
        return quotes

    def _field_values(self, quote: Quote, target: TargetField, names: _NameCache) -> list[str]:
        if target is TargetField.TEXT:
            return [quote.text]
        if target is TargetField.BOOK:
            return [names.book_title(quote)]
        if target is TargetField.AUTHOR:
            return [names.author_name(quote)]
        return names.tag_names(quote)

    def _score(self, query: str, quote: Quote, target: TargetField, names: _NameCache) -> float | None:
        scores = [
            score
            for value in self._field_values(quote, target, names)
            if (score := self._scorer(query, value)) is not None
        ]
        return max(scores) if scores else None

    def search(self, request: QueryRequest) -> list[Quote]:
        """Find the quotes matching a request.

        Without a text query, results are ordered by creation time. With one,
        non-matching quotes are dropped and the rest ordered by score, best
        first, with creation time breaking ties. Ids break any remaining tie,
        so the same store and request always give the same order.
        """
        quotes = self._filtered(request)

        if not request.has_text_query:
            return sorted(quotes, key=lambda q: (q.created_at, q.id))

        query = request.text_query or ""
        names = _NameCache(self._store)
        scored = []
        for quote in quotes:
            score = self._score(query, quote, request.target_field, names)
            if score is not None:
                scored.append((score, quote))

        logger.debug(
            "Fuzzy query %r on %s: %d of %d candidate(s) matched",
            query,
            request.target_field.value,
            len(scored),
            len(quotes),
        )
        scored.sort(key=lambda pair: (-pair[0], pair[1].created_at, pair[1].id))
        return [quote for _, quote in scored]

    def search_details(self, request: QueryRequest) -> list[QuoteDetail]:
        """Like search(), with each quote joined to its book, author and tags."""
        return [self._store.describe(quote) for quote in self.search(request)]

    def random(self, request: QueryRequest | None = None, rng: RandomSource | None = None) -> Quote | None:
        """Pick a uniformly random quote among those the request matches."""
        if request is None or request.is_unconstrained:
            return self._store.random_quote(rng=rng)
        ids = frozenset(quote.id for quote in self.search(request))
        if not ids:
            return None
        return self._store.random_quote(ByIds(ids), rng=rng)
