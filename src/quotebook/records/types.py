# ABOUTME: Core record data structures for the quote library.
# ABOUTME: Author, Book, Tag, Quote and Location are plain data shared by every layer.

import re
from dataclasses import dataclass, field
from datetime import datetime

_PAGE_RE = re.compile(r"\b(?:page|pg|p)\.?\s*(\d+)", re.IGNORECASE)
_CHAPTER_RE = re.compile(r"\b(?:chapter|chap|ch)\.?\s*([^,;]+)", re.IGNORECASE)


@dataclass(frozen=True)
class Author:
    """A person who wrote at least one book in the library."""

    id: int
    name: str


@dataclass(frozen=True)
class Book:
    """A book, owned by exactly one author."""

    id: int
    title: str
    author_id: int


@dataclass(frozen=True)
class Tag:
    """A free-form, lowercased label attached to quotes."""

    id: int
    name: str


@dataclass(frozen=True)
class Location:
    """Where in a book a quote was found. Either part may be missing."""

    page: int | None = None
    chapter: str | None = None

    @classmethod
    def parse(cls, text: str) -> "Location | None":
        """Parse markers like '12', 'p. 12', 'ch. 3' or 'ch 3, p 12'.

        Returns None for blank input. Raises ValueError when the text has
        neither a page nor a chapter in it.
        """
        text = text.strip()
        if not text:
            return None
        if text.isdecimal():
            return cls(page=int(text))

        page_match = _PAGE_RE.search(text)
        chapter_match = _CHAPTER_RE.search(text)
        if page_match is None and chapter_match is None:
            raise ValueError(f"Cannot read a page or chapter from '{text}'")

        page = int(page_match.group(1)) if page_match else None
        chapter = None
        if chapter_match:
            # "ch 3 p 12" without a separator leaves the page in the chapter group
            chapter = _PAGE_RE.sub("", chapter_match.group(1)).strip() or None
        return cls(page=page, chapter=chapter)

    def __str__(self) -> str:
        parts = []
        if self.chapter:
            parts.append(f"ch. {self.chapter}")
        if self.page is not None:
            parts.append(f"p. {self.page}")
        return ", ".join(parts)


@dataclass(frozen=True)
class Quote:
    """A stored excerpt.

    The quote references its book by id and its tags by id set; the store
    guarantees every referenced record exists. created_at is timezone-aware UTC.
    """

    id: int
    book_id: int
    text: str
    created_at: datetime
    location: Location | None = None
    tag_ids: frozenset[int] = field(default_factory=frozenset)
    favorite: bool = False


@dataclass(frozen=True)
class QuoteDetail:
    """A quote joined with the book, author and tags it references."""

    quote: Quote
    book: Book
    author: Author
    tags: tuple[Tag, ...] = ()

    @property
    def tag_names(self) -> list[str]:
        """Tag names, alphabetically sorted."""
        return sorted(tag.name for tag in self.tags)
