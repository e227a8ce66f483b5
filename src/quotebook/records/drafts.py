# ABOUTME: Validated draft types for creating and editing quotes.
# ABOUTME: Turns loosely typed user or file input into records the store can trust.

import re
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from quotebook.records.types import Location

_WHITESPACE_RE = re.compile(r"\s+")

TagInput = str | list[str] | tuple[str, ...] | set[str] | frozenset[str] | None


class DraftError(ValueError):
    """Raised when input cannot be turned into a valid draft."""


def normalize_name(name: str) -> str:
    """Collapse runs of whitespace and strip the ends of an author name or title."""
    return _WHITESPACE_RE.sub(" ", name).strip()


def normalize_tag(tag: str) -> str:
    """Lowercase a tag name and collapse its whitespace."""
    return normalize_name(tag).lower()


def split_tags(tags: TagInput) -> frozenset[str]:
    """Parse tags from a comma separated string or an iterable of names.

    Blank entries are dropped and names are normalized, so the result is a
    duplicate-free set.

    Raises:
        DraftError: If tags is neither a string nor a collection of strings.
    """
    if tags is None:
        return frozenset()
    if isinstance(tags, str):
        items = tags.split(",")
    elif isinstance(tags, (list, tuple, set, frozenset)) and all(isinstance(t, str) for t in tags):
        items = tags
    else:
        raise DraftError(f"Tags must be text, got {tags!r}")
    return frozenset(t for t in (normalize_tag(item) for item in items) if t)


def parse_timestamp(value: str | date | datetime | None) -> datetime | None:
    """Parse an ISO date or datetime into an aware UTC datetime.

    Naive values are assumed to be UTC. Plain dates map to midnight.

    Raises:
        DraftError: If the string is not an ISO-8601 date or datetime.
    """
    if value is None:
        return None
    if not isinstance(value, (str, date)):
        raise DraftError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = datetime.fromisoformat(value)
        except ValueError as exc:
            raise DraftError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    try:
        return value.astimezone(UTC)
    except OverflowError as exc:
        raise DraftError(f"Date {value.isoformat()} is out of range") from exc


def _require_text(value: object, what: str) -> str:
    if not isinstance(value, str):
        raise DraftError(f"{what} must be text, got {value!r}")
    return value


def _coerce_location(
    location: Location | str | None, page: int | str | None, chapter: str | int | None
) -> Location | None:
    if location is not None and not isinstance(location, Location):
        location = _require_text(location, "Location")
    if isinstance(location, str):
        try:
            location = Location.parse(location)
        except ValueError as exc:
            raise DraftError(str(exc)) from exc

    if page is None and chapter is None:
        return location

    if isinstance(page, bool) or not isinstance(page, (int, str, type(None))):
        raise DraftError(f"Page must be a number, got {page!r}")
    if isinstance(page, str):
        page = page.strip()
        if not page:
            page = None
        elif not page.isdecimal():
            raise DraftError(f"Page must be a number, got '{page}'")
        else:
            page = int(page)
    if isinstance(chapter, int) and not isinstance(chapter, bool):
        chapter = str(chapter)
    chapter = normalize_name(_require_text(chapter, "Chapter")) if chapter else None

    base = location or Location()
    merged = Location(
        page=page if page is not None else base.page,
        chapter=chapter if chapter else base.chapter,
    )
    return merged if merged.page is not None or merged.chapter else None


def _check_location(location: Location | None) -> None:
    if location is not None and location.page is not None and location.page < 1:
        raise DraftError(f"Page must be positive, got {location.page}")


def _clean_text(text: object) -> str:
    cleaned = _require_text(text, "Quote text").strip()
    if not cleaned:
        raise DraftError("Quote text cannot be empty")
    return cleaned


@dataclass(frozen=True)
class QuoteDraft:
    """A new quote waiting to be stored.

    Use QuoteDraft.create() to build one from raw input; it normalizes
    names and tags and rejects malformed values before anything reaches
    the database.
    """

    text: str
    book_title: str
    author_name: str
    tags: frozenset[str] = field(default_factory=frozenset)
    location: Location | None = None
    favorite: bool = False
    created_at: datetime | None = None

    @classmethod
    def create(
        cls,
        *,
        text: str,
        book: str,
        author: str,
        tags: TagInput = None,
        location: Location | str | None = None,
        page: int | str | None = None,
        chapter: str | None = None,
        favorite: bool = False,
        created_at: str | date | datetime | None = None,
    ) -> "QuoteDraft":
        """Validate raw input and build a draft.

        Raises:
            DraftError: On empty or non-text text, title or author, a bad
                page, chapter, tags or date.
        """
        title = normalize_name(_require_text(book or "", "Book title"))
        if not title:
            raise DraftError("Book title cannot be empty")
        author_name = normalize_name(_require_text(author or "", "Author"))
        if not author_name:
            raise DraftError("Author cannot be empty")

        resolved = _coerce_location(location, page, chapter)
        _check_location(resolved)

        return cls(
            text=_clean_text(text or ""),
            book_title=title,
            author_name=author_name,
            tags=split_tags(tags),
            location=resolved,
            favorite=bool(favorite),
            created_at=parse_timestamp(created_at),
        )


@dataclass(frozen=True)
class QuoteEdit:
    """Changes to an existing quote. Fields left as None stay unchanged.

    To clear a location pass clear_location=True; to drop every tag pass an
    empty tag set.
    """

    text: str | None = None
    location: Location | None = None
    clear_location: bool = False
    tags: frozenset[str] | None = None
    favorite: bool | None = None

    @classmethod
    def create(
        cls,
        *,
        text: str | None = None,
        location: Location | str | None = None,
        page: int | str | None = None,
        chapter: str | None = None,
        tags: TagInput = None,
        favorite: bool | None = None,
    ) -> "QuoteEdit":
        """Validate raw input and build an edit.

        A blank location string clears the stored location.

        Raises:
            DraftError: On empty or non-text text, a bad page, chapter or tags.
        """
        clear = isinstance(location, str) and not location.strip()
        resolved = _coerce_location(location, page, chapter)
        _check_location(resolved)
        return cls(
            text=_clean_text(text) if text is not None else None,
            location=resolved,
            clear_location=clear,
            tags=split_tags(tags) if tags is not None else None,
            favorite=favorite,
        )

    @property
    def is_empty(self) -> bool:
        """Whether this edit would change nothing."""
        return (
            self.text is None
            and self.location is None
            and not self.clear_location
            and self.tags is None
            and self.favorite is None
        )
