# ABOUTME: Converts between record dataclasses and SQLite rows.
# ABOUTME: Handles the timestamp and location columns of the quotes table.

from datetime import UTC, datetime
from typing import Any

from quotebook.db.errors import CorruptStoreError
from quotebook.records.types import Author, Book, Location, Quote, Tag

# Year is written separately: strftime does not zero-pad years below 1000.
_TIMESTAMP_FORMAT = "-%m-%dT%H:%M:%S.%fZ"


def format_timestamp(value: datetime) -> str:
    """Serialize an aware datetime as a sortable UTC string."""
    utc = value.astimezone(UTC)
    return f"{utc.year:04d}" + utc.strftime(_TIMESTAMP_FORMAT)


def parse_stored_timestamp(value: str) -> datetime:
    """Read a timestamp written by format_timestamp.

    Raises:
        CorruptStoreError: If the stored value is not an ISO-8601 timestamp.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise CorruptStoreError(f"Unreadable timestamp in quote store: {value!r}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def location_to_columns(location: Location | None) -> dict[str, Any]:
    """Split a Location into the location_page and location_chapter columns."""
    if location is None:
        return {"location_page": None, "location_chapter": None}
    return {"location_page": location.page, "location_chapter": location.chapter}


def row_to_location(row: Any) -> Location | None:
    page = row["location_page"]
    chapter = row["location_chapter"]
    if page is None and not chapter:
        return None
    return Location(page=page, chapter=chapter)


def row_to_quote(row: Any, tag_ids: frozenset[int]) -> Quote:
    """Convert a quotes row plus its tag ids to a Quote."""
    return Quote(
        id=row["id"],
        book_id=row["book_id"],
        text=row["text"],
        created_at=parse_stored_timestamp(row["created_at"]),
        location=row_to_location(row),
        tag_ids=tag_ids,
        favorite=bool(row["favorite"]),
    )


def row_to_book(row: Any) -> Book:
    return Book(id=row["id"], title=row["title"], author_id=row["author_id"])


def row_to_author(row: Any) -> Author:
    return Author(id=row["id"], name=row["name"])


def row_to_tag(row: Any) -> Tag:
    return Tag(id=row["id"], name=row["name"])
