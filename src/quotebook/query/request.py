# ABOUTME: QueryRequest and its parts: the structured description of a quote search.
# ABOUTME: All fields are optional; an absent field places no constraint on results.

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from enum import Enum


class TargetField(str, Enum):
    """Which value of a quote a fuzzy text query is matched against."""

    TEXT = "text"
    BOOK = "book"
    AUTHOR = "author"
    TAG = "tag"


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


@dataclass(frozen=True)
class DateRange:
    """Half-open range [start, end) of quote creation times. Either bound may be open."""

    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def on(cls, day: date) -> "DateRange":
        """Every quote recorded on one calendar day (UTC)."""
        return cls(start=_day_start(day), end=_day_start(day + timedelta(days=1)))

    @classmethod
    def between(cls, first_day: date | None, last_day: date | None) -> "DateRange":
        """Quotes recorded from first_day through last_day, both inclusive."""
        return cls(
            start=_day_start(first_day) if first_day else None,
            end=_day_start(last_day + timedelta(days=1)) if last_day else None,
        )

    def contains(self, moment: datetime) -> bool:
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment >= self.end:
            return False
        return True


@dataclass(frozen=True)
class QueryRequest:
    """A quote search.

    book, author and tag are exact (case-insensitive) names; text_query is
    fuzzy matched against target_field after the exact filters have narrowed
    the candidates.
    """

    book: str | None = None
    author: str | None = None
    tag: str | None = None
    favorite_only: bool = False
    text_query: str | None = None
    target_field: TargetField = TargetField.TEXT
    date_range: DateRange | None = None

    @property
    def has_text_query(self) -> bool:
        return bool(self.text_query and self.text_query.strip())

    @property
    def has_index_filters(self) -> bool:
        return self.book is not None or self.author is not None or self.tag is not None

    @property
    def is_unconstrained(self) -> bool:
        """True when the request matches every quote in the store."""
        return not (
            self.has_index_filters
            or self.favorite_only
            or self.has_text_query
            or self.date_range is not None
        )
