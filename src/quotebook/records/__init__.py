# ABOUTME: Record model package for the quote library.
# ABOUTME: Exports the entity dataclasses and the validated draft types.

from quotebook.records.drafts import (
    DraftError,
    QuoteDraft,
    QuoteEdit,
    normalize_name,
    normalize_tag,
    parse_timestamp,
    split_tags,
)
from quotebook.records.types import Author, Book, Location, Quote, QuoteDetail, Tag

__all__ = [
    "Author",
    "Book",
    "DraftError",
    "Location",
    "Quote",
    "QuoteDetail",
    "QuoteDraft",
    "QuoteEdit",
    "Tag",
    "normalize_name",
    "normalize_tag",
    "parse_timestamp",
    "split_tags",
]
