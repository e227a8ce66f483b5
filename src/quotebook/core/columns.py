# ABOUTME: Column names shared by the quote importer and exporter.
# ABOUTME: Exported files use these headers; imports match them case-insensitively.

BOOK = "Book"
AUTHOR = "Author"
TAGS = "Tags"
DATE = "Date"
QUOTE = "Quote"
PAGE = "Page"
CHAPTER = "Chapter"
FAVORITE = "Favorite"

ALL_COLUMNS = (BOOK, AUTHOR, TAGS, DATE, QUOTE, PAGE, CHAPTER, FAVORITE)
REQUIRED_COLUMNS = (QUOTE, BOOK, AUTHOR)

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "x", "*"})


def parse_flag(value: object) -> bool:
    """Read a favorite flag from a file cell: true/yes/1/x count as set."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES
