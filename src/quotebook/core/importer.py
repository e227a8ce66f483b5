# ABOUTME: Bulk import of quotes from tab-separated or JSON files into the quote store.
# ABOUTME: Validates each record as a draft, skips duplicates, and tallies the outcome.

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from quotebook.core import columns
from quotebook.db.store import QuoteStore
from quotebook.records.drafts import DraftError, QuoteDraft

logger = logging.getLogger(__name__)


class ImportFormatError(ValueError):
    """Raised when an import file does not have the expected structure."""


@dataclass
class ImportResult:
    """Summary of an import operation."""

    added: int = 0
    skipped: int = 0
    errors: int = 0
    error_details: list[tuple[str, str]] = field(default_factory=list)
    quote_ids: list[int] = field(default_factory=list)


def _import_record(record: dict[str, Any], store: QuoteStore, where: str, result: ImportResult) -> None:
    """Validate one record and store it unless the same quote already exists."""
    try:
        draft = QuoteDraft.create(
            text=record.get(columns.QUOTE) or "",
            book=record.get(columns.BOOK) or "",
            author=record.get(columns.AUTHOR) or "",
            tags=record.get(columns.TAGS),
            created_at=record.get(columns.DATE) or None,
            page=record.get(columns.PAGE) or None,
            chapter=record.get(columns.CHAPTER) or None,
            favorite=columns.parse_flag(record.get(columns.FAVORITE)),
        )
    except DraftError as exc:
        logger.warning("Skipping %s: %s", where, exc)
        result.errors += 1
        result.error_details.append((where, str(exc)))
        return

    if store.has_quote(draft.book_title, draft.author_name, draft.text):
        result.skipped += 1
        return

    result.quote_ids.append(store.put_quote(draft))
    result.added += 1


def _read_text(path: Path) -> str:
    """Read a whole import file, so a decoding error stops it before any row is stored."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ImportFormatError(f"Cannot read {path}: it is not UTF-8 text ({exc.reason})") from exc


def _match_headers(headers: list[str] | None, path: Path) -> dict[str, str]:
    """Map canonical column names to the headers actually used in the file."""
    by_upper = {name.upper(): name for name in columns.ALL_COLUMNS}
    found: dict[str, str] = {}
    for header in headers or []:
        canonical = by_upper.get(header.strip().upper())
        if canonical is not None and canonical not in found:
            found[canonical] = header

    missing = [name for name in columns.REQUIRED_COLUMNS if name not in found]
    if missing:
        raise ImportFormatError(
            f"Cannot read {path}: it needs tab-separated "
            f"{', '.join(columns.REQUIRED_COLUMNS)} columns (missing {', '.join(missing)})"
        )
    return found


def import_tsv(path: Path, store: QuoteStore) -> ImportResult:
    """Import quotes from a tab-separated file with a header row.

    Headers are matched case-insensitively. Quote, Book and Author columns
    are required; Tags (comma separated), Date, Page, Chapter and Favorite
    are optional.

    Raises:
        ImportFormatError: If the file is not UTF-8 or a required column is missing.
        OSError: If the file cannot be read.
    """
    reader = csv.DictReader(io.StringIO(_read_text(path), newline=""), delimiter="\t")
    headers = _match_headers(reader.fieldnames, path)

    result = ImportResult()
    for line_number, row in enumerate(reader, start=2):
        record = {name: row.get(header) for name, header in headers.items()}
        _import_record(record, store, f"{path.name}:{line_number}", result)

    logger.info(
        "Imported %s: %d added, %d skipped, %d error(s)",
        path, result.added, result.skipped, result.errors,
    )
    return result


def import_json(path: Path, store: QuoteStore) -> ImportResult:
    """Import quotes from a JSON array of objects, as written by export_json.

    Object keys are matched case-insensitively against the TSV column names.

    Raises:
        ImportFormatError: If the file is not UTF-8 or not a JSON array of objects.
        OSError: If the file cannot be read.
    """
    try:
        data = json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise ImportFormatError(f"Cannot read {path}: {exc}") from exc

    if not isinstance(data, list):
        raise ImportFormatError(f"Cannot read {path}: expected a JSON array of quotes")

    by_upper = {name.upper(): name for name in columns.ALL_COLUMNS}
    result = ImportResult()
    for position, item in enumerate(data, start=1):
        where = f"{path.name}[{position}]"
        if not isinstance(item, dict):
            result.errors += 1
            result.error_details.append((where, "not a JSON object"))
            continue
        record = {
            by_upper[key.upper()]: value
            for key, value in item.items()
            if key.upper() in by_upper
        }
        _import_record(record, store, where, result)

    logger.info(
        "Imported %s: %d added, %d skipped, %d error(s)",
        path, result.added, result.skipped, result.errors,
    )
    return result


def import_file(path: Path, store: QuoteStore) -> ImportResult:
    """Import from a .json file, or treat anything else as tab-separated."""
    if path.suffix.lower() == ".json":
        return import_json(path, store)
    return import_tsv(path, store)
