# ABOUTME: Export of quotes to tab-separated or JSON files for backup and sharing.
# ABOUTME: Writes the columns the importer reads, so exports restore cleanly.

import csv
import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from quotebook.core import columns
from quotebook.records.types import QuoteDetail


def detail_to_record(detail: QuoteDetail) -> dict[str, Any]:
    """Flatten a quote and its references into one export record."""
    location = detail.quote.location
    return {
        columns.BOOK: detail.book.title,
        columns.AUTHOR: detail.author.name,
        columns.TAGS: detail.tag_names,
        columns.DATE: detail.quote.created_at.isoformat(),
        columns.QUOTE: detail.quote.text,
        columns.PAGE: location.page if location else None,
        columns.CHAPTER: location.chapter if location else None,
        columns.FAVORITE: detail.quote.favorite,
    }


def export_tsv(details: Iterable[QuoteDetail], path: Path) -> int:
    """Write quotes to a tab-separated file with a header row.

    Returns:
        The number of quotes written.
    """
    count = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(columns.ALL_COLUMNS), delimiter="\t")
        writer.writeheader()
        for detail in details:
            record = detail_to_record(detail)
            record[columns.TAGS] = ",".join(record[columns.TAGS])
            record[columns.FAVORITE] = "yes" if record[columns.FAVORITE] else ""
            writer.writerow({key: "" if value is None else value for key, value in record.items()})
            count += 1
    return count


def export_json(details: Iterable[QuoteDetail], path: Path) -> int:
    """Write quotes to a JSON array of objects.

    Returns:
        The number of quotes written.
    """
    records = [detail_to_record(detail) for detail in details]
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return len(records)


def export_file(details: Iterable[QuoteDetail], path: Path) -> int:
    """Export as JSON for a .json path, tab-separated otherwise."""
    if path.suffix.lower() == ".json":
        return export_json(details, path)
    return export_tsv(details, path)
