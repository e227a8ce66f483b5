# ABOUTME: Integration tests moving a library through export and import.
# ABOUTME: Exports from one store, imports into a fresh one, and compares the results.

from pathlib import Path

import pytest

from quotebook.core.exporter import export_file
from quotebook.core.importer import import_file
from quotebook.db.store import open_store
from quotebook.query.engine import QueryEngine
from quotebook.query.request import QueryRequest


def _snapshot(details: list) -> list[tuple]:
    return [
        (
            d.book.title,
            d.author.name,
            d.quote.text,
            tuple(d.tag_names),
            d.quote.location,
            d.quote.favorite,
            d.quote.created_at,
        )
        for d in details
    ]


@pytest.mark.parametrize("filename", ["backup.tsv", "backup.json"])
class TestRoundTrip:
    """An exported library imports into an equivalent one."""

    def test_library_survives(self, seeded_db: Path, tmp_path: Path, filename: str) -> None:
        backup = tmp_path / filename
        with open_store(seeded_db) as source:
            original = QueryEngine(source).search_details(QueryRequest())
            assert export_file(original, backup) == 4

        with open_store(tmp_path / "restored.db") as target:
            result = import_file(backup, target)
            restored = QueryEngine(target).search_details(QueryRequest())

        assert (result.added, result.skipped, result.errors) == (4, 0, 0)
        assert _snapshot(restored) == _snapshot(original)

    def test_import_into_source_skips_all(self, seeded_db: Path, tmp_path: Path, filename: str) -> None:
        backup = tmp_path / filename
        with open_store(seeded_db) as store:
            export_file(QueryEngine(store).search_details(QueryRequest()), backup)
            result = import_file(backup, store)
            assert (result.added, result.skipped) == (0, 4)
            assert store.count_quotes() == 4

    def test_filtered_export(self, seeded_db: Path, tmp_path: Path, filename: str) -> None:
        backup = tmp_path / filename
        with open_store(seeded_db) as store:
            details = QueryEngine(store).search_details(QueryRequest(author="Dickens"))
            assert export_file(details, backup) == 2

        with open_store(tmp_path / "restored.db") as target:
            import_file(backup, target)
            assert [a.name for a in target.list_authors()] == ["Dickens"]
