# ABOUTME: End-to-end tests for library management commands of the Quotebook CLI.
# ABOUTME: Covers book, author and tag listing and deletion, stats, import/export, and completions.

from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from quotebook.cli import cli
from quotebook.cli.commands import import_cmd


def run(db: Path, *args: str, input: str | None = None) -> Result:
    """Invoke the CLI against one database with a wide terminal."""
    runner = CliRunner()
    return runner.invoke(
        cli, list(args), input=input, env={"QUOTEBOOK_DB": str(db), "COLUMNS": "200"}
    )


class TestCliBook:
    """E2e tests for `quotebook book`."""

    def test_ls(self, seeded_db: Path) -> None:
        result = run(seeded_db, "book", "ls")
        assert result.exit_code == 0
        assert "Great Expectations" in result.output
        assert "4 book(s)" in result.output

    def test_ls_empty(self, tmp_path: Path) -> None:
        assert "No books in the library." in run(tmp_path / "q.db", "book", "ls").output

    def test_rm_refused_without_cascade(self, seeded_db: Path) -> None:
        result = run(seeded_db, "book", "rm", "1", "--yes")
        assert result.exit_code == 1
        assert "--cascade" in result.output
        assert "Hamlet" in run(seeded_db, "book", "ls").output

    def test_rm_cascade(self, seeded_db: Path) -> None:
        result = run(seeded_db, "book", "rm", "1", "--cascade", "--yes")
        assert result.exit_code == 0
        assert "Deleted book #1 and 1 quote(s)." in result.output
        assert "3 quote(s)" in run(seeded_db, "ls").output

    def test_rm_last_book_removes_author(self, seeded_db: Path) -> None:
        run(seeded_db, "book", "rm", "2", "--cascade", "--yes")
        result = run(seeded_db, "book", "rm", "4", "--cascade", "--yes")
        assert "and its author" in result.output
        assert "Dickens" not in run(seeded_db, "author", "ls").output

    def test_rm_confirmation_declined(self, seeded_db: Path) -> None:
        result = run(seeded_db, "book", "rm", "1", "--cascade", input="n\n")
        assert result.exit_code == 1
        assert "4 book(s)" in run(seeded_db, "book", "ls").output

    def test_rm_missing(self, seeded_db: Path) -> None:
        result = run(seeded_db, "book", "rm", "99", "--yes")
        assert result.exit_code == 1
        assert "Book 99 not found." in result.output


class TestCliAuthor:
    """E2e tests for `quotebook author`."""

    def test_ls(self, seeded_db: Path) -> None:
        result = run(seeded_db, "author", "ls")
        assert "Shakespeare" in result.output
        assert "Dickens" in result.output

    def test_rm_refused_without_cascade(self, seeded_db: Path) -> None:
        result = run(seeded_db, "author", "rm", "1", "--yes")
        assert result.exit_code == 1
        assert "--cascade" in result.output

    def test_rm_cascade(self, seeded_db: Path) -> None:
        result = run(seeded_db, "author", "rm", "1", "--cascade", "--yes")
        assert result.exit_code == 0
        assert "Deleted author #1 with 2 book(s) and 2 quote(s)." in result.output
        assert "2 quote(s)" in run(seeded_db, "ls").output


class TestCliTag:
    """E2e tests for `quotebook tag ls`."""

    def test_ls(self, seeded_db: Path) -> None:
        result = run(seeded_db, "tag", "ls")
        assert result.exit_code == 0
        for name in ("dreams", "philosophy", "wisdom"):
            assert name in result.output

    def test_unused_tags_hidden_unless_all(self, seeded_db: Path) -> None:
        run(seeded_db, "edit", "4", "--tags", "")
        assert "wisdom" not in run(seeded_db, "tag", "ls").output
        assert "wisdom" in run(seeded_db, "tag", "ls", "--all").output


class TestCliStats:
    """E2e tests for `quotebook stats`."""

    def test_stats(self, seeded_db: Path) -> None:
        result = run(seeded_db, "stats")
        assert result.exit_code == 0
        assert "4 quote(s)" in result.output
        assert "1 favorite(s)" in result.output
        assert "Most quoted authors" in result.output
        assert "2024-01" in result.output

    def test_stats_empty(self, tmp_path: Path) -> None:
        result = run(tmp_path / "q.db", "stats")
        assert result.exit_code == 0
        assert "0 quote(s)" in result.output
        assert "Most quoted" not in result.output


class TestCliImportExport:
    """E2e tests for `quotebook import` and `quotebook export`."""

    def test_export_then_import(self, seeded_db: Path, tmp_path: Path) -> None:
        backup = tmp_path / "backup.json"
        exported = run(seeded_db, "export", str(backup))
        assert exported.exit_code == 0
        assert "Exported 4 quote(s)" in exported.output

        imported = run(tmp_path / "fresh.db", "import", str(backup))
        assert imported.exit_code == 0
        assert "4 added, 0 skipped, 0 error(s)" in imported.output

    def test_filtered_export_with_format(self, seeded_db: Path, tmp_path: Path) -> None:
        backup = tmp_path / "backup.txt"
        result = run(seeded_db, "export", str(backup), "--format", "tsv", "--tag", "philosophy")
        assert "Exported 2 quote(s)" in result.output
        assert backup.read_text(encoding="utf-8").startswith("Book\tAuthor")

    def test_import_reports_row_errors(self, tmp_path: Path) -> None:
        source = tmp_path / "quotes.tsv"
        source.write_text("Book\tAuthor\tQuote\nHamlet\tShakespeare\t\nEmma\tAusten\tBadly done\n", encoding="utf-8")
        result = run(tmp_path / "q.db", "import", str(source))
        assert result.exit_code == 0
        assert "1 added, 0 skipped, 1 error(s)" in result.output
        assert "quotes.tsv:2" in result.output

    def test_import_bad_header(self, tmp_path: Path) -> None:
        source = tmp_path / "quotes.tsv"
        source.write_text("Title\tWriter\nHamlet\tShakespeare\n", encoding="utf-8")
        result = run(tmp_path / "q.db", "import", str(source))
        assert result.exit_code == 1
        assert "missing" in result.output

    def test_import_missing_file(self, tmp_path: Path) -> None:
        result = run(tmp_path / "q.db", "import", str(tmp_path / "nope.tsv"))
        assert result.exit_code == 2

    def test_import_non_utf8_file(self, tmp_path: Path) -> None:
        source = tmp_path / "quotes.tsv"
        source.write_bytes(b"Book\tAuthor\tQuote\nEmma\tAusten\t\xe9t\xe9\n")
        result = run(tmp_path / "q.db", "import", str(source))
        assert result.exit_code == 1
        assert "UTF-8" in result.output
        assert "Traceback" not in result.output

    def test_import_unreadable_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        source = tmp_path / "quotes.tsv"
        source.write_text("Book\tAuthor\tQuote\n", encoding="utf-8")

        def denied(path: Path, store: object) -> None:
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(import_cmd, "import_tsv", denied)
        result = run(tmp_path / "q.db", "import", str(source))
        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert "Permission denied" in result.output


class TestCliMisc:
    """E2e tests for the root group and shell completions."""

    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("add", "search", "random", "book", "stats", "completions", "config"):
            assert command in result.output

    def test_fish_completions(self) -> None:
        result = CliRunner().invoke(cli, ["completions", "fish"])
        assert result.exit_code == 0
        assert "_QUOTEBOOK_COMPLETE" in result.output
        assert "quotebook" in result.output

    def test_zsh_completions(self) -> None:
        result = CliRunner().invoke(cli, ["completions", "zsh"])
        assert result.exit_code == 0
        assert "compdef" in result.output

    def test_unknown_shell(self) -> None:
        result = CliRunner().invoke(cli, ["completions", "tcsh"])
        assert result.exit_code == 2
