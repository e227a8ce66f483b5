# ABOUTME: Unit tests for quote store create, read and edit operations.
# ABOUTME: Uses a real SQLite store in a temporary directory.

import sqlite3
from datetime import UTC, datetime

import pytest

from quotebook.db.errors import CorruptStoreError, NotFoundError, StoreIoError
from quotebook.db.store import ByAuthor, ByBook, ByTag, QuoteStore
from quotebook.records.drafts import QuoteDraft, QuoteEdit
from quotebook.records.types import Location


def _draft(**overrides: object) -> QuoteDraft:
    fields: dict = {"text": "To be or not to be", "book": "Hamlet", "author": "Shakespeare"}
    fields.update(overrides)
    return QuoteDraft.create(**fields)


class TestPutQuote:
    """Tests for QuoteStore.put_quote()."""

    def test_returns_id_and_round_trips(self, store: QuoteStore) -> None:
        quote_id = store.put_quote(
            _draft(tags="philosophy", page=58, favorite=True, created_at="2024-01-01")
        )
        quote = store.get_quote(quote_id)

        assert quote is not None
        assert quote.id == quote_id
        assert quote.text == "To be or not to be"
        assert quote.location == Location(page=58)
        assert quote.favorite is True
        assert quote.created_at == datetime(2024, 1, 1, tzinfo=UTC)
        assert len(quote.tag_ids) == 1

    def test_creates_book_and_author(self, store: QuoteStore) -> None:
        quote_id = store.put_quote(_draft())
        detail = store.describe(store.get_quote(quote_id))

        assert detail.book.title == "Hamlet"
        assert detail.author.name == "Shakespeare"
        assert detail.book.author_id == detail.author.id

    def test_defaults_created_at_to_now(self, store: QuoteStore) -> None:
        before = datetime.now(UTC)
        quote = store.get_quote(store.put_quote(_draft()))
        assert quote is not None
        assert before <= quote.created_at <= datetime.now(UTC)
        assert quote.created_at.tzinfo is not None

    def test_reuses_author_and_book_case_insensitively(self, store: QuoteStore) -> None:
        first = store.get_quote(store.put_quote(_draft()))
        second = store.get_quote(
            store.put_quote(_draft(text="Brevity is the soul of wit", book="HAMLET", author="shakespeare"))
        )

        assert first.book_id == second.book_id
        assert store.counts().books == 1
        assert store.counts().authors == 1

    def test_same_title_different_authors_are_different_books(self, store: QuoteStore) -> None:
        store.put_quote(_draft(book="Poems", author="Keats"))
        store.put_quote(_draft(book="Poems", author="Shelley"))
        assert len(store.find_books("poems")) == 2

    def test_tags_shared_between_quotes(self, store: QuoteStore) -> None:
        a = store.get_quote(store.put_quote(_draft(tags="drama, wit")))
        b = store.get_quote(store.put_quote(_draft(text="Other", tags="Wit")))

        assert a.tag_ids & b.tag_ids
        assert store.counts().tags == 2

    def test_ids_increase(self, store: QuoteStore) -> None:
        first = store.put_quote(_draft())
        second = store.put_quote(_draft(text="Another"))
        assert second > first

    def test_indexes_updated(self, store: QuoteStore) -> None:
        quote_id = store.put_quote(_draft(tags="philosophy"))
        book = store.find_book("Hamlet", "Shakespeare")
        author = store.find_author("shakespeare")
        tag = store.find_tag("Philosophy")

        assert store.quote_ids_for(ByBook(book.id)) == {quote_id}
        assert store.quote_ids_for(ByAuthor(author.id)) == {quote_id}
        assert store.quote_ids_for(ByTag(tag.id)) == {quote_id}

    def test_year_before_1000_round_trips(self, store: QuoteStore) -> None:
        early = datetime(999, 5, 1, tzinfo=UTC)
        quote_id = store.put_quote(_draft(created_at=early))

        assert store.get_quote(quote_id).created_at == early
        assert [q.id for q in store.list_quotes()] == [quote_id]
        assert [q.id for q in store.get_quotes([quote_id])] == [quote_id]


class TestGetQuote:
    """Tests for single and batch retrieval."""

    def test_missing_quote_is_none(self, store: QuoteStore) -> None:
        assert store.get_quote(999) is None

    def test_get_quotes_ignores_unknown_ids(self, store: QuoteStore, library: dict[str, int]) -> None:
        quotes = store.get_quotes([library["tale"], 999, library["hamlet"]])
        assert [q.id for q in quotes] == sorted([library["tale"], library["hamlet"]])

    def test_has_quote(self, store: QuoteStore, library: dict[str, int]) -> None:
        assert store.has_quote("hamlet", "SHAKESPEARE", "To be or not to be")
        assert not store.has_quote("Hamlet", "Shakespeare", "Something else")
        assert not store.has_quote("Unknown", "Shakespeare", "To be or not to be")


class TestEditQuote:
    """Tests for QuoteStore.edit_quote()."""

    def test_edit_text(self, store: QuoteStore, library: dict[str, int]) -> None:
        edited = store.edit_quote(library["hamlet"], QuoteEdit.create(text="To be, or not to be"))
        assert edited.text == "To be, or not to be"
        assert edited.location == Location(page=58)

    def test_replace_tags_updates_tag_index(self, store: QuoteStore, library: dict[str, int]) -> None:
        philosophy = store.find_tag("philosophy")
        store.edit_quote(library["hamlet"], QuoteEdit.create(tags="drama"))

        assert library["hamlet"] not in store.quote_ids_for(ByTag(philosophy.id))
        drama = store.find_tag("drama")
        assert store.quote_ids_for(ByTag(drama.id)) == {library["hamlet"]}

    def test_empty_tags_removes_all(self, store: QuoteStore, library: dict[str, int]) -> None:
        edited = store.edit_quote(library["tempest"], QuoteEdit.create(tags=""))
        assert edited.tag_ids == frozenset()

    def test_clear_location(self, store: QuoteStore, library: dict[str, int]) -> None:
        edited = store.edit_quote(library["hamlet"], QuoteEdit.create(location=""))
        assert edited.location is None

    def test_toggle_favorite(self, store: QuoteStore, library: dict[str, int]) -> None:
        assert store.edit_quote(library["tempest"], QuoteEdit.create(favorite=False)).favorite is False
        assert store.edit_quote(library["tempest"], QuoteEdit.create(favorite=True)).favorite is True

    def test_keeps_id_book_and_created_at(self, store: QuoteStore, library: dict[str, int]) -> None:
        before = store.get_quote(library["hamlet"])
        after = store.edit_quote(library["hamlet"], QuoteEdit.create(text="Changed"))
        assert (after.id, after.book_id, after.created_at) == (
            before.id,
            before.book_id,
            before.created_at,
        )

    def test_returns_the_updated_quote(self, store: QuoteStore, library: dict[str, int]) -> None:
        quote = store.edit_quote(
            library["hamlet"], QuoteEdit.create(text="Changed", tags="drama", favorite=True)
        )

        assert quote == store.get_quote(library["hamlet"])
        assert quote.text == "Changed"
        assert quote.favorite is True
        assert store.describe(quote).tag_names == ["drama"]

    def test_missing_quote_raises(self, store: QuoteStore) -> None:
        with pytest.raises(NotFoundError):
            store.edit_quote(42, QuoteEdit.create(text="x"))


class TestClosedStore:
    """A closed store refuses work."""

    def test_operations_after_close_raise(self, store: QuoteStore) -> None:
        store.close()
        assert store.closed
        with pytest.raises(StoreIoError, match="closed"):
            store.get_quote(1)

    def test_close_is_idempotent(self, store: QuoteStore) -> None:
        store.close()
        store.close()
        assert store.closed


class TestErrorTranslation:
    """SQLite failures surface as typed store errors."""

    def test_constraint_failure_is_corruption(self, store: QuoteStore) -> None:
        with pytest.raises(CorruptStoreError, match="FOREIGN KEY"):
            with store._translate_errors():
                raise sqlite3.IntegrityError("FOREIGN KEY constraint failed")

    def test_constraint_failure_rolls_back(self, store: QuoteStore) -> None:
        with pytest.raises(CorruptStoreError):
            with store._transaction() as conn:
                conn.execute(
                    "INSERT INTO quotes (book_id, text, created_at) VALUES (999, 'x', '2024-01-01T00:00:00.000000Z')"
                )
        assert store.counts().quotes == 0

    def test_operational_failure_is_io(self, store: QuoteStore) -> None:
        with pytest.raises(StoreIoError):
            with store._translate_errors():
                raise sqlite3.OperationalError("disk I/O error")
