# ABOUTME: The quote store: typed CRUD and index lookups over the SQLite database.
# ABOUTME: Every mutation commits as one transaction together with its index updates.

import logging
import random
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

from quotebook.db.connection import (
    DEFAULT_DB_PATH,
    StoreLock,
    connect,
    lock_path_for,
    store_files,
)
from quotebook.db.errors import (
    CorruptStoreError,
    HasDependentsError,
    NotFoundError,
    StoreError,
    StoreIoError,
)
from quotebook.db.mapping import (
    format_timestamp,
    location_to_columns,
    row_to_author,
    row_to_book,
    row_to_quote,
    row_to_tag,
)
from quotebook.records.drafts import QuoteDraft, QuoteEdit, normalize_name, normalize_tag
from quotebook.records.types import Author, Book, Quote, QuoteDetail, Tag

logger = logging.getLogger(__name__)

# Rows fetched per round trip when streaming quotes; also bounds IN (...) lists.
_BATCH_SIZE = 500


@dataclass(frozen=True)
class ByBook:
    """Quotes from one book."""

    book_id: int


@dataclass(frozen=True)
class ByAuthor:
    """Quotes from any book by one author."""

    author_id: int


@dataclass(frozen=True)
class ByTag:
    """Quotes carrying one tag."""

    tag_id: int


@dataclass(frozen=True)
class ByIds:
    """An explicit candidate set, typically the result of intersecting other filters."""

    ids: frozenset[int]


QuoteFilter = ByBook | ByAuthor | ByTag | ByIds


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass(frozen=True)
class StoreCounts:
    """Number of records of each kind."""

    quotes: int
    books: int
    authors: int
    tags: int


@dataclass(frozen=True)
class DeleteResult:
    """What a book or author delete removed."""

    quotes: int = 0
    books: int = 0
    authors: int = 0


def _filter_sql(quote_filter: ByBook | ByAuthor | ByTag) -> tuple[str, tuple[Any, ...]]:
    """FROM/WHERE fragment selecting quotes (aliased q) for an index filter."""
    if isinstance(quote_filter, ByBook):
        return "FROM quotes q WHERE q.book_id = ?", (quote_filter.book_id,)
    if isinstance(quote_filter, ByAuthor):
        return (
            "FROM quotes q JOIN books b ON q.book_id = b.id WHERE b.author_id = ?",
            (quote_filter.author_id,),
        )
    if isinstance(quote_filter, ByTag):
        return (
            "FROM quotes q JOIN quote_tags qt ON q.id = qt.quote_id WHERE qt.tag_id = ?",
            (quote_filter.tag_id,),
        )
    raise TypeError(f"Unsupported quote filter: {quote_filter!r}")


def _chunks(ids: list[int]) -> Iterator[list[int]]:
    for start in range(0, len(ids), _BATCH_SIZE):
        yield ids[start : start + _BATCH_SIZE]


def _placeholders(values: list[int]) -> str:
    return ", ".join("?" for _ in values)


class QuoteStore:
    """Owns one open, exclusively locked quote database.

    Create it with open_store() and pass it to whatever needs it; close it
    when done, or use it as a context manager.
    """

    def __init__(self, conn: sqlite3.Connection, path: Path, lock: StoreLock | None = None) -> None:
        self._conn: sqlite3.Connection | None = conn
        self._lock = lock
        self.path = path

    # --- Lifecycle ---

    def close(self) -> None:
        """Close the database and release the store lock. Idempotent."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed quote store %s", self.path)
        if self._lock is not None:
            self._lock.release()

    @property
    def closed(self) -> bool:
        return self._conn is None

    def __enter__(self) -> "QuoteStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def _db(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreIoError(f"Quote store {self.path} is closed")
        return self._conn

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        """Re-raise SQLite failures as store errors."""
        try:
            yield
        except StoreError:
            raise
        except sqlite3.OperationalError as exc:
            raise StoreIoError(f"Quote store I/O failed: {exc}") from exc
        except sqlite3.DatabaseError as exc:
            raise CorruptStoreError(f"Quote store is damaged: {exc}") from exc

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a block as one committed unit; any exception rolls it all back."""
        conn = self._db
        with self._translate_errors(), conn:
            yield conn

    # --- Upserts by natural key ---

    def _upsert_author(self, conn: sqlite3.Connection, name: str) -> int:
        row = conn.execute(
            "SELECT id FROM authors WHERE name = ? COLLATE NOCASE", (name,)
        ).fetchone()
        if row is not None:
            return row[0]
        cursor = conn.execute("INSERT INTO authors (name) VALUES (?)", (name,))
        logger.debug("Created author %r (id %d)", name, cursor.lastrowid)
        return cursor.lastrowid  # type: ignore[return-value]

    def _upsert_book(self, conn: sqlite3.Connection, title: str, author_id: int) -> int:
        row = conn.execute(
            "SELECT id FROM books WHERE author_id = ? AND title = ? COLLATE NOCASE",
            (author_id, title),
        ).fetchone()
        if row is not None:
            return row[0]
        cursor = conn.execute(
            "INSERT INTO books (title, author_id) VALUES (?, ?)", (title, author_id)
        )
        logger.debug("Created book %r (id %d)", title, cursor.lastrowid)
        return cursor.lastrowid  # type: ignore[return-value]

    def _upsert_tag(self, conn: sqlite3.Connection, name: str) -> int:
        row = conn.execute("SELECT id FROM tags WHERE name = ?", (name,)).fetchone()
        if row is not None:
            return row[0]
        cursor = conn.execute("INSERT INTO tags (name) VALUES (?)", (name,))
        return cursor.lastrowid  # type: ignore[return-value]

    def _link_tags(self, conn: sqlite3.Connection, quote_id: int, tags: Iterable[str]) -> None:
        for name in sorted(tags):
            tag_id = self._upsert_tag(conn, name)
            conn.execute(
                "INSERT OR IGNORE INTO quote_tags (quote_id, tag_id) VALUES (?, ?)",
                (quote_id, tag_id),
            )

    # --- Quote CRUD ---

    def put_quote(self, draft: QuoteDraft) -> int:
        """Store a new quote, creating its author, book and tags as needed.

        Authors are matched by name and books by (title, author), both
        case-insensitively, so repeated inserts reuse existing records.

        Returns:
            The id of the new quote.
        """
        created_at = draft.created_at or datetime.now(UTC)
        with self._transaction() as conn:
            author_id = self._upsert_author(conn, draft.author_name)
            book_id = self._upsert_book(conn, draft.book_title, author_id)
            row = {
                "book_id": book_id,
                "text": draft.text,
                **location_to_columns(draft.location),
                "favorite": int(draft.favorite),
                "created_at": format_timestamp(created_at),
            }
            columns = ", ".join(row.keys())
            placeholders = ", ".join("?" for _ in row)
            cursor = conn.execute(
                f"INSERT INTO quotes ({columns}) VALUES ({placeholders})",
                list(row.values()),
            )
            quote_id: int = cursor.lastrowid  # type: ignore[assignment]
            self._link_tags(conn, quote_id, draft.tags)

        logger.debug("Stored quote %d in book %d", quote_id, book_id)
        return quote_id

    def _tag_map(self, conn: sqlite3.Connection, quote_ids: list[int]) -> dict[int, set[int]]:
        tag_map: dict[int, set[int]] = {qid: set() for qid in quote_ids}
        for chunk in _chunks(quote_ids):
            cursor = conn.execute(
                f"SELECT quote_id, tag_id FROM quote_tags WHERE quote_id IN ({_placeholders(chunk)})",
                chunk,
            )
            for quote_id, tag_id in cursor.fetchall():
                tag_map[quote_id].add(tag_id)
        return tag_map

    def _rows_to_quotes(self, conn: sqlite3.Connection, rows: list[Any]) -> list[Quote]:
        tag_map = self._tag_map(conn, [row["id"] for row in rows])
        return [row_to_quote(row, frozenset(tag_map[row["id"]])) for row in rows]

    def _iter_quotes(self, sql: str, params: tuple[Any, ...] = ()) -> Iterator[Quote]:
        conn = self._db
        with self._translate_errors():
            cursor = conn.execute(sql, params)
            while rows := cursor.fetchmany(_BATCH_SIZE):
                yield from self._rows_to_quotes(conn, rows)

    def get_quote(self, quote_id: int) -> Quote | None:
        """Retrieve a quote by id, or None if there is no such quote."""
        conn = self._db
        with self._translate_errors():
            row = conn.execute("SELECT * FROM quotes WHERE id = ?", (quote_id,)).fetchone()
            if row is None:
                return None
            return self._rows_to_quotes(conn, [row])[0]

    def get_quotes(self, quote_ids: Iterable[int]) -> list[Quote]:
        """Retrieve several quotes in id order. Unknown ids are ignored."""
        ids = sorted(set(quote_ids))
        conn = self._db
        quotes: list[Quote] = []
        with self._translate_errors():
            for chunk in _chunks(ids):
                rows = conn.execute(
                    f"SELECT * FROM quotes WHERE id IN ({_placeholders(chunk)}) ORDER BY id",
                    chunk,
                ).fetchall()
                quotes.extend(self._rows_to_quotes(conn, rows))
        return quotes

    def edit_quote(self, quote_id: int, edit: QuoteEdit) -> Quote:
        """Change a quote's text, location, tags or favorite flag.

        Replacing the tags removes every link to a dropped tag in the same
        transaction, so the tag index never points at the quote afterwards.

        Raises:
            NotFoundError: If the quote does not exist.
        """
        with self._transaction() as conn:
            exists = conn.execute("SELECT 1 FROM quotes WHERE id = ?", (quote_id,)).fetchone()
            if exists is None:
                raise NotFoundError(f"Quote {quote_id} not found")

            fields: dict[str, Any] = {}
            if edit.text is not None:
                fields["text"] = edit.text
            if edit.clear_location:
                fields.update(location_to_columns(None))
            elif edit.location is not None:
                fields.update(location_to_columns(edit.location))
            if edit.favorite is not None:
                fields["favorite"] = int(edit.favorite)

            if fields:
                set_clause = ", ".join(f"{k} = ?" for k in fields)
                conn.execute(
                    f"UPDATE quotes SET {set_clause} WHERE id = ?",
                    [*fields.values(), quote_id],
                )
            if edit.tags is not None:
                conn.execute("DELETE FROM quote_tags WHERE quote_id = ?", (quote_id,))
                self._link_tags(conn, quote_id, edit.tags)

            row = conn.execute("SELECT * FROM quotes WHERE id = ?", (quote_id,)).fetchone()
            quote = self._rows_to_quotes(conn, [row])[0]

        logger.debug("Edited quote %d", quote_id)
        return quote

    def _delete_quotes(self, conn: sqlite3.Connection, quote_ids: list[int]) -> None:
        for chunk in _chunks(quote_ids):
            marks = _placeholders(chunk)
            conn.execute(f"DELETE FROM quote_tags WHERE quote_id IN ({marks})", chunk)
            conn.execute(f"DELETE FROM quotes WHERE id IN ({marks})", chunk)

    def delete_quote(self, quote_id: int) -> None:
        """Delete a quote and every index entry that refers to it.

        Raises:
            NotFoundError: If the quote does not exist.
        """
        with self._transaction() as conn:
            conn.execute("DELETE FROM quote_tags WHERE quote_id = ?", (quote_id,))
            cursor = conn.execute("DELETE FROM quotes WHERE id = ?", (quote_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(f"Quote {quote_id} not found")
        logger.debug("Deleted quote %d", quote_id)

    # --- Book and author deletion ---

    def delete_book(self, book_id: int, cascade: bool = False) -> DeleteResult:
        """Delete a book, and its author once the author has no books left.

        Raises:
            NotFoundError: If the book does not exist.
            HasDependentsError: If the book has quotes and cascade is False.
        """
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM books WHERE id = ?", (book_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"Book {book_id} not found")
            book = row_to_book(row)

            quote_ids = [
                r[0]
                for r in conn.execute(
                    "SELECT id FROM quotes WHERE book_id = ? ORDER BY id", (book_id,)
                )
            ]
            if quote_ids and not cascade:
                raise HasDependentsError(
                    f"Book {book_id} ({book.title}) has {len(quote_ids)} quote(s)"
                )

            self._delete_quotes(conn, quote_ids)
            conn.execute("DELETE FROM books WHERE id = ?", (book_id,))

            remaining = conn.execute(
                "SELECT COUNT(*) FROM books WHERE author_id = ?", (book.author_id,)
            ).fetchone()[0]
            authors = 0
            if remaining == 0:
                conn.execute("DELETE FROM authors WHERE id = ?", (book.author_id,))
                authors = 1

        logger.info(
            "Deleted book %d with %d quote(s)%s",
            book_id,
            len(quote_ids),
            " and its author" if authors else "",
        )
        return DeleteResult(quotes=len(quote_ids), books=1, authors=authors)

    def delete_author(self, author_id: int, cascade: bool = False) -> DeleteResult:
        """Delete an author.

        Raises:
            NotFoundError: If the author does not exist.
            HasDependentsError: If the author has books and cascade is False.
        """
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM authors WHERE id = ?", (author_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"Author {author_id} not found")

            book_ids = [
                r[0] for r in conn.execute("SELECT id FROM books WHERE author_id = ?", (author_id,))
            ]
            if book_ids and not cascade:
                raise HasDependentsError(
                    f"Author {author_id} ({row['name']}) has {len(book_ids)} book(s)"
                )

            quote_ids = [
                r[0]
                for r in conn.execute(
                    "SELECT q.id FROM quotes q JOIN books b ON q.book_id = b.id "
                    "WHERE b.author_id = ? ORDER BY q.id",
                    (author_id,),
                )
            ]
            self._delete_quotes(conn, quote_ids)
            conn.execute("DELETE FROM books WHERE author_id = ?", (author_id,))
            conn.execute("DELETE FROM authors WHERE id = ?", (author_id,))

        logger.info(
            "Deleted author %d with %d book(s) and %d quote(s)",
            author_id,
            len(book_ids),
            len(quote_ids),
        )
        return DeleteResult(quotes=len(quote_ids), books=len(book_ids), authors=1)

    # --- Single record lookups ---

    def _fetch_one(self, sql: str, params: tuple[Any, ...]) -> Any:
        conn = self._db
        with self._translate_errors():
            return conn.execute(sql, params).fetchone()

    def get_book(self, book_id: int) -> Book | None:
        row = self._fetch_one("SELECT * FROM books WHERE id = ?", (book_id,))
        return row_to_book(row) if row else None

    def get_author(self, author_id: int) -> Author | None:
        row = self._fetch_one("SELECT * FROM authors WHERE id = ?", (author_id,))
        return row_to_author(row) if row else None

    def get_tag(self, tag_id: int) -> Tag | None:
        row = self._fetch_one("SELECT * FROM tags WHERE id = ?", (tag_id,))
        return row_to_tag(row) if row else None

    def find_author(self, name: str) -> Author | None:
        """Look up an author by name, ignoring case and extra whitespace."""
        row = self._fetch_one(
            "SELECT * FROM authors WHERE name = ? COLLATE NOCASE", (normalize_name(name),)
        )
        return row_to_author(row) if row else None

    def find_books(self, title: str) -> list[Book]:
        """All books with a title, ignoring case. Different authors may share one."""
        conn = self._db
        with self._translate_errors():
            cursor = conn.execute(
                "SELECT * FROM books WHERE title = ? COLLATE NOCASE ORDER BY id",
                (normalize_name(title),),
            )
            return [row_to_book(row) for row in cursor.fetchall()]

    def find_book(self, title: str, author_name: str) -> Book | None:
        """Look up a book by its natural key."""
        row = self._fetch_one(
            "SELECT b.* FROM books b JOIN authors a ON b.author_id = a.id "
            "WHERE b.title = ? COLLATE NOCASE AND a.name = ? COLLATE NOCASE",
            (normalize_name(title), normalize_name(author_name)),
        )
        return row_to_book(row) if row else None

    def find_tag(self, name: str) -> Tag | None:
        row = self._fetch_one("SELECT * FROM tags WHERE name = ?", (normalize_tag(name),))
        return row_to_tag(row) if row else None

    def has_quote(self, book_title: str, author_name: str, text: str) -> bool:
        """Whether the same text is already stored for a book."""
        book = self.find_book(book_title, author_name)
        if book is None:
            return False
        row = self._fetch_one(
            "SELECT 1 FROM quotes WHERE book_id = ? AND text = ?", (book.id, text.strip())
        )
        return row is not None

    def describe(self, quote: Quote) -> QuoteDetail:
        """Join a quote with its book, author and tags."""
        book = self.get_book(quote.book_id)
        if book is None:
            raise NotFoundError(f"Book {quote.book_id} of quote {quote.id} not found")
        author = self.get_author(book.author_id)
        if author is None:
            raise NotFoundError(f"Author {book.author_id} of book {book.id} not found")
        tags = tuple(
            sorted(
                (tag for tag in (self.get_tag(tid) for tid in quote.tag_ids) if tag is not None),
                key=lambda t: t.name,
            )
        )
        return QuoteDetail(quote=quote, book=book, author=author, tags=tags)

    # --- Listing ---

    def list_quotes(self) -> Iterator[Quote]:
        """All quotes in insertion order, streamed lazily."""
        return self._iter_quotes("SELECT * FROM quotes ORDER BY id")

    def list_quotes_for(self, quote_filter: QuoteFilter) -> Iterator[Quote]:
        """Quotes matching one index filter, in insertion order, streamed lazily."""
        if isinstance(quote_filter, ByIds):
            return self._iter_by_ids(quote_filter.ids)
        from_where, params = _filter_sql(quote_filter)
        return self._iter_quotes(f"SELECT q.* {from_where} ORDER BY q.id", params)

    def _iter_by_ids(self, ids: frozenset[int]) -> Iterator[Quote]:
        for chunk in _chunks(sorted(ids)):
            yield from self.get_quotes(chunk)

    def _iter_records(self, sql: str, convert: Any) -> Iterator[Any]:
        conn = self._db
        with self._translate_errors():
            cursor = conn.execute(sql)
            while rows := cursor.fetchmany(_BATCH_SIZE):
                yield from (convert(row) for row in rows)

    def list_books(self) -> Iterator[Book]:
        return self._iter_records("SELECT * FROM books ORDER BY id", row_to_book)

    def list_authors(self) -> Iterator[Author]:
        return self._iter_records("SELECT * FROM authors ORDER BY id", row_to_author)

    def list_tags(self) -> Iterator[Tag]:
        return self._iter_records("SELECT * FROM tags ORDER BY id", row_to_tag)

    # --- Index queries ---

    def quote_ids_for(self, quote_filter: QuoteFilter) -> set[int]:
        """Ids of the quotes matching a filter, straight from the index."""
        conn = self._db
        with self._translate_errors():
            if isinstance(quote_filter, ByIds):
                ids = sorted(quote_filter.ids)
                found: set[int] = set()
                for chunk in _chunks(ids):
                    cursor = conn.execute(
                        f"SELECT id FROM quotes WHERE id IN ({_placeholders(chunk)})", chunk
                    )
                    found.update(row[0] for row in cursor.fetchall())
                return found
            from_where, params = _filter_sql(quote_filter)
            cursor = conn.execute(f"SELECT q.id {from_where}", params)
            return {row[0] for row in cursor.fetchall()}

    def all_quote_ids(self) -> set[int]:
        conn = self._db
        with self._translate_errors():
            return {row[0] for row in conn.execute("SELECT id FROM quotes").fetchall()}

    def count_quotes(self, quote_filter: QuoteFilter | None = None) -> int:
        """Number of quotes, optionally restricted to a filter."""
        if isinstance(quote_filter, ByIds):
            return len(self.quote_ids_for(quote_filter))
        conn = self._db
        with self._translate_errors():
            if quote_filter is None:
                return conn.execute("SELECT COUNT(*) FROM quotes").fetchone()[0]
            from_where, params = _filter_sql(quote_filter)
            return conn.execute(f"SELECT COUNT(*) {from_where}", params).fetchone()[0]

    def counts(self) -> StoreCounts:
        conn = self._db
        with self._translate_errors():
            values = [
                conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
                for table in ("quotes", "books", "authors", "tags")
            ]
        return StoreCounts(*values)

    def random_quote(
        self, quote_filter: QuoteFilter | None = None, rng: RandomSource | None = None
    ) -> Quote | None:
        """Pick one quote uniformly at random from the matching quotes.

        Each call samples afresh from the candidates as they are at call
        time. Returns None when nothing matches.
        """
        rng = rng or random
        if isinstance(quote_filter, ByIds):
            candidates = sorted(self.quote_ids_for(quote_filter))
            if not candidates:
                return None
            return self.get_quote(candidates[rng.randrange(len(candidates))])

        if quote_filter is None:
            from_where, params = "FROM quotes q", ()
        else:
            from_where, params = _filter_sql(quote_filter)

        conn = self._db
        with self._translate_errors():
            total = conn.execute(f"SELECT COUNT(*) {from_where}", params).fetchone()[0]
            if total == 0:
                return None
            row = conn.execute(
                f"SELECT q.* {from_where} ORDER BY q.id LIMIT 1 OFFSET ?",
                (*params, rng.randrange(total)),
            ).fetchone()
            return self._rows_to_quotes(conn, [row])[0]

    # --- Whole store ---

    def clear(self) -> StoreCounts:
        """Delete every quote, book, author and tag in one transaction.

        Id counters are kept, so ids handed out before the clear are never
        reused.

        Returns:
            The counts of what was removed.
        """
        removed = self.counts()
        with self._transaction() as conn:
            for table in ("quote_tags", "quotes", "books", "authors", "tags"):
                conn.execute(f"DELETE FROM {table}")
        logger.info(
            "Cleared quote store %s (%d quotes, %d books, %d authors, %d tags)",
            self.path, removed.quotes, removed.books, removed.authors, removed.tags,
        )
        return removed

    def backup_to(self, target: Path) -> None:
        """Copy the whole store into a new database file at target.

        Raises:
            StoreIoError: If target already exists or cannot be written.
        """
        if target.exists():
            raise StoreIoError(f"Cannot copy quote store to {target}: the file already exists")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreIoError(f"Cannot create directory {target.parent}: {exc}") from exc

        conn = self._db
        with self._translate_errors():
            copy = sqlite3.connect(str(target))
            try:
                conn.backup(copy)
            finally:
                copy.close()
        logger.info("Copied quote store %s to %s", self.path, target)


def open_store(path: Path | None = None) -> QuoteStore:
    """Open or create a quote store and take its exclusive lock.

    Args:
        path: Database file. Defaults to ~/.quotebook/quotes.db.

    Raises:
        StoreLockedError: If another process has the store open.
        StoreIoError: If the file cannot be created or opened.
        CorruptStoreError: If the file fails the integrity check.
    """
    db_path = (path or DEFAULT_DB_PATH).expanduser()
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StoreIoError(f"Cannot create directory {db_path.parent}: {exc}") from exc

    lock = StoreLock(lock_path_for(db_path))
    lock.acquire()
    try:
        conn = connect(db_path)
    except StoreError:
        lock.release()
        raise

    logger.debug("Opened quote store %s", db_path)
    return QuoteStore(conn, db_path, lock)


def delete_store(path: Path) -> None:
    """Remove a quote store's database, WAL and lock files from disk.

    Raises:
        StoreLockedError: If the store is open, here or in another process.
        StoreIoError: If a file cannot be removed.
    """
    db_path = path.expanduser()
    lock = StoreLock(lock_path_for(db_path))
    lock.acquire()
    try:
        for file in store_files(db_path):
            file.unlink(missing_ok=True)
    except OSError as exc:
        raise StoreIoError(f"Cannot delete quote store {db_path}: {exc}") from exc
    finally:
        lock.release()
    logger.info("Deleted quote store %s", db_path)
