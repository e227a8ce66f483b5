# ABOUTME: SQLite connection management and exclusive locking for the quote store.
# ABOUTME: Opens or creates the database, applies schema, and checks its integrity.

import fcntl
import logging
import os
import sqlite3
from pathlib import Path

from quotebook.db.errors import CorruptStoreError, StoreIoError, StoreLockedError
from quotebook.db.schema import LATEST_VERSION, MIGRATIONS, REQUIRED_TABLES, SCHEMA_V1

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".quotebook" / "quotes.db"


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def _apply_schema(conn: sqlite3.Connection) -> None:
    """Execute the DDL to create all tables and indexes in one transaction."""
    conn.executescript(f"BEGIN;\n{SCHEMA_V1}\nCOMMIT;")


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT version FROM schema_version ORDER BY version DESC LIMIT 1")
    row = cursor.fetchone()
    return row[0] if row else 0


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Apply pending schema migrations sequentially.

    Each migration runs in its own transaction, so an interrupted upgrade
    leaves the database at the last fully applied version.
    """
    current = _get_schema_version(conn)
    for version, sql in MIGRATIONS:
        if version > current:
            logger.info("Migrating quote store to schema version %d", version)
            conn.executescript(f"BEGIN;\n{sql}\nCOMMIT;")


def _check_integrity(conn: sqlite3.Connection) -> None:
    """Verify the file is a quote store this version can read.

    Raises:
        CorruptStoreError: If SQLite reports damage, a table is missing, or
            the schema is newer than this code understands.
    """
    result = conn.execute("PRAGMA quick_check").fetchone()
    if result is None or result[0] != "ok":
        detail = result[0] if result else "no result"
        raise CorruptStoreError(f"Integrity check failed: {detail}")

    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    missing = REQUIRED_TABLES - {row[0] for row in cursor.fetchall()}
    if missing:
        raise CorruptStoreError(f"Missing tables: {', '.join(sorted(missing))}")

    version = _get_schema_version(conn)
    if version > LATEST_VERSION:
        raise CorruptStoreError(
            f"Schema version {version} is newer than supported version {LATEST_VERSION}"
        )


def lock_path_for(db_path: Path) -> Path:
    """Path of the lock file that guards a database file."""
    return db_path.with_name(db_path.name + ".lock")


def store_files(db_path: Path) -> list[Path]:
    """The database file followed by the WAL, shared-memory and lock files kept beside it."""
    return [
        db_path,
        db_path.with_name(db_path.name + "-wal"),
        db_path.with_name(db_path.name + "-shm"),
        lock_path_for(db_path),
    ]


class StoreLock:
    """Exclusive advisory lock on a sidecar file next to the database.

    The lock is held until release() is called or the process exits, so a
    crashed writer never leaves the store locked.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._fd: int | None = None

    def acquire(self) -> None:
        """Take the lock without waiting.

        Raises:
            StoreLockedError: If another handle already holds the lock.
            StoreIoError: If the lock file cannot be created.
        """
        try:
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o644)
        except OSError as exc:
            raise StoreIoError(f"Cannot create lock file {self.path}: {exc}") from exc

        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as exc:
            os.close(fd)
            raise StoreLockedError(f"Quote store is in use by another process ({self.path})") from exc
        except OSError as exc:
            os.close(fd)
            raise StoreIoError(f"Cannot lock {self.path}: {exc}") from exc

        os.ftruncate(fd, 0)
        os.write(fd, str(os.getpid()).encode())
        self._fd = fd

    def release(self) -> None:
        """Drop the lock. Safe to call more than once."""
        if self._fd is None:
            return
        fcntl.flock(self._fd, fcntl.LOCK_UN)
        os.close(self._fd)
        self._fd = None

    @property
    def held(self) -> bool:
        return self._fd is not None


def connect(path: Path) -> sqlite3.Connection:
    """Open or create a quote store database file.

    Creates the parent directories if needed, applies the schema on first
    creation and any pending migrations, then checks integrity. Sets WAL
    journal mode, enforces foreign keys, and uses sqlite3.Row rows.

    Raises:
        StoreIoError: If the file or its directory cannot be opened or created.
        CorruptStoreError: If the file is not a readable quote store.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path))
    except (OSError, sqlite3.OperationalError) as exc:
        raise StoreIoError(f"Cannot open quote store at {path}: {exc}") from exc

    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")

        if not _schema_exists(conn):
            logger.info("Creating new quote store at %s", path)
            _apply_schema(conn)

        _apply_migrations(conn)
        _check_integrity(conn)
    except CorruptStoreError:
        conn.close()
        raise
    except sqlite3.OperationalError as exc:
        conn.close()
        if "locked" in str(exc) or "unable to open" in str(exc) or "readonly" in str(exc):
            raise StoreIoError(f"Cannot use quote store at {path}: {exc}") from exc
        raise CorruptStoreError(f"Quote store at {path} is unreadable: {exc}") from exc
    except sqlite3.DatabaseError as exc:
        conn.close()
        raise CorruptStoreError(f"Quote store at {path} is unreadable: {exc}") from exc

    return conn
