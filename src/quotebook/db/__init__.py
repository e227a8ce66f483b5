# ABOUTME: Public API for the quote store.
# ABOUTME: Exports store lifecycle, index filters, and the typed store errors.

from quotebook.db.connection import DEFAULT_DB_PATH
from quotebook.db.errors import (
    CorruptStoreError,
    HasDependentsError,
    NotFoundError,
    StoreError,
    StoreIoError,
    StoreLockedError,
)
from quotebook.db.store import (
    ByAuthor,
    ByBook,
    ByIds,
    ByTag,
    DeleteResult,
    QuoteFilter,
    QuoteStore,
    StoreCounts,
    delete_store,
    open_store,
)

__all__ = [
    "DEFAULT_DB_PATH",
    "ByAuthor",
    "ByBook",
    "ByIds",
    "ByTag",
    "CorruptStoreError",
    "DeleteResult",
    "HasDependentsError",
    "NotFoundError",
    "QuoteFilter",
    "QuoteStore",
    "StoreCounts",
    "StoreError",
    "StoreIoError",
    "StoreLockedError",
    "delete_store",
    "open_store",
]
