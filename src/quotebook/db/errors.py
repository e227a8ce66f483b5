# ABOUTME: Typed exceptions raised by the quote store.
# ABOUTME: Every store failure is one of these so callers can react without parsing messages.


class StoreError(Exception):
    """Base class for all quote store failures."""


class StoreIoError(StoreError):
    """Raised when the store cannot be read from or written to."""


class CorruptStoreError(StoreError):
    """Raised when the database file is damaged or holds values this version cannot read."""


class StoreLockedError(StoreError):
    """Raised when another process already has the store open."""


class NotFoundError(StoreError):
    """Raised when a quote, book or author id does not exist."""


class HasDependentsError(StoreError):
    """Raised when a delete is blocked because records still depend on the target.

    Re-issue the delete with cascade=True to remove the dependents as well.
    """
