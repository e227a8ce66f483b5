# ABOUTME: Shared pytest fixtures for Quotebook tests.
# ABOUTME: Provides temporary quote stores, an example library, and a seeded database file.

from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from quotebook.db.store import QuoteStore, open_store
from quotebook.records.drafts import QuoteDraft


def at(day: int, hour: int = 12) -> datetime:
    """A fixed UTC timestamp in January 2024, for reproducible ordering."""
    return datetime(2024, 1, day, hour, tzinfo=UTC)


def seed_library(store: QuoteStore) -> dict[str, int]:
    """Add the example quotes used across tests and return their ids by key."""
    drafts = {
        "hamlet": QuoteDraft.create(
            text="To be or not to be",
            book="Hamlet",
            author="Shakespeare",
            tags="philosophy",
            page=58,
            created_at=at(1),
        ),
        "tale": QuoteDraft.create(
            text="It was the best of times",
            book="A Tale of Two Cities",
            author="Dickens",
            created_at=at(2),
        ),
        "tempest": QuoteDraft.create(
            text="We are such stuff as dreams are made on",
            book="The Tempest",
            author="Shakespeare",
            tags="philosophy, dreams",
            favorite=True,
            created_at=at(3),
        ),
        "expectations": QuoteDraft.create(
            text="Take nothing on its looks; take everything on evidence",
            book="Great Expectations",
            author="Dickens",
            tags="wisdom",
            chapter="40",
            created_at=at(10),
        ),
    }
    return {key: store.put_quote(draft) for key, draft in drafts.items()}


@pytest.fixture
def store(tmp_path: Path) -> Iterator[QuoteStore]:
    """An empty quote store in a temporary directory."""
    quote_store = open_store(tmp_path / "quotes.db")
    yield quote_store
    quote_store.close()


@pytest.fixture
def library(store: QuoteStore) -> dict[str, int]:
    """Seed the store fixture with the example quotes; returns their ids."""
    return seed_library(store)


@pytest.fixture
def seeded_db(tmp_path: Path) -> Path:
    """A database file holding the example quotes, closed and ready for the CLI."""
    db_path = tmp_path / "seeded.db"
    with open_store(db_path) as quote_store:
        seed_library(quote_store)
    return db_path
