# ABOUTME: Unit tests for library statistics.
# ABOUTME: Verifies totals and per-author, per-book and per-month counts.

from quotebook.core.stats import collect_stats
from quotebook.db.store import QuoteStore, StoreCounts
from quotebook.records.drafts import QuoteDraft


class TestCollectStats:
    """Tests for collect_stats()."""

    def test_empty_store(self, store: QuoteStore) -> None:
        summary = collect_stats(store)
        assert summary.counts == StoreCounts(0, 0, 0, 0)
        assert summary.quotes_per_author == []
        assert summary.quotes_per_month == []

    def test_counts(self, store: QuoteStore, library: dict[str, int]) -> None:
        summary = collect_stats(store)
        assert summary.counts.quotes == 4
        assert summary.favorites == 1

    def test_per_author_sorted_by_count_then_name(self, store: QuoteStore, library: dict[str, int]) -> None:
        store.put_quote(
            QuoteDraft.create(text="A third", book="Bleak House", author="Dickens", created_at="2024-02-01")
        )
        assert collect_stats(store).quotes_per_author == [("Dickens", 3), ("Shakespeare", 2)]

    def test_ties_broken_by_name(self, store: QuoteStore, library: dict[str, int]) -> None:
        assert collect_stats(store).quotes_per_author == [("Dickens", 2), ("Shakespeare", 2)]

    def test_per_book(self, store: QuoteStore, library: dict[str, int]) -> None:
        per_book = collect_stats(store).quotes_per_book
        assert len(per_book) == 4
        assert per_book[0] == ("A Tale of Two Cities", "Dickens", 1)

    def test_per_month(self, store: QuoteStore, library: dict[str, int]) -> None:
        store.put_quote(
            QuoteDraft.create(text="Later", book="Hamlet", author="Shakespeare", created_at="2024-03-15")
        )
        assert collect_stats(store).quotes_per_month == [("2024-01", 4), ("2024-03", 1)]

    def test_early_months_sort_before_later_ones(self, store: QuoteStore, library: dict[str, int]) -> None:
        store.put_quote(
            QuoteDraft.create(text="Old", book="Hamlet", author="Shakespeare", created_at="0999-05-01")
        )
        assert collect_stats(store).quotes_per_month[0] == ("0999-05", 1)
