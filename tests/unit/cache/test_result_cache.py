"""Tests for famsearch.cache.manager module."""

from __future__ import annotations

import threading

import pytest

from famsearch.cache import ResultCache
from famsearch.core.types import AggregateResult, Document, FilterSet, SortBy

pytestmark = pytest.mark.cache


def _result(query: str = "invoice", total: int = 1, documents=None) -> AggregateResult:
    return AggregateResult(
        query=query,
        normalized_query=query,
        documents=documents if documents is not None else [Document(1, "invoice.pdf")],
        total_results=total,
    )


@pytest.fixture
def cache(clock) -> ResultCache:
    return ResultCache(ttl=300, max_entries=50, max_result_count=100, clock=clock)


class TestExpiry:
    def test_fresh_entry_is_returned(self, cache, clock):
        cache.put("invoice", FilterSet(), _result())
        clock.advance(299.9)
        assert cache.get("invoice", FilterSet()) is not None

    def test_entry_expires_at_ttl(self, cache, clock):
        cache.put("invoice", FilterSet(), _result())
        clock.advance(300)
        assert cache.get("invoice", FilterSet()) is None
        # expired entries are removed on lookup
        assert cache.size() == 0
        assert cache.get_stats()["expirations"] == 1

    def test_cleanup_expired(self, cache, clock):
        cache.put("old", FilterSet(), _result("old"))
        clock.advance(200)
        cache.put("new", FilterSet(), _result("new"))
        clock.advance(100)

        assert cache.cleanup_expired() == 1
        assert cache.contains("new", FilterSet())
        assert not cache.contains("old", FilterSet())


class TestCapacity:
    def test_oldest_insertion_is_evicted(self, cache, clock):
        for i in range(51):
            cache.put(f"query {i}", FilterSet(), _result(f"query {i}"))
            clock.advance(1)

        assert cache.size() == 50
        assert cache.get("query 0", FilterSet()) is None
        assert cache.get("query 50", FilterSet()) is not None
        assert cache.get_stats()["evictions"] == 1

    def test_reads_do_not_protect_from_eviction(self, cache, clock):
        for i in range(50):
            cache.put(f"query {i}", FilterSet(), _result(f"query {i}"))
            clock.advance(1)
        cache.get("query 0", FilterSet())

        cache.put("one more", FilterSet(), _result("one more"))

        assert not cache.contains("query 0", FilterSet())
        assert cache.contains("query 1", FilterSet())

    def test_reinsert_refreshes_insertion_time(self, cache, clock):
        for i in range(50):
            cache.put(f"query {i}", FilterSet(), _result(f"query {i}"))
            clock.advance(1)
        cache.put("query 0", FilterSet(), _result("query 0"))
        clock.advance(1)

        cache.put("one more", FilterSet(), _result("one more"))

        assert cache.contains("query 0", FilterSet())
        assert not cache.contains("query 1", FilterSet())


class TestAdmission:
    def test_large_results_are_never_stored(self, cache):
        assert cache.put("invoice", FilterSet(), _result(total=101)) is False
        assert cache.size() == 0
        assert cache.get_stats()["rejected"] == 1

    def test_boundary_result_is_stored(self, cache):
        assert cache.put("invoice", FilterSet(), _result(total=100)) is True


class TestKeys:
    def test_filters_are_part_of_the_key(self, cache):
        cache.put("invoice", FilterSet(document_types=["pdf"]), _result())
        assert cache.get("invoice", FilterSet()) is None
        assert cache.get("invoice", FilterSet(document_types=("pdf",))) is not None

    def test_query_text_is_part_of_the_key(self, cache):
        cache.put("invoice", FilterSet(), _result())
        assert cache.get("invoices", FilterSet()) is None


class TestIsolation:
    def test_callers_get_copies(self, cache):
        original = _result(documents=[Document(1, "a"), Document(2, "b")])
        cache.put("invoice", FilterSet(), original)
        original.documents.clear()

        first = cache.get("invoice", FilterSet())
        first.documents.reverse()
        first.sort_by = SortBy.NAME_DESC

        second = cache.get("invoice", FilterSet())
        assert [d.id for d in second.documents] == [1, 2]
        assert second.sort_by is SortBy.RELEVANCE


def test_stats_and_clear(cache):
    cache.put("invoice", FilterSet(), _result())
    cache.get("invoice", FilterSet())
    cache.get("missing", FilterSet())

    stats = cache.get_stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 0.5
    assert stats["max_entries"] == 50

    cache.clear()
    assert len(cache) == 0


def test_concurrent_puts_respect_capacity(clock):
    cache = ResultCache(max_entries=10, clock=clock)
    barrier = threading.Barrier(4)

    def writer(offset: int) -> None:
        barrier.wait()
        for i in range(25):
            cache.put(f"q{offset}-{i}", FilterSet(), _result())

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.size() == 10


def test_equal_filters_in_other_zone_hit(cache):
    from datetime import datetime, timedelta, timezone

    stored = FilterSet(date_from=datetime(2024, 1, 1, 12, tzinfo=timezone.utc))
    cache.put("invoice", stored, _result())

    lookup = FilterSet(date_from=datetime(2024, 1, 1, 7, tzinfo=timezone(timedelta(hours=-5))))
    assert cache.get("invoice", lookup) is not None
