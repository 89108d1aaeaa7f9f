"""Tests for famsearch.core.types module."""

from __future__ import annotations

from datetime import datetime

import pytest

from famsearch.core.types import (
    AdvancedSearchCriteria,
    AggregateResult,
    Document,
    EntityKind,
    FilterSet,
    Folder,
    SearchOutcome,
    SearchPhase,
    SearchStatistics,
    SortBy,
    SourceResult,
)
from famsearch.utils.error_handling import ErrorKind, SearchError


class TestFilterSet:
    def test_equal_sets_are_equal_and_hash_alike(self):
        a = FilterSet(document_types=["pdf", "jpg"], member_ids=[8, 7])
        b = FilterSet(document_types=("jpg", "pdf", "pdf"), member_ids=(7, 8))
        assert a == b
        assert hash(a) == hash(b)

    def test_empty_allow_list_is_no_allow_list(self):
        assert FilterSet(category_ids=[]) == FilterSet()
        assert FilterSet(category_ids=[]).is_empty

    def test_different_fields_differ(self):
        assert FilterSet(include_archived=True) != FilterSet()
        assert FilterSet(min_size=1) != FilterSet(max_size=1)

    def test_to_dict_uses_iso_dates(self):
        filters = FilterSet(date_from=datetime(2024, 1, 1), document_types=["pdf"])
        data = filters.to_dict()
        assert data["date_from"] == "2024-01-01T00:00:00"
        assert data["document_types"] == ["pdf"]
        assert data["date_to"] is None


class TestAdvancedSearchCriteria:
    def test_to_filters(self):
        start, end = datetime(2024, 1, 1), datetime(2024, 12, 31)
        criteria = AdvancedSearchCriteria(
            text_query="tax",
            document_types=["pdf"],
            categories=[2],
            date_range=(start, end),
            size_range=(10, 1000),
            include_archived=True,
        )
        assert criteria.to_filters() == FilterSet(
            document_types=("pdf",),
            category_ids=(2,),
            date_from=start,
            date_to=end,
            min_size=10,
            max_size=1000,
            include_archived=True,
        )

    def test_empty_criteria_give_empty_filters(self):
        assert AdvancedSearchCriteria().to_filters().is_empty

    def test_summary(self):
        criteria = AdvancedSearchCriteria(
            text_query="tax", document_types=["pdf", "jpg"], categories=[1, 2], size_range=(1, 9)
        )
        assert criteria.summary() == "text: 'tax', types: pdf,jpg, categories: 2, size: 1-9 bytes"

    def test_summary_of_nothing_is_empty(self):
        assert AdvancedSearchCriteria().summary() == ""


class TestSourceResult:
    def test_empty(self):
        result = SourceResult.empty(3.5)
        assert result.items == ()
        assert result.total_found == 0
        assert result.elapsed_ms == 3.5


def _aggregate() -> AggregateResult:
    return AggregateResult(
        query="Invoice",
        normalized_query="invoice",
        documents=[Document(i, f"doc-{i}") for i in range(5)],
        folders=[Folder(1, "f")],
        total_results=6,
    )


class TestAggregateResult:
    def test_snapshot_lists_are_independent(self):
        original = _aggregate()
        copy = original.snapshot()
        copy.documents.reverse()
        copy.folders.clear()
        assert [d.id for d in original.documents] == [0, 1, 2, 3, 4]
        assert len(original.folders) == 1

    def test_limited_caps_each_list_but_keeps_total(self):
        limited = _aggregate().limited(2)
        assert [d.id for d in limited.documents] == [0, 1]
        assert len(limited.folders) == 1
        assert limited.total_results == 6

    def test_counts(self):
        counts = _aggregate().counts
        assert counts[EntityKind.DOCUMENTS] == 5
        assert counts[EntityKind.FOLDERS] == 1
        assert counts[EntityKind.MEMBERS] == 0


class TestSearchOutcome:
    def test_ok_unwrap(self):
        result = _aggregate()
        outcome = SearchOutcome(result=result, phases=(SearchPhase.IDLE, SearchPhase.DONE))
        assert outcome.ok
        assert outcome.unwrap() is result

    def test_error_unwrap_raises_matching_kind(self):
        outcome = SearchOutcome(error=ErrorKind.TIMEOUT, message="too slow")
        assert not outcome.ok
        with pytest.raises(SearchError) as exc_info:
            outcome.unwrap()
        assert exc_info.value.kind == ErrorKind.TIMEOUT
        assert exc_info.value.message == "too slow"


class TestSearchStatistics:
    def test_as_dict_formats_hit_rate(self):
        stats = SearchStatistics(
            total_searches=8, unique_users=3, cache_size=2, cache_hit_rate=0.125,
            avg_searches_per_user=2,
        )
        assert stats.as_dict() == {
            "totalSearches": 8,
            "uniqueUsers": 3,
            "cacheSize": 2,
            "cacheHitRate": "12.50%",
            "avgSearchesPerUser": 2,
        }


def test_sort_by_values():
    assert SortBy("name_asc") is SortBy.NAME_ASC
    assert SortBy.RELEVANCE == "relevance"
    assert len(SortBy) == 7
