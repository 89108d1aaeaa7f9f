"""Tests for famsearch.search.scorer module."""

from __future__ import annotations

from datetime import timedelta

import pytest

from famsearch.core.types import AggregateResult, Document, SortBy
from famsearch.search.scorer import (
    ScoringWeights,
    rank_result,
    relevance_score,
    sort_documents,
)


class TestRelevanceScore:
    def test_maximum_score(self, now):
        doc = Document(1, "report", "report", created_at=now)
        assert relevance_score(doc, "report", now) == 20.0

    def test_month_old_match_scores_fifteen(self, now):
        doc = Document(1, "report", "report", created_at=now - timedelta(days=30))
        assert relevance_score(doc, "report", now) == 15.0

    @pytest.mark.parametrize("days", [31, 90, 365])
    def test_recency_never_goes_negative(self, now, days):
        doc = Document(1, "report", "report", created_at=now - timedelta(days=days))
        assert relevance_score(doc, "report", now) == 15.0

    def test_linear_decay(self, now):
        doc = Document(1, "other", "pdf", created_at=now - timedelta(days=15))
        assert relevance_score(doc, "zzz", now) == pytest.approx(2.5)

    def test_partial_days_are_truncated(self, now):
        doc = Document(1, "other", created_at=now - timedelta(hours=23))
        assert relevance_score(doc, "zzz", now) == 5.0

    def test_future_dates_count_as_today(self, now):
        doc = Document(1, "other", created_at=now + timedelta(days=3))
        assert relevance_score(doc, "zzz", now) == 5.0

    def test_missing_date_gets_no_recency(self, now):
        doc = Document(1, "Invoice.PDF", "PDF")
        assert relevance_score(doc, "invoice", now) == 10.0
        assert relevance_score(doc, "pdf", now) == 15.0

    def test_missing_type(self, now):
        doc = Document(1, "notes", None)
        assert relevance_score(doc, "pdf", now) == 0.0

    def test_custom_weights(self, now):
        doc = Document(1, "report")
        weights = ScoringWeights(name_match=1.0)
        assert relevance_score(doc, "report", now, weights) == 1.0


class TestSortDocuments:
    def test_relevance_descending_and_stable(self, now):
        docs = [
            Document(1, "a", created_at=now - timedelta(days=60)),
            Document(2, "invoice b", created_at=now - timedelta(days=60)),
            Document(3, "c", created_at=now - timedelta(days=60)),
            Document(4, "invoice d", created_at=now - timedelta(days=60)),
        ]
        ordered = sort_documents(docs, SortBy.RELEVANCE, "invoice", now)
        assert [d.id for d in ordered] == [2, 4, 1, 3]

    def test_date_orders_put_missing_dates_earliest(self, now):
        docs = [
            Document(1, "a", created_at=now - timedelta(days=1)),
            Document(2, "b"),
            Document(3, "c", created_at=now - timedelta(days=5)),
        ]
        assert [d.id for d in sort_documents(docs, SortBy.DATE_DESC)] == [1, 3, 2]
        assert [d.id for d in sort_documents(docs, SortBy.DATE_ASC)] == [2, 3, 1]

    def test_name_order_is_case_sensitive(self):
        docs = [Document(1, "banana"), Document(2, "Cherry"), Document(3, "apple")]
        assert [d.name for d in sort_documents(docs, SortBy.NAME_ASC)] == [
            "Cherry",
            "apple",
            "banana",
        ]
        assert [d.name for d in sort_documents(docs, SortBy.NAME_DESC)] == [
            "banana",
            "apple",
            "Cherry",
        ]

    def test_size_orders_keep_ties_in_source_order(self):
        docs = [Document(1, "a", size=10), Document(2, "b", size=30), Document(3, "c", size=10)]
        assert [d.id for d in sort_documents(docs, SortBy.SIZE_DESC)] == [2, 1, 3]
        assert [d.id for d in sort_documents(docs, SortBy.SIZE_ASC)] == [1, 3, 2]

    def test_empty(self):
        assert sort_documents([], SortBy.NAME_ASC) == []


def test_rank_result_reorders_documents_only(now):
    result = AggregateResult(
        query="Doc",
        normalized_query="doc",
        documents=[Document(1, "b-doc"), Document(2, "a-doc")],
        total_results=5,
    )

    ranked = rank_result(result, SortBy.NAME_ASC, now)

    assert [d.id for d in ranked.documents] == [2, 1]
    assert ranked.sort_by is SortBy.NAME_ASC
    assert ranked.total_results == 5
    # the input is untouched
    assert [d.id for d in result.documents] == [1, 2]
    assert result.sort_by is SortBy.RELEVANCE
