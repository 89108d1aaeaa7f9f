"""Tests for famsearch.search.suggestions module."""

from __future__ import annotations

import pytest

from famsearch.core.history import SearchHistory
from famsearch.core.types import Document, Folder, Suggestion, SuggestionType
from famsearch.search.suggestions import SuggestionMerger
from famsearch.sources import DocumentSource, FolderSource


class BrokenSuggestSource:
    def suggest(self, prefix, limit):
        raise RuntimeError("index unavailable")


@pytest.fixture
def history(clock):
    return SearchHistory(clock=clock)


@pytest.fixture
def merger(history):
    documents = DocumentSource(
        [
            Document(1, "invoice-march.pdf"),
            Document(2, "inventory.xlsx"),
            Document(3, "invoice-april.pdf"),
            Document(4, "invoice-old.pdf", archived=True),
        ]
    )
    folders = FolderSource([Folder(1, "Invoices"), Folder(2, "Photos")])
    return SuggestionMerger(history, documents, folders)


def test_history_matches_rank_first(merger, history, clock):
    history.record(7, "invoice march")
    clock.advance(1)
    history.record(7, "photos")

    suggestions = merger.suggest(7, "inv", 10)

    assert suggestions[0] == Suggestion("invoice march", SuggestionType.HISTORY, 1.0)
    assert {s.type for s in suggestions[1:]} <= {
        SuggestionType.FILE_NAME,
        SuggestionType.FOLDER_NAME,
    }
    scores = [s.score for s in suggestions]
    assert scores == sorted(scores, reverse=True)


def test_name_suggestions_skip_archived_and_non_prefix(merger):
    texts = [s.text for s in merger.suggest(7, "inv", 10)]
    assert "invoice-old.pdf" not in texts
    assert "Photos" not in texts
    assert "Invoices" in texts


def test_name_scores_cover_prefix_fraction(merger):
    folder = next(s for s in merger.suggest(7, "inv", 10) if s.type == SuggestionType.FOLDER_NAME)
    assert folder.score == pytest.approx(3 / len("Invoices"))


def test_each_source_contributes_half(merger):
    suggestions = merger.suggest(7, "inv", 2)
    file_names = [s for s in suggestions if s.type == SuggestionType.FILE_NAME]
    assert len(file_names) == 1
    assert len(suggestions) == 2


def test_result_is_truncated(merger, history):
    for text in ("invoice a", "invoice b", "invoice c"):
        history.record(7, text)
    assert len(merger.suggest(7, "inv", 2)) == 2


def test_history_contributes_at_most_three(merger, history, clock):
    for i in range(5):
        history.record(7, f"invoice {i}")
        clock.advance(1)
    suggestions = merger.suggest(7, "invoice", 20)
    assert len([s for s in suggestions if s.type == SuggestionType.HISTORY]) == 3


@pytest.mark.parametrize("prefix", ["", " ", "i", " i "])
def test_short_prefix_returns_nothing(merger, prefix):
    assert merger.suggest(7, prefix, 10) == []


def test_anonymous_user_or_zero_limit(merger):
    assert merger.suggest(None, "inv", 10) == []
    assert merger.suggest(7, "inv", 0) == []


def test_prefix_is_normalized(merger):
    assert [s.text for s in merger.suggest(7, "  INV  ", 10)] == [
        s.text for s in merger.suggest(7, "inv", 10)
    ]


def test_failing_source_is_skipped(history):
    folders = FolderSource([Folder(1, "Invoices")])
    merger = SuggestionMerger(history, BrokenSuggestSource(), folders)
    assert [s.text for s in merger.suggest(7, "inv", 10)] == ["Invoices"]
