from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from ..core.types import AggregateResult, Document, SortBy


@dataclass(frozen=True)
class ScoringWeights:
    """Weights of the relevance score components."""

    name_match: float = 10.0
    type_match: float = 5.0
    recency: float = 5.0
    recency_window_days: float = 30.0


DEFAULT_WEIGHTS = ScoringWeights()


def relevance_score(
    document: Document,
    query: str,
    now: datetime | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """
    Relevance of a document for a normalized query.

    - name contains the query (case-insensitive): +10
    - type contains the query (case-insensitive): +5
    - recency: 5 for a document created today, decaying linearly to 0 at
      30 whole days; documents without a creation date get no recency bonus

    The maximum is 20.0 (name and type match, created now) and a matching
    document 30 or more days old scores exactly 15.0.
    """
    needle = query.lower()
    score = 0.0

    if needle in document.name.lower():
        score += weights.name_match
    if document.type and needle in document.type.lower():
        score += weights.type_match

    if document.created_at is not None:
        reference = now if now is not None else datetime.now(document.created_at.tzinfo)
        # whole days elapsed; documents dated in the future count as today
        days = max(0, (reference - document.created_at).days)
        score += max(0.0, weights.recency * (1.0 - days / weights.recency_window_days))

    return score


def _date_key(document: Document) -> tuple[bool, Any]:
    # missing dates sort as the earliest possible date
    return (document.created_at is not None, document.created_at or 0)


_SORT_KEYS: dict[SortBy, tuple[Callable[[Document], Any], bool]] = {
    SortBy.DATE_DESC: (_date_key, True),
    SortBy.DATE_ASC: (_date_key, False),
    SortBy.NAME_ASC: (lambda d: d.name, False),
    SortBy.NAME_DESC: (lambda d: d.name, True),
    SortBy.SIZE_DESC: (lambda d: d.size, True),
    SortBy.SIZE_ASC: (lambda d: d.size, False),
}


def sort_documents(
    documents: list[Document],
    sort_by: SortBy,
    query: str = "",
    now: datetime | None = None,
) -> list[Document]:
    """
    Return ``documents`` in the requested order.

    Sorting is stable: items comparing equal keep their source order. Name
    ordering is case-sensitive.
    """
    if not documents:
        return []

    if sort_by == SortBy.RELEVANCE:
        scored = [(relevance_score(d, query, now), d) for d in documents]
        scored.sort(key=lambda x: x[0], reverse=True)
        return [d for _, d in scored]

    key, descending = _SORT_KEYS[sort_by]
    return sorted(documents, key=key, reverse=descending)


def rank_result(
    result: AggregateResult, sort_by: SortBy, now: datetime | None = None
) -> AggregateResult:
    """
    Reorder the documents of ``result``.

    Returns a new AggregateResult; ``result`` itself is left untouched. Only
    the document list is reordered and no count changes.
    """
    documents = sort_documents(result.documents, sort_by, result.normalized_query, now)
    return replace(result.snapshot(), documents=documents, sort_by=sort_by)
