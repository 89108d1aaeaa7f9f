"""
Search statistics derived from the history.

Functions:
    build_statistics: Engine-wide totals and cache hit rate
    popular_queries: Most frequent queries across all users
"""

from __future__ import annotations

from collections import Counter

from ..types import SearchStatistics
from .history_core import SearchHistory


def build_statistics(history: SearchHistory, cache_size: int) -> SearchStatistics:
    """
    Compute engine-wide statistics.

    The cache hit rate is the fraction of stored history entries that were
    served from the cache. The average per user uses integer division.
    """
    entries = history.snapshot()
    total_searches = sum(len(items) for items in entries.values())
    unique_users = len(entries)
    from_cache = sum(1 for items in entries.values() for item in items if item.from_cache)

    return SearchStatistics(
        total_searches=total_searches,
        unique_users=unique_users,
        cache_size=cache_size,
        cache_hit_rate=from_cache / total_searches if total_searches > 0 else 0.0,
        avg_searches_per_user=total_searches // unique_users if unique_users > 0 else 0,
    )


def popular_queries(history: SearchHistory, limit: int = 5) -> list[tuple[str, int]]:
    """Most frequent query texts (case-insensitive), with their counts."""
    counts: Counter[str] = Counter()
    for items in history.snapshot().values():
        for item in items:
            counts[item.query.lower()] += 1
    return counts.most_common(limit)
