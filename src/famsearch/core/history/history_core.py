"""
Per-user search history tracking.

This module keeps, for every user, a bounded deque of the searches they ran.
The history lives in memory only and is owned by one engine instance.

Classes:
    SearchHistory: Thread-safe per-user history with de-duplication

Key Features:
    - Bounded per-user deque; once full, the oldest entry is dropped (FIFO)
    - Identical query text recorded again within the de-duplication window
      is silently ignored
    - Each entry remembers whether the search was served from the cache
    - Substring lookup over a user's past queries for autocomplete

Example:
    Basic history usage:
        >>> from famsearch.core.history.history_core import SearchHistory
        >>>
        >>> history = SearchHistory(max_per_user=20, dedup_seconds=300)
        >>> history.record(7, "invoice", from_cache=False)
        True
        >>> history.record(7, "invoice", from_cache=True)
        False
        >>> [item.query for item in history.get_history(7)]
        ['invoice']
"""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable

from ..types import HistoryItem


class SearchHistory:
    """In-memory per-user search history."""

    def __init__(
        self,
        max_per_user: int = 20,
        dedup_seconds: float = 300.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_per_user = max_per_user
        self.dedup_seconds = dedup_seconds
        self.clock = clock

        # per-user entries, oldest first
        self._history: dict[int, deque[HistoryItem]] = {}
        self._lock = threading.Lock()

    def record(self, user_id: int, query: str, from_cache: bool = False) -> bool:
        """
        Record a search for ``user_id``.

        Returns:
            True if an entry was stored, False if it was a recent duplicate
        """
        with self._lock:
            now = self.clock()
            entries = self._history.get(user_id)
            if entries is None:
                entries = self._history[user_id] = deque(maxlen=self.max_per_user)

            if any(
                item.query == query and now - item.timestamp < self.dedup_seconds
                for item in entries
            ):
                return False

            entries.append(HistoryItem(user_id, query, now, from_cache))
            return True

    def get_history(self, user_id: int, limit: int | None = None) -> list[HistoryItem]:
        """Most recent entries of ``user_id``, most-recent-first."""
        with self._lock:
            entries = list(reversed(self._history.get(user_id, ())))
        if limit is not None:
            entries = entries[: max(0, limit)]
        return entries

    def matching(self, user_id: int, text: str, limit: int) -> list[str]:
        """
        Past queries of ``user_id`` containing ``text`` (case-insensitive).

        Most recent first, each distinct query once.
        """
        needle = text.lower()
        suggestions: list[str] = []
        seen: set[str] = set()

        for item in self.get_history(user_id):
            if len(suggestions) >= limit:
                break
            if needle in item.query.lower() and item.query not in seen:
                suggestions.append(item.query)
                seen.add(item.query)

        return suggestions

    def clear(self, user_id: int | None = None) -> None:
        """Clear one user's history, or everyone's when ``user_id`` is None."""
        with self._lock:
            if user_id is None:
                self._history.clear()
            else:
                self._history.pop(user_id, None)

    def snapshot(self) -> dict[int, list[HistoryItem]]:
        """Copy of every user's entries, oldest first."""
        with self._lock:
            return {user_id: list(entries) for user_id, entries in self._history.items()}

    def user_count(self) -> int:
        with self._lock:
            return len(self._history)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._history.values())
