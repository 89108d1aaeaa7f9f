"""
Result cache for famsearch aggregate results.

This module provides the bounded, time-limited cache consulted before a
search fans out to the sources.

Classes:
    ResultCache: Thread-safe TTL cache keyed by (normalized query, FilterSet)

Features:
    - Fixed time-to-live measured from insertion; expired entries are
      removed on lookup
    - Fixed maximum entry count; on overflow the entry with the oldest
      insertion time is evicted (access order is irrelevant)
    - Results whose total exceeds a size cutoff are never stored
    - Callers always receive copies; stored results are never shared
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any

from ..core.types import AggregateResult, FilterSet
from ..utils.logging_config import get_logger
from .keys import cache_key
from .models import CacheEntry, CacheStats


class ResultCache:
    """
    Bounded TTL cache of aggregate results.

    A single lock guards every check-then-mutate sequence (expiry removal,
    insertion plus eviction). It is never held while sources are queried.
    """

    def __init__(
        self,
        ttl: float = 300.0,
        max_entries: int = 50,
        max_result_count: int = 100,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the result cache.

        Args:
            ttl: Seconds an entry stays valid after insertion
            max_entries: Maximum number of stored entries
            max_result_count: Results with a larger total are never stored
            clock: Time source in seconds, injectable for tests
        """
        self.ttl = ttl
        self.max_entries = max_entries
        self.max_result_count = max_result_count
        self.clock = clock
        self.logger = get_logger()

        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self.stats = CacheStats()

    def get(self, normalized_query: str, filters: FilterSet) -> AggregateResult | None:
        """
        Get a cached result.

        Returns:
            A copy of the cached AggregateResult if present and fresh, None otherwise
        """
        key = cache_key(normalized_query, filters)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._record_miss()
                return None

            if entry.is_expired(self.clock()):
                del self._entries[key]
                self.stats.expirations += 1
                self.stats.total_entries = len(self._entries)
                self._record_miss()
                return None

            entry.access_count += 1
            self.stats.hits += 1
            self.stats.update_hit_rate()
            return entry.value.snapshot()

    def put(self, normalized_query: str, filters: FilterSet, result: AggregateResult) -> bool:
        """
        Store a copy of ``result``.

        Returns:
            True if the result was stored, False if it was too large to cache
        """
        if result.total_results > self.max_result_count:
            with self._lock:
                self.stats.rejected += 1
            self.logger.debug(
                f"Not caching '{normalized_query}': {result.total_results} results",
                operation="cache_reject",
                total_results=result.total_results,
            )
            return False

        key = cache_key(normalized_query, filters)
        with self._lock:
            # re-inserting a key moves it to the newest position
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(
                key=key, value=result.snapshot(), created_at=self.clock(), ttl=self.ttl
            )

            while len(self._entries) > self.max_entries:
                oldest = min(self._entries.values(), key=lambda e: e.created_at)
                del self._entries[oldest.key]
                self.stats.evictions += 1

            self.stats.total_entries = len(self._entries)
        return True

    def contains(self, normalized_query: str, filters: FilterSet) -> bool:
        """True if a fresh entry exists; does not touch statistics."""
        key = cache_key(normalized_query, filters)
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_expired(self.clock())

    def cleanup_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        with self._lock:
            now = self.clock()
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for key in expired:
                del self._entries[key]
            self.stats.expirations += len(expired)
            self.stats.total_entries = len(self._entries)
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.stats.total_entries = 0

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return {
                "hits": self.stats.hits,
                "misses": self.stats.misses,
                "hit_rate": self.stats.hit_rate,
                "evictions": self.stats.evictions,
                "expirations": self.stats.expirations,
                "rejected": self.stats.rejected,
                "total_entries": len(self._entries),
                "max_entries": self.max_entries,
                "ttl": self.ttl,
            }

    def _record_miss(self) -> None:
        self.stats.misses += 1
        self.stats.update_hit_rate()
