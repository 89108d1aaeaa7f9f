"""
Cache data models for famsearch.

Classes:
    CacheEntry: A cached aggregate result with its insertion time
    CacheStats: Cache performance statistics
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.types import AggregateResult


@dataclass
class CacheEntry:
    """Represents a cached search result with metadata."""

    key: str
    value: AggregateResult
    created_at: float
    ttl: float  # Time to live in seconds
    access_count: int = 0

    def is_expired(self, now: float) -> bool:
        """An entry is valid for strictly less than ``ttl`` seconds."""
        return now - self.created_at >= self.ttl


@dataclass
class CacheStats:
    """Cache performance statistics."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0
    rejected: int = 0
    total_entries: int = 0
    hit_rate: float = 0.0

    def update_hit_rate(self) -> None:
        """Update the hit rate calculation."""
        total_requests = self.hits + self.misses
        self.hit_rate = self.hits / total_requests if total_requests > 0 else 0.0
