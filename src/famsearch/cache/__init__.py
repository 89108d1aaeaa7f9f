"""
Result caching for famsearch.

- keys: deterministic cache keys from query text and FilterSet
- models: CacheEntry and CacheStats
- manager: the bounded TTL ResultCache
"""

from .keys import cache_key, filters_digest
from .manager import ResultCache
from .models import CacheEntry, CacheStats

__all__ = ["ResultCache", "CacheEntry", "CacheStats", "cache_key", "filters_digest"]
