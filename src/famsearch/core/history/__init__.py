"""
Search history tracking for famsearch.

- history_core: per-user bounded history with de-duplication
- history_analytics: statistics derived from the history
"""

from .history_analytics import build_statistics, popular_queries
from .history_core import SearchHistory

__all__ = ["SearchHistory", "build_statistics", "popular_queries"]
