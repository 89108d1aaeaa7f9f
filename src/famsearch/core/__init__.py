"""
Core functionality for the famsearch package.

This module contains the fundamental components of the search engine:
- The FamilySearch engine
- Configuration management
- Query normalization and validation
- Core data types and structures
- Search history tracking
"""

from .api import FamilySearch
from .config import SearchConfig
from .history import SearchHistory
from .query import build_query, normalize, validate
from .session import SessionProvider, StaticSessionProvider, UserIdentity
from .types import (
    AdvancedSearchCriteria,
    AggregateResult,
    FilterSet,
    HistoryItem,
    Query,
    SearchOptions,
    SearchOutcome,
    SortBy,
)

__all__ = [
    # Main classes
    "FamilySearch",
    "SearchConfig",
    "SearchHistory",
    "SessionProvider",
    "StaticSessionProvider",
    "UserIdentity",
    # Query handling
    "build_query",
    "normalize",
    "validate",
    # Data types
    "AdvancedSearchCriteria",
    "AggregateResult",
    "FilterSet",
    "HistoryItem",
    "Query",
    "SearchOptions",
    "SearchOutcome",
    "SortBy",
]
