"""
Type definitions for famsearch.

- basic_types: query, filters, results, history, suggestions and outcomes
- record_types: the record kinds returned by the source adapters
"""

from .basic_types import (
    WILDCARD,
    AdvancedSearchCriteria,
    AggregateResult,
    EntityKind,
    FilterSet,
    HistoryItem,
    OutputFormat,
    Query,
    SearchOptions,
    SearchOutcome,
    SearchPhase,
    SearchStatistics,
    SortBy,
    SourceResult,
    Suggestion,
    SuggestionType,
)
from .record_types import Category, Document, Folder, Member

__all__ = [
    "WILDCARD",
    "AdvancedSearchCriteria",
    "AggregateResult",
    "EntityKind",
    "FilterSet",
    "HistoryItem",
    "OutputFormat",
    "Query",
    "SearchOptions",
    "SearchOutcome",
    "SearchPhase",
    "SearchStatistics",
    "SortBy",
    "SourceResult",
    "Suggestion",
    "SuggestionType",
    "Category",
    "Document",
    "Folder",
    "Member",
]
