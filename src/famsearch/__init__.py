"""
famsearch: Federated search and result caching for household records.

One query is searched concurrently across the documents, folders,
classification categories and member records of a household. Results are
merged, ranked, cached for a short time and recorded in a per-user history
that also feeds autocomplete.

Key Features:
    - **Concurrent Fan-Out**: The four record sources are queried in parallel;
      a failing source degrades to an empty partial result
    - **Ranking**: Exact relevance score plus date, name and size orderings
    - **Result Cache**: Five-minute TTL, 50 entries, oldest insertion evicted
    - **History**: Per-user, bounded, with a five-minute de-duplication window
    - **Autocomplete**: History matches merged with document and folder names
    - **Errors as Values**: Every search returns a SearchOutcome

Main Classes:
    FamilySearch: Search engine owning the cache and the history
    SearchConfig: Every tunable limit of the engine
    FilterSet: Narrowing constraints shared by all sources
    SearchOptions: Per-request cache use, sort order and result cap
    AdvancedSearchCriteria: Multi-criteria search input
    SearchOutcome: Result-or-error value returned by searches

Core Modules:
    core.api: The FamilySearch engine
    core.query: Query normalization and validation
    core.managers.fan_out: Concurrent source dispatch
    search.scorer: Relevance score and document ordering
    search.suggestions: Autocomplete
    cache: The result cache
    sources: Source adapter contract and in-memory sources
    cli: Command-line interface

Example Usage:
    >>> from famsearch import FamilySearch, StaticSessionProvider, UserIdentity
    >>> from famsearch.sources import load_sources
    >>>
    >>> engine = FamilySearch.from_sources(
    ...     StaticSessionProvider(UserIdentity(7, "Alex")), load_sources("records.json")
    ... )
    >>> outcome = engine.search("invoice")
    >>> outcome.result.total_results
    6

    CLI usage:
        $ famsearch --data records.json --user 7 find invoice --sort name_asc
"""

from .core.api import FamilySearch
from .core.config import SearchConfig
from .core.session import SessionProvider, StaticSessionProvider, UserIdentity
from .core.types import (
    AdvancedSearchCriteria,
    AggregateResult,
    Category,
    Document,
    EntityKind,
    FilterSet,
    Folder,
    HistoryItem,
    Member,
    OutputFormat,
    SearchOptions,
    SearchOutcome,
    SearchPhase,
    SearchStatistics,
    SortBy,
    Suggestion,
    SuggestionType,
)
from .utils.error_handling import (
    AccessDeniedError,
    ErrorKind,
    InvalidQueryError,
    SearchError,
    SearchTimeoutError,
    TooManyResultsError,
)
from .utils.logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

# Package metadata
__version__ = "0.1.0"
__description__ = "Federated search and result caching for household records"

# Public API
__all__ = [
    # Main classes
    "FamilySearch",
    "SearchConfig",
    "SessionProvider",
    "StaticSessionProvider",
    "UserIdentity",
    # Data types
    "AdvancedSearchCriteria",
    "AggregateResult",
    "Category",
    "Document",
    "EntityKind",
    "FilterSet",
    "Folder",
    "HistoryItem",
    "Member",
    "OutputFormat",
    "SearchOptions",
    "SearchOutcome",
    "SearchPhase",
    "SearchStatistics",
    "SortBy",
    "Suggestion",
    "SuggestionType",
    # Errors
    "AccessDeniedError",
    "ErrorKind",
    "InvalidQueryError",
    "SearchError",
    "SearchTimeoutError",
    "TooManyResultsError",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
]
