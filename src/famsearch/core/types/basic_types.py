"""
Basic type definitions for famsearch core functionality.

This module contains the value types that flow through a search request: the
query, the filter set that narrows every source, per-source partial results,
the merged aggregate, history records, suggestions and the tagged outcome
returned to callers.

Key Types:
    EntityKind: The four record kinds searched by the engine
    SortBy: Closed set of orderings applied to document results
    SuggestionType: Origin of an autocomplete suggestion
    SearchPhase: Phases of the search pipeline
    Query: Raw and normalized query text
    FilterSet: Hashable narrowing constraints shared by all sources
    SearchOptions: Per-request options (cache use, sort order, result cap)
    AdvancedSearchCriteria: Rich criteria translated into a FilterSet
    SourceResult: Outcome of one source adapter call
    AggregateResult: Merged outcome of the four source calls
    HistoryItem: One recorded search of a user
    Suggestion: One autocomplete candidate
    SearchOutcome: Result-or-error value returned by the engine
    SearchStatistics: Engine-wide usage statistics

Example:
    Building filters and options:
        >>> from datetime import datetime
        >>> from famsearch.core.types.basic_types import FilterSet, SearchOptions, SortBy
        >>>
        >>> filters = FilterSet(document_types=["pdf"], date_from=datetime(2024, 1, 1))
        >>> options = SearchOptions(sort_by=SortBy.NAME_ASC)
        >>> filters == FilterSet(document_types=("pdf",), date_from=datetime(2024, 1, 1))
        True
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from ...utils.error_handling import ErrorKind, error_for_kind
from .record_types import Category, Document, Folder, Member

T = TypeVar("T")

WILDCARD = "*"


class EntityKind(str, Enum):
    """Record kinds covered by a global search."""

    DOCUMENTS = "documents"
    FOLDERS = "folders"
    CATEGORIES = "categories"
    MEMBERS = "members"


class SortBy(str, Enum):
    """Orderings applied to the document results of a search."""

    RELEVANCE = "relevance"
    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    SIZE_DESC = "size_desc"
    SIZE_ASC = "size_asc"


class SuggestionType(str, Enum):
    HISTORY = "history"
    FILE_NAME = "file_name"
    FOLDER_NAME = "folder_name"
    CATEGORY_NAME = "category_name"
    MEMBER_NAME = "member_name"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    HIGHLIGHT = "highlight"


class SearchPhase(str, Enum):
    """Phases a search request passes through."""

    IDLE = "idle"
    VALIDATING = "validating"
    CACHE_LOOKUP = "cache_lookup"
    AGGREGATING = "aggregating"
    RANKING = "ranking"
    CACHING = "caching"
    HISTORY_RECORDING = "history_recording"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class Query:
    """
    Query text as typed by the user and in normalized form.

    Attributes:
        raw: Text exactly as received
        normalized: Trimmed, lower-cased text with whitespace runs collapsed
    """

    raw: str
    normalized: str

    @property
    def is_wildcard(self) -> bool:
        """True when the query asks for every record."""
        return self.normalized == WILDCARD


def _id_tuple(values: Iterable[Any] | None) -> tuple[Any, ...] | None:
    if values is None:
        return None
    unique = tuple(sorted(set(values)))
    return unique or None


@dataclass(frozen=True, slots=True)
class FilterSet:
    """
    Narrowing constraints applied independently by each source.

    Allow-lists are stored as sorted, de-duplicated tuples and an empty
    allow-list is the same as no allow-list, so equal constraints always
    compare (and hash) equal. FilterSets are part of the cache key.

    Attributes:
        document_types: Allowed document type labels
        category_ids: Allowed category ids (folders and categories)
        member_ids: Allowed member ids (documents, folders and members)
        min_size: Inclusive lower size bound in bytes (documents)
        max_size: Inclusive upper size bound in bytes (documents)
        date_from: Inclusive lower creation date bound
        date_to: Inclusive upper creation date bound
        include_archived: Include archived documents and folders
    """

    document_types: tuple[str, ...] | None = None
    category_ids: tuple[int, ...] | None = None
    member_ids: tuple[int, ...] | None = None
    min_size: int | None = None
    max_size: int | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    include_archived: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "document_types", _id_tuple(self.document_types))
        object.__setattr__(self, "category_ids", _id_tuple(self.category_ids))
        object.__setattr__(self, "member_ids", _id_tuple(self.member_ids))

    @property
    def is_empty(self) -> bool:
        return self == FilterSet()

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-friendly representation with ISO-8601 dates."""
        return {
            "document_types": list(self.document_types) if self.document_types else None,
            "category_ids": list(self.category_ids) if self.category_ids else None,
            "member_ids": list(self.member_ids) if self.member_ids else None,
            "min_size": self.min_size,
            "max_size": self.max_size,
            "date_from": self.date_from.isoformat() if self.date_from else None,
            "date_to": self.date_to.isoformat() if self.date_to else None,
            "include_archived": self.include_archived,
        }


@dataclass(slots=True)
class SearchOptions:
    """
    Per-request options.

    Attributes:
        use_cache: Read from and write to the result cache
        sort_by: Ordering applied to document results
        max_results: Cap on each per-kind list handed back to the caller
    """

    use_cache: bool = True
    sort_by: SortBy = SortBy.RELEVANCE
    max_results: int = 100


@dataclass(slots=True)
class AdvancedSearchCriteria:
    """
    Multi-criteria search request.

    Attributes:
        text_query: Free text; ``None`` or blank searches every record
        document_types: Allowed document type labels
        categories: Allowed category ids
        date_range: Inclusive (from, to) creation date range
        size_range: Inclusive (min, max) document size range in bytes
        sort_by: Ordering applied to document results
        include_archived: Include archived documents and folders
    """

    text_query: str | None = None
    document_types: list[str] = field(default_factory=list)
    categories: list[int] = field(default_factory=list)
    date_range: tuple[datetime, datetime] | None = None
    size_range: tuple[int, int] | None = None
    sort_by: SortBy = SortBy.RELEVANCE
    include_archived: bool = False

    def to_filters(self) -> FilterSet:
        """Translate the criteria into a FilterSet."""
        return FilterSet(
            document_types=tuple(self.document_types),
            category_ids=tuple(self.categories),
            date_from=self.date_range[0] if self.date_range else None,
            date_to=self.date_range[1] if self.date_range else None,
            min_size=self.size_range[0] if self.size_range else None,
            max_size=self.size_range[1] if self.size_range else None,
            include_archived=self.include_archived,
        )

    def summary(self) -> str:
        """One-line description of the criteria, used in logs."""
        parts: list[str] = []
        if self.text_query:
            parts.append(f"text: '{self.text_query}'")
        if self.document_types:
            parts.append(f"types: {','.join(self.document_types)}")
        if self.categories:
            parts.append(f"categories: {len(self.categories)}")
        if self.date_range:
            parts.append(
                f"period: {self.date_range[0].isoformat()} to {self.date_range[1].isoformat()}"
            )
        if self.size_range:
            parts.append(f"size: {self.size_range[0]}-{self.size_range[1]} bytes")
        return ", ".join(parts)


@dataclass(frozen=True)
class SourceResult(Generic[T]):
    """
    Outcome of one source adapter call.

    Attributes:
        items: Matching records in adapter order
        total_found: Number of matching records
        elapsed_ms: Time spent inside the adapter
    """

    items: tuple[T, ...] = ()
    total_found: int = 0
    elapsed_ms: float = 0.0

    @classmethod
    def empty(cls, elapsed_ms: float = 0.0) -> SourceResult[T]:
        return cls(items=(), total_found=0, elapsed_ms=elapsed_ms)


@dataclass(slots=True)
class AggregateResult:
    """
    Merged outcome of a global search.

    ``total_results`` is the sum of the four per-source counts when the
    result is built. Ranking only reorders ``documents``; it never changes
    any count.

    Attributes:
        query: Query text as typed
        normalized_query: Normalized query text
        documents: Matching documents, ordered by ``sort_by``
        folders: Matching folders in source order
        categories: Matching categories in source order
        members: Matching members in source order
        total_results: Sum of the per-source counts
        search_time: Wall-clock time the fan-out completed
        duration_ms: Milliseconds from dispatch to the last source completion
        filters: FilterSet that produced the result
        sort_by: Ordering currently applied to ``documents``
    """

    query: str
    normalized_query: str
    documents: list[Document] = field(default_factory=list)
    folders: list[Folder] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    total_results: int = 0
    search_time: datetime = field(default_factory=datetime.now)
    duration_ms: float = 0.0
    filters: FilterSet = field(default_factory=FilterSet)
    sort_by: SortBy = SortBy.RELEVANCE

    def snapshot(self) -> AggregateResult:
        """Copy whose lists can be reordered without touching this result."""
        return replace(
            self,
            documents=list(self.documents),
            folders=list(self.folders),
            categories=list(self.categories),
            members=list(self.members),
        )

    def limited(self, max_results: int) -> AggregateResult:
        """Snapshot with every per-kind list capped at ``max_results`` items."""
        limit = max(0, max_results)
        return replace(
            self,
            documents=self.documents[:limit],
            folders=self.folders[:limit],
            categories=self.categories[:limit],
            members=self.members[:limit],
        )

    @property
    def counts(self) -> dict[EntityKind, int]:
        """Number of items currently held per record kind."""
        return {
            EntityKind.DOCUMENTS: len(self.documents),
            EntityKind.FOLDERS: len(self.folders),
            EntityKind.CATEGORIES: len(self.categories),
            EntityKind.MEMBERS: len(self.members),
        }


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """One recorded search of a user."""

    user_id: int
    query: str
    timestamp: float
    from_cache: bool = False


@dataclass(frozen=True, slots=True)
class Suggestion:
    """Autocomplete candidate."""

    text: str
    type: SuggestionType
    score: float = 1.0


@dataclass(slots=True)
class SearchOutcome:
    """
    Result-or-error value returned by the engine.

    Exactly one of ``result`` and ``error`` is set.

    Attributes:
        result: The aggregate result on success
        error: Error kind on failure
        message: Human-readable failure description (empty on success)
        phases: Pipeline phases the request went through
        from_cache: True when the result was served from the cache
    """

    result: AggregateResult | None = None
    error: ErrorKind | None = None
    message: str = ""
    phases: tuple[SearchPhase, ...] = ()
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None

    def unwrap(self) -> AggregateResult:
        """Return the result or raise the SearchError matching ``error``."""
        if self.result is not None and self.error is None:
            return self.result
        raise error_for_kind(self.error or ErrorKind.INTERNAL_ERROR, self.message)


@dataclass(slots=True)
class SearchStatistics:
    """Engine-wide usage statistics."""

    total_searches: int = 0
    unique_users: int = 0
    cache_size: int = 0
    cache_hit_rate: float = 0.0
    avg_searches_per_user: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "totalSearches": self.total_searches,
            "uniqueUsers": self.unique_users,
            "cacheSize": self.cache_size,
            "cacheHitRate": f"{self.cache_hit_rate * 100:.2f}%",
            "avgSearchesPerUser": self.avg_searches_per_user,
        }
