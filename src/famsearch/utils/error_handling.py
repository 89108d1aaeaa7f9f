"""
Error taxonomy and reporting for famsearch.

Search requests never let raw exceptions cross the engine boundary. Internally
the pipeline raises the typed exceptions defined here; the engine converts
them into an ``ErrorKind`` on the returned ``SearchOutcome``. Faults inside a
source adapter are downgraded to empty partial results and only recorded in
an ``ErrorCollector``.

Error Kinds (surfaced to callers):
    - INVALID_QUERY: blank, too short or too long query text
    - ACCESS_DENIED: no authenticated user
    - TIMEOUT: the fan-out exceeded the soft time budget
    - TOO_MANY_RESULTS: reserved for callers that enforce a hard cap
    - INTERNAL_ERROR: any unexpected pipeline fault

Classes:
    ErrorKind: Caller-facing error kinds
    QueryProblem: Reasons a query fails validation
    ErrorSeverity: Error severity levels
    ErrorCategory: Internal error classification
    ErrorInfo: Detailed error record kept by the collector
    SearchError: Base exception carrying an ErrorKind
    ErrorCollector: Thread-safe bounded collection of ErrorInfo records

Example:
    >>> from famsearch.utils.error_handling import ErrorCollector, SourceError
    >>>
    >>> collector = ErrorCollector()
    >>> collector.add_error(SourceError("store offline", source="documents"))
    >>> collector.get_summary()["total_errors"]
    1
"""

from __future__ import annotations

import sys
import threading
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Error kinds reported to callers of the engine."""

    INVALID_QUERY = "invalid_query"
    ACCESS_DENIED = "access_denied"
    TIMEOUT = "timeout"
    TOO_MANY_RESULTS = "too_many_results"
    INTERNAL_ERROR = "internal_error"


class QueryProblem(str, Enum):
    """Why a query was rejected."""

    EMPTY_QUERY = "empty_query"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    VALIDATION = "validation"
    PERMISSION = "permission"
    TIMEOUT = "timeout"
    SOURCE = "source"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    source: str | None = None
    exception_type: str | None = None
    traceback_str: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


class SearchError(Exception):
    """Base exception for search-related errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.INTERNAL_ERROR,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.kind: ErrorKind = kind
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class InvalidQueryError(SearchError):
    """The query text failed validation."""

    def __init__(
        self, message: str, reason: QueryProblem, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            kind=ErrorKind.INVALID_QUERY,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            suggestions=["Enter between 2 and 200 characters"],
            context=context,
        )
        self.reason: QueryProblem = reason


class AccessDeniedError(SearchError):
    """No authenticated user is available for the request."""

    def __init__(self, message: str = "No authenticated user") -> None:
        super().__init__(
            message,
            kind=ErrorKind.ACCESS_DENIED,
            category=ErrorCategory.PERMISSION,
            severity=ErrorSeverity.HIGH,
            suggestions=["Log in before searching"],
        )


class SearchTimeoutError(SearchError):
    """The fan-out did not complete within the soft time budget."""

    def __init__(self, timeout: float, context: dict[str, Any] | None = None) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["timeout_seconds"] = timeout

        super().__init__(
            f"Search exceeded {timeout:.1f}s",
            kind=ErrorKind.TIMEOUT,
            category=ErrorCategory.TIMEOUT,
            severity=ErrorSeverity.HIGH,
            suggestions=["Narrow the query or add filters", "Retry later"],
            context=merged_context,
        )


class TooManyResultsError(SearchError):
    """The result set exceeds a caller-imposed hard cap."""

    def __init__(self, total: int, limit: int) -> None:
        super().__init__(
            f"{total} results exceed the limit of {limit}",
            kind=ErrorKind.TOO_MANY_RESULTS,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            suggestions=["Add filters to narrow the search"],
            context={"total": total, "limit": limit},
        )


class InternalSearchError(SearchError):
    """Unexpected fault in the search pipeline."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            kind=ErrorKind.INTERNAL_ERROR,
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.CRITICAL,
            context=context,
        )


class SourceError(SearchError):
    """A source adapter failed; always downgraded to an empty partial result."""

    def __init__(self, message: str, source: str, context: dict[str, Any] | None = None) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["source"] = source

        super().__init__(
            message,
            kind=ErrorKind.INTERNAL_ERROR,
            category=ErrorCategory.SOURCE,
            severity=ErrorSeverity.LOW,
            suggestions=["Check the backing data store"],
            context=merged_context,
        )
        self.source: str = source


class ConfigurationError(SearchError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            kind=ErrorKind.INTERNAL_ERROR,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Verify all required settings",
                "Use default configuration",
            ],
            context=context,
        )


_CATEGORY_BY_KIND: dict[ErrorKind, ErrorCategory] = {
    ErrorKind.INVALID_QUERY: ErrorCategory.VALIDATION,
    ErrorKind.ACCESS_DENIED: ErrorCategory.PERMISSION,
    ErrorKind.TIMEOUT: ErrorCategory.TIMEOUT,
    ErrorKind.TOO_MANY_RESULTS: ErrorCategory.VALIDATION,
    ErrorKind.INTERNAL_ERROR: ErrorCategory.UNKNOWN,
}


def error_for_kind(kind: ErrorKind, message: str) -> SearchError:
    """Build a SearchError for a caller-facing error kind."""
    return SearchError(message, kind=kind, category=_CATEGORY_BY_KIND[kind])


class ErrorCollector:
    """Collects errors during search operations. Safe to share between threads."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}
        self._lock = threading.Lock()

    def add_error(
        self,
        exception: Exception,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        source: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, SearchError):
            error_category = exception.category
            error_severity = exception.severity
            error_source = getattr(exception, "source", None) or source
            error_suggestions = exception.suggestions
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or self._classify_exception(exception)
            error_severity = severity or ErrorSeverity.MEDIUM
            error_source = source
            error_suggestions = []
            error_context = context or {}

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            source=error_source,
            exception_type=type(exception).__name__,
            traceback_str=traceback.format_exc() if sys.exc_info()[0] else None,
            context=error_context,
            suggestions=error_suggestions,
        )

        with self._lock:
            if len(self.errors) < self.max_errors:
                self.errors.append(error_info)
            self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def _classify_exception(self, exception: Exception) -> ErrorCategory:
        """Classify exception into error category."""
        if isinstance(exception, TimeoutError):
            return ErrorCategory.TIMEOUT
        if isinstance(exception, PermissionError):
            return ErrorCategory.PERMISSION
        if isinstance(exception, (ValueError, TypeError)):
            return ErrorCategory.VALIDATION
        return ErrorCategory.UNKNOWN

    def get_errors_by_category(self, category: ErrorCategory) -> list[ErrorInfo]:
        """Get all errors of a specific category."""
        with self._lock:
            return [error for error in self.errors if error.category == category]

    def get_errors_by_source(self, source: str) -> list[ErrorInfo]:
        """Get all errors raised by one source adapter."""
        with self._lock:
            return [error for error in self.errors if error.source == source]

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        with self._lock:
            return {
                "total_errors": len(self.errors),
                "by_category": {k.value: v for k, v in self.error_counts.items()},
                "by_source": _count_by_source(self.errors),
            }

    def clear(self) -> None:
        """Clear all collected errors."""
        with self._lock:
            self.errors.clear()
            self.error_counts.clear()


def _count_by_source(errors: list[ErrorInfo]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for error in errors:
        if error.source:
            counts[error.source] = counts.get(error.source, 0) + 1
    return counts


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    summary = error_collector.get_summary()
    if not summary["total_errors"]:
        return "No errors occurred during the search operation."

    report = ["Search Error Report", "=" * 50, ""]
    report.append(f"Total errors: {summary['total_errors']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")

    if summary["by_source"]:
        report.append("")
        report.append("Errors by source:")
        for source, count in summary["by_source"].items():
            report.append(f"  {source}: {count}")

    return "\n".join(report)
