"""
Utility modules for famsearch.

- error_handling: error taxonomy, exceptions and the error collector
- logging_config: logger setup and structured logging helpers
- formatter: text, JSON and rich console rendering of search results
"""

from .error_handling import (
    AccessDeniedError,
    ConfigurationError,
    ErrorCollector,
    ErrorKind,
    InvalidQueryError,
    InternalSearchError,
    QueryProblem,
    SearchError,
    SearchTimeoutError,
    SourceError,
    TooManyResultsError,
)
from .logging_config import (
    LogFormat,
    LogLevel,
    SearchLogger,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)

__all__ = [
    "AccessDeniedError",
    "ConfigurationError",
    "ErrorCollector",
    "ErrorKind",
    "InvalidQueryError",
    "InternalSearchError",
    "QueryProblem",
    "SearchError",
    "SearchTimeoutError",
    "SourceError",
    "TooManyResultsError",
    "LogFormat",
    "LogLevel",
    "SearchLogger",
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
]
