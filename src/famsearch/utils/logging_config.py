"""
Logging for famsearch.

Every component logs through one process-wide :class:`SearchLogger`. Keyword
arguments given to its methods travel as ``extra`` fields on the record, so a
search can be followed across the pipeline by its ``operation`` and ``query``
fields. Four output formats are offered: simple and detailed plain text, one
JSON object per line, and ``key=value`` structured lines.

Example:
    >>> from famsearch.utils.logging_config import LogFormat, LogLevel, configure_logging
    >>> logger = configure_logging(level=LogLevel.DEBUG, format_type=LogFormat.JSON)
    >>> logger.log_cache_hit("invoice")
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from enum import Enum
from pathlib import Path
from typing import Any

import orjson


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        return logging.getLevelName(self.value)


class LogFormat(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"
    STRUCTURED = "structured"


# attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_PATTERNS = {
    LogFormat.SIMPLE: "%(levelname)s: %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
}


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields attached to ``record`` through ``extra``."""
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_FIELDS}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, extra fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": record.created,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(extra_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return orjson.dumps(entry, default=str).decode()


class StructuredFormatter(logging.Formatter):
    """``<time> [LEVEL] logger: message | key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"{self.formatTime(record, self.datefmt)} [{record.levelname}] "
            f"{record.name}: {record.getMessage()}"
        )
        fields = extra_fields(record)
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _formatter(format_type: LogFormat) -> logging.Formatter:
    if format_type == LogFormat.JSON:
        return JsonFormatter()
    if format_type == LogFormat.STRUCTURED:
        return StructuredFormatter()
    return logging.Formatter(_PATTERNS[format_type])


class SearchLogger:
    """
    Wrapper around a stdlib logger with famsearch's handlers attached.

    Console output goes to stderr so it never mixes with CLI results on
    stdout. File output rotates at ``max_file_size`` bytes.
    """

    def __init__(
        self,
        name: str = "famsearch",
        level: LogLevel = LogLevel.INFO,
        format_type: LogFormat = LogFormat.SIMPLE,
        log_file: Path | None = None,
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_console: bool = True,
        enable_file: bool = False,
    ):
        self.name = name
        self.level = level
        self.format_type = format_type
        self.log_file = log_file
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.enable_console = enable_console
        self.enable_file = enable_file

        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.numeric)
        self.logger.handlers.clear()

        if enable_console:
            self._attach(logging.StreamHandler(sys.stderr))
        if enable_file and log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._attach(
                logging.handlers.RotatingFileHandler(
                    log_file,
                    maxBytes=max_file_size,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
            )

    def _attach(self, handler: logging.Handler) -> None:
        handler.setLevel(self.level.numeric)
        handler.setFormatter(_formatter(self.format_type))
        self.logger.addHandler(handler)

    def debug(self, message: str, **fields: Any) -> None:
        self.logger.debug(message, extra=fields)

    def info(self, message: str, **fields: Any) -> None:
        self.logger.info(message, extra=fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.logger.warning(message, extra=fields)

    def error(self, message: str, **fields: Any) -> None:
        self.logger.error(message, extra=fields)

    def exception(self, message: str, **fields: Any) -> None:
        """Log at ERROR with the active exception's traceback."""
        self.logger.exception(message, extra=fields)

    # search pipeline events

    def log_search_start(self, query: str, user_id: int, **fields: Any) -> None:
        self.info(
            f"Starting search for '{query}' (user {user_id})",
            operation="search_start",
            query=query,
            user_id=user_id,
            **fields,
        )

    def log_search_complete(
        self, query: str, results_count: int, elapsed_ms: float, **fields: Any
    ) -> None:
        self.info(
            f"Search completed: query='{query}', results={results_count}, time={elapsed_ms:.2f}ms",
            operation="search_complete",
            query=query,
            results_count=results_count,
            elapsed_ms=elapsed_ms,
            **fields,
        )

    def log_cache_hit(self, query: str, **fields: Any) -> None:
        self.debug(f"Cache hit for '{query}'", operation="cache_hit", query=query, **fields)

    def log_source_error(self, source: str, error: str, **fields: Any) -> None:
        """A source fault that was downgraded to an empty result."""
        self.warning(
            f"Source error: {source} - {error}",
            operation="source_error",
            source=source,
            error=error,
            **fields,
        )

    def log_phase(self, phase: str, query: str, **fields: Any) -> None:
        self.debug(f"{phase}: '{query}'", operation="phase", phase=phase, query=query, **fields)


_global_logger: SearchLogger | None = None


def get_logger() -> SearchLogger:
    """Process-wide logger, created with defaults on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SearchLogger()
    return _global_logger


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    format_type: LogFormat = LogFormat.SIMPLE,
    log_file: Path | None = None,
    enable_console: bool = True,
    enable_file: bool = False,
    **kwargs: Any,
) -> SearchLogger:
    """Replace the process-wide logger and return it."""
    global _global_logger
    _global_logger = SearchLogger(
        level=level,
        format_type=format_type,
        log_file=log_file,
        enable_console=enable_console,
        enable_file=enable_file,
        **kwargs,
    )
    return _global_logger


def disable_logging() -> None:
    get_logger().logger.setLevel(logging.CRITICAL + 1)


def enable_debug_logging() -> None:
    search_logger = get_logger()
    search_logger.level = LogLevel.DEBUG
    for target in (search_logger.logger, *search_logger.logger.handlers):
        target.setLevel(logging.DEBUG)
