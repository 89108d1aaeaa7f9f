"""
Source adapter contract.

A source adapter answers one query for one record kind. Adapters are called
concurrently by the fan-out aggregator and must never raise: any fault inside
``_search`` is logged, recorded into the optional ErrorCollector and turned
into an empty SourceResult.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Generic, TypeVar

from ..core.types import EntityKind, FilterSet, SourceResult
from ..utils.error_handling import ErrorCollector, SourceError
from ..utils.logging_config import get_logger

T = TypeVar("T")


class SourceAdapter(ABC, Generic[T]):
    """Abstract base class for the per-kind search sources."""

    kind: EntityKind

    def __init__(self, error_collector: ErrorCollector | None = None) -> None:
        self.error_collector = error_collector
        self.logger = get_logger()

    def search(self, query: str, filters: FilterSet) -> SourceResult[T]:
        """Search for ``query`` (already normalized) narrowed by ``filters``."""
        start = time.perf_counter()
        try:
            items = tuple(self._search(query, filters))
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            self.logger.log_source_error(self.kind.value, str(e), query=query)
            if self.error_collector is not None:
                self.error_collector.add_error(
                    SourceError(str(e), source=self.kind.value, context={"query": query})
                )
            return SourceResult.empty(elapsed_ms)

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        return SourceResult(items=items, total_found=len(items), elapsed_ms=elapsed_ms)

    @abstractmethod
    def _search(self, query: str, filters: FilterSet) -> Iterable[T]:
        """Return the records matching ``query`` and ``filters``."""
        pass
