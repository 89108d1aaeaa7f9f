"""
Concurrent fan-out across the four search sources.

This module dispatches one query to the document, folder, category and member
sources at the same time and merges their partial results into one
AggregateResult once all four have answered.

Classes:
    FanOutAggregator: Runs the per-kind source calls on a shared thread pool

Key Features:
    - Every source call runs in its own task; a fault in one source becomes an
      empty partial result and never cancels the others
    - Every request gets its own worker pool, one worker per source, so
      concurrent requests never queue behind each other
    - One overall time budget per request, counted from dispatch; exceeding
      it fails the request with SearchTimeoutError and no partial result is
      returned. A source call still running is abandoned, not awaited
    - Timing metadata measured from dispatch to the last completion

Example:
    Aggregating over in-memory sources:
        >>> from famsearch.core.managers.fan_out import FanOutAggregator
        >>> from famsearch.core.query import build_query
        >>> from famsearch.core.types import FilterSet
        >>>
        >>> aggregator = FanOutAggregator(documents, folders, categories, members)
        >>> result = aggregator.aggregate(build_query("invoice"), FilterSet())
        >>> result.total_results
        6
"""

from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Any

from ...utils.error_handling import ErrorCollector, SearchTimeoutError, SourceError
from ...utils.logging_config import get_logger
from ..types import AggregateResult, EntityKind, FilterSet, Query, SourceResult


class FanOutAggregator:
    """Issues the four source calls concurrently and merges their results."""

    def __init__(
        self,
        documents: Any,
        folders: Any,
        categories: Any,
        members: Any,
        timeout: float = 30.0,
        error_collector: ErrorCollector | None = None,
    ) -> None:
        self.sources: dict[EntityKind, Any] = {
            EntityKind.DOCUMENTS: documents,
            EntityKind.FOLDERS: folders,
            EntityKind.CATEGORIES: categories,
            EntityKind.MEMBERS: members,
        }
        self.timeout = timeout
        self.error_collector = error_collector
        self.logger = get_logger()

    def aggregate(self, query: Query, filters: FilterSet) -> AggregateResult:
        """
        Run every source for ``query`` and merge the partial results.

        Args:
            query: Validated query; sources receive its normalized text
            filters: Constraints forwarded to every source

        Returns:
            AggregateResult whose total is the sum of the four partial counts

        Raises:
            SearchTimeoutError: If the sources did not all answer in time
        """
        executor = ThreadPoolExecutor(
            max_workers=len(self.sources), thread_name_prefix="famsearch"
        )
        start = time.perf_counter()
        try:
            futures: dict[EntityKind, Future[SourceResult[Any]]] = {
                kind: executor.submit(self._run_source, kind, source, query.normalized, filters)
                for kind, source in self.sources.items()
            }
            _, pending = wait(futures.values(), timeout=self.timeout)
        finally:
            # a call still running cannot be interrupted; it is abandoned
            executor.shutdown(wait=False, cancel_futures=True)

        if pending:
            raise SearchTimeoutError(
                self.timeout,
                context={
                    "query": query.normalized,
                    "pending": [k.value for k, f in futures.items() if f in pending],
                },
            )

        duration_ms = (time.perf_counter() - start) * 1000.0
        partials = {kind: future.result() for kind, future in futures.items()}

        return AggregateResult(
            query=query.raw,
            normalized_query=query.normalized,
            documents=list(partials[EntityKind.DOCUMENTS].items),
            folders=list(partials[EntityKind.FOLDERS].items),
            categories=list(partials[EntityKind.CATEGORIES].items),
            members=list(partials[EntityKind.MEMBERS].items),
            total_results=sum(p.total_found for p in partials.values()),
            search_time=datetime.now(),
            duration_ms=duration_ms,
            filters=filters,
        )

    def _run_source(
        self, kind: EntityKind, source: Any, query: str, filters: FilterSet
    ) -> SourceResult[Any]:
        """Call one source; any fault it lets through becomes an empty result."""
        start = time.perf_counter()
        try:
            result = source.search(query, filters)
            if not isinstance(result, SourceResult):
                raise TypeError(f"expected SourceResult, got {type(result).__name__}")
            return result
        except Exception as e:
            self.logger.log_source_error(kind.value, str(e), query=query)
            if self.error_collector is not None:
                self.error_collector.add_error(
                    SourceError(str(e), source=kind.value, context={"query": query})
                )
            return SourceResult.empty((time.perf_counter() - start) * 1000.0)
