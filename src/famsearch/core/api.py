"""
Main API module for famsearch.

This module provides the FamilySearch class, the entry point calling code
uses to search the household records. It coordinates query validation, the
result cache, the concurrent fan-out to the four sources, ranking, and the
per-user history.

Classes:
    FamilySearch: Search engine owning the cache and the history

Key Features:
    - One query searched across documents, folders, categories and members
    - Per-source fault tolerance; a failing source yields an empty partial result
    - Bounded TTL cache keyed by normalized query and filters
    - Per-user history with de-duplication and cache-hit bookkeeping
    - Autocomplete from history and document/folder names
    - Errors returned as values; exceptions never escape a search call

Example:
    Basic search operation:
        >>> from famsearch import FamilySearch, StaticSessionProvider, UserIdentity
        >>> from famsearch.sources import load_sources
        >>>
        >>> sources = load_sources("records.json")
        >>> session = StaticSessionProvider(UserIdentity(7, "Alex"))
        >>> with FamilySearch.from_sources(session, sources) as engine:
        ...     outcome = engine.search("invoice")
        ...     if outcome.ok:
        ...         print(f"{outcome.result.total_results} results")

    Advanced search with criteria:
        >>> from famsearch.core.types import AdvancedSearchCriteria, SortBy
        >>> criteria = AdvancedSearchCriteria(document_types=["pdf"], sort_by=SortBy.DATE_DESC)
        >>> outcome = engine.advanced_search(criteria)
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from ..cache import ResultCache
from ..search.scorer import rank_result
from ..search.suggestions import SuggestionMerger
from ..sources.base import SourceAdapter
from ..utils.error_handling import (
    AccessDeniedError,
    ErrorCollector,
    ErrorKind,
    InternalSearchError,
    SearchError,
)
from ..utils.logging_config import SearchLogger, get_logger
from .config import SearchConfig
from .history import SearchHistory, build_statistics
from .managers.fan_out import FanOutAggregator
from .query import build_query
from .session import SessionProvider, UserIdentity
from .types import (
    WILDCARD,
    AdvancedSearchCriteria,
    AggregateResult,
    FilterSet,
    HistoryItem,
    SearchOptions,
    SearchOutcome,
    SearchPhase,
    SearchStatistics,
    Suggestion,
)


class FamilySearch:
    """
    Federated search engine over the household records.

    Cache and history are private to each instance and guarded by their own
    locks; nothing is shared between engines. Call ``close()`` (or use the
    engine as a context manager) to drop cached results and history.

    Attributes:
        cfg (SearchConfig): Engine configuration
        session (SessionProvider): Source of the current user
        cache (ResultCache): Result cache
        search_history (SearchHistory): Per-user search history
        aggregator (FanOutAggregator): Concurrent source dispatcher
        errors (ErrorCollector): Soft failures and aborted requests
        logger (SearchLogger): Logging interface
    """

    def __init__(
        self,
        session: SessionProvider,
        documents: Any,
        folders: Any,
        categories: Any,
        members: Any,
        config: SearchConfig | None = None,
        logger: SearchLogger | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the engine.

        Args:
            session: Identity provider consulted on every request
            documents: Document source
            folders: Folder source
            categories: Category source
            members: Member source
            config: Engine configuration. If None, uses default configuration.
            logger: Custom logger instance. If None, uses default logger.
            clock: Time source for cache expiry and history, injectable for tests

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.cfg = config or SearchConfig()
        self.cfg.validate()
        self.session = session
        self.logger = logger or get_logger()
        self.errors = ErrorCollector()

        for source in (documents, folders, categories, members):
            if isinstance(source, SourceAdapter) and source.error_collector is None:
                source.error_collector = self.errors

        self.cache = ResultCache(
            ttl=self.cfg.cache_ttl_seconds,
            max_entries=self.cfg.cache_max_entries,
            max_result_count=self.cfg.cache_max_result_count,
            clock=clock,
        )
        self.search_history = SearchHistory(
            max_per_user=self.cfg.history_max_per_user,
            dedup_seconds=self.cfg.history_dedup_seconds,
            clock=clock,
        )
        self.aggregator = FanOutAggregator(
            documents,
            folders,
            categories,
            members,
            timeout=self.cfg.search_timeout_seconds,
            error_collector=self.errors,
        )
        self.suggestions = SuggestionMerger(
            self.search_history,
            documents,
            folders,
            history_limit=self.cfg.history_suggestion_limit,
            min_prefix_length=self.cfg.min_query_length,
        )

    @classmethod
    def from_sources(
        cls, session: SessionProvider, sources: Any, **kwargs: Any
    ) -> FamilySearch:
        """Build an engine from a LoadedSources bundle."""
        return cls(
            session,
            sources.documents,
            sources.folders,
            sources.categories,
            sources.members,
            **kwargs,
        )

    def search(
        self,
        raw_query: str,
        filters: FilterSet | None = None,
        options: SearchOptions | None = None,
    ) -> SearchOutcome:
        """
        Search every source for ``raw_query``.

        Args:
            raw_query: Query text as typed
            filters: Constraints applied by each source
            options: Cache use, sort order and per-kind result cap

        Returns:
            SearchOutcome holding the AggregateResult or the error kind
        """
        return self._execute(raw_query, filters or FilterSet(), options or SearchOptions())

    def quick_search(self, raw_prefix: str, max_suggestions: int | None = None) -> list[Suggestion]:
        """Autocomplete suggestions for the current user. Never raises."""
        limit = self.cfg.default_max_suggestions if max_suggestions is None else max_suggestions
        try:
            user = self.session.current_user()
            if user is None:
                return []
            return self.suggestions.suggest(user.user_id, raw_prefix, limit)
        except Exception as e:
            self.logger.error(f"Quick search failed for '{raw_prefix}': {e}")
            self.errors.add_error(e, source="suggestions")
            return []

    def advanced_search(self, criteria: AdvancedSearchCriteria) -> SearchOutcome:
        """
        Search with multi-criteria input.

        The cache is bypassed. Criteria without text search every record.
        A missing user is reported before invalid text.
        """
        try:
            filters = criteria.to_filters()
        except Exception as e:
            self.errors.add_error(e, source="advanced_search")
            return SearchOutcome(
                error=ErrorKind.INTERNAL_ERROR,
                message=f"Invalid search criteria: {e}",
                phases=(SearchPhase.IDLE, SearchPhase.ABORTED),
            )

        self.logger.info(
            f"Advanced search: {criteria.summary()}", operation="advanced_search"
        )
        text = criteria.text_query
        raw_query = text if text and text.strip() else WILDCARD
        options = SearchOptions(use_cache=False, sort_by=criteria.sort_by)
        return self._execute(
            raw_query, filters, options, allow_wildcard=True, session_first=True
        )

    def history(self, user_id: int | None = None, limit: int = 20) -> list[HistoryItem]:
        """Most recent searches, most-recent-first; defaults to the current user."""
        if user_id is None:
            user = self.session.current_user()
            if user is None:
                return []
            user_id = user.user_id
        return self.search_history.get_history(user_id, limit)

    def clear_history(self, user_id: int | None = None) -> None:
        """Clear one user's history, or all history when no id is given."""
        self.search_history.clear(user_id)
        self.logger.info(
            "Search history cleared" + (f" for user {user_id}" if user_id is not None else ""),
            operation="clear_history",
        )

    def clear_cache(self) -> None:
        self.cache.clear()
        self.logger.info("Search cache cleared", operation="clear_cache")

    def statistics(self) -> SearchStatistics:
        return build_statistics(self.search_history, self.cache.size())

    def close(self) -> None:
        """Clear cache and history."""
        self.cache.clear()
        self.search_history.clear()
        self.logger.debug("Search engine closed")

    def __enter__(self) -> FamilySearch:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _execute(
        self,
        raw_query: str,
        filters: FilterSet,
        options: SearchOptions,
        allow_wildcard: bool = False,
        session_first: bool = False,
    ) -> SearchOutcome:
        """
        Run the search pipeline, recording every phase entered.

        With ``session_first`` a missing user is reported before the query
        text is validated.
        """
        phases: list[SearchPhase] = [SearchPhase.IDLE]

        def enter(phase: SearchPhase) -> None:
            phases.append(phase)
            self.logger.log_phase(phase.value, raw_query)

        try:
            enter(SearchPhase.VALIDATING)
            if session_first:
                user = self._require_user()
            query = build_query(
                raw_query,
                self.cfg.min_query_length,
                self.cfg.max_query_length,
                allow_wildcard=allow_wildcard,
            )
            if not session_first:
                user = self._require_user()

            self.logger.log_search_start(raw_query, user.user_id)

            if options.use_cache:
                enter(SearchPhase.CACHE_LOOKUP)
                cached = self.cache.get(query.normalized, filters)
                if cached is not None:
                    self.logger.log_cache_hit(query.normalized)
                    if cached.sort_by != options.sort_by:
                        cached = rank_result(cached, options.sort_by)
                    enter(SearchPhase.HISTORY_RECORDING)
                    self.search_history.record(user.user_id, raw_query, from_cache=True)
                    return self._finish(cached, options, phases, from_cache=True)

            enter(SearchPhase.AGGREGATING)
            aggregate = self.aggregator.aggregate(query, filters)

            enter(SearchPhase.RANKING)
            ranked = rank_result(aggregate, options.sort_by)

            if options.use_cache and ranked.total_results <= self.cfg.cache_max_result_count:
                enter(SearchPhase.CACHING)
                self.cache.put(query.normalized, filters, ranked)

            enter(SearchPhase.HISTORY_RECORDING)
            self.search_history.record(user.user_id, raw_query, from_cache=False)
            return self._finish(ranked, options, phases, from_cache=False)

        except SearchError as e:
            phases.append(SearchPhase.ABORTED)
            self.logger.warning(
                f"Search aborted ({e.kind.value}): {e.message}",
                operation="search_aborted",
                kind=e.kind.value,
                query=raw_query,
            )
            if e.kind != ErrorKind.INVALID_QUERY:
                self.errors.add_error(e)
            return SearchOutcome(error=e.kind, message=e.message, phases=tuple(phases))

        except Exception as e:
            phases.append(SearchPhase.ABORTED)
            self.logger.exception(f"Search failed for '{raw_query}': {e}")
            error = InternalSearchError(f"Search failed: {e}", context={"query": raw_query})
            self.errors.add_error(error)
            return SearchOutcome(
                error=error.kind, message=error.message, phases=tuple(phases)
            )

    def _require_user(self) -> UserIdentity:
        user = self.session.current_user()
        if user is None:
            raise AccessDeniedError()
        return user

    def _finish(
        self,
        result: AggregateResult,
        options: SearchOptions,
        phases: list[SearchPhase],
        from_cache: bool,
    ) -> SearchOutcome:
        phases.append(SearchPhase.DONE)
        self.logger.log_search_complete(
            result.normalized_query, result.total_results, result.duration_ms, from_cache=from_cache
        )
        return SearchOutcome(
            result=result.limited(options.max_results),
            phases=tuple(phases),
            from_cache=from_cache,
        )
