"""
Configuration module for famsearch.

This module defines the SearchConfig class which holds every tunable constant
of the engine: query length bounds, result cache sizing, history retention,
the fan-out time budget and the autocomplete limit.

Classes:
    SearchConfig: Main configuration class with all engine parameters

Example:
    Basic configuration:
        >>> from famsearch.core.config import SearchConfig
        >>>
        >>> config = SearchConfig(cache_ttl_seconds=60, search_timeout_seconds=5.0)
        >>> config.validate()
"""

from __future__ import annotations

from dataclasses import dataclass

from ..utils.error_handling import ConfigurationError


@dataclass(slots=True)
class SearchConfig:
    # Query validation
    min_query_length: int = 2
    max_query_length: int = 200

    # Result cache
    cache_ttl_seconds: float = 300.0
    cache_max_entries: int = 50
    # results with a larger total are never cached
    cache_max_result_count: int = 100

    # History
    history_max_per_user: int = 20
    history_dedup_seconds: float = 300.0
    history_suggestion_limit: int = 3

    # Fan-out
    search_timeout_seconds: float = 30.0

    # Autocomplete
    default_max_suggestions: int = 10

    def validate(self) -> None:
        """Validate configuration and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if self.min_query_length < 1:
            raise ConfigurationError(
                "Minimum query length must be positive",
                context={"field": "min_query_length", "value": self.min_query_length},
            )

        if self.max_query_length < self.min_query_length:
            raise ConfigurationError(
                "Maximum query length must not be below the minimum",
                context={"field": "max_query_length", "value": self.max_query_length},
            )

        if self.cache_ttl_seconds <= 0:
            raise ConfigurationError(
                "Cache TTL must be positive",
                context={"field": "cache_ttl_seconds", "value": self.cache_ttl_seconds},
            )

        if self.cache_max_entries < 1:
            raise ConfigurationError(
                "Cache must hold at least one entry",
                context={"field": "cache_max_entries", "value": self.cache_max_entries},
            )

        if self.cache_max_result_count < 0:
            raise ConfigurationError(
                "Cacheable result count must be non-negative",
                context={"field": "cache_max_result_count", "value": self.cache_max_result_count},
            )

        if self.history_max_per_user < 1:
            raise ConfigurationError(
                "History must keep at least one entry per user",
                context={"field": "history_max_per_user", "value": self.history_max_per_user},
            )

        if self.history_dedup_seconds < 0:
            raise ConfigurationError(
                "History de-duplication window must be non-negative",
                context={"field": "history_dedup_seconds", "value": self.history_dedup_seconds},
            )

        if self.search_timeout_seconds <= 0:
            raise ConfigurationError(
                "Search timeout must be positive",
                context={"field": "search_timeout_seconds", "value": self.search_timeout_seconds},
            )

        if self.default_max_suggestions < 0:
            raise ConfigurationError(
                "Suggestion limit must be non-negative",
                context={"field": "default_max_suggestions", "value": self.default_max_suggestions},
            )
