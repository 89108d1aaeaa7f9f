"""Tests for famsearch.core.config module."""

from __future__ import annotations

import pytest

from famsearch.core.config import SearchConfig
from famsearch.utils.error_handling import ConfigurationError


def test_defaults():
    cfg = SearchConfig()
    assert cfg.min_query_length == 2
    assert cfg.max_query_length == 200
    assert cfg.cache_ttl_seconds == 300
    assert cfg.cache_max_entries == 50
    assert cfg.cache_max_result_count == 100
    assert cfg.history_max_per_user == 20
    assert cfg.history_dedup_seconds == 300
    assert cfg.history_suggestion_limit == 3
    assert cfg.search_timeout_seconds == 30.0
    assert cfg.default_max_suggestions == 10
    cfg.validate()


@pytest.mark.parametrize(
    "field, value",
    [
        ("min_query_length", 0),
        ("max_query_length", 1),
        ("cache_ttl_seconds", 0),
        ("cache_max_entries", 0),
        ("cache_max_result_count", -1),
        ("history_max_per_user", 0),
        ("history_dedup_seconds", -1),
        ("search_timeout_seconds", 0),
        ("default_max_suggestions", -1),
    ],
)
def test_invalid_values_name_the_field(field, value):
    cfg = SearchConfig(**{field: value})
    with pytest.raises(ConfigurationError) as exc_info:
        cfg.validate()
    assert exc_info.value.context["field"] == field
