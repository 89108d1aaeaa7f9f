"""
Cache key construction.

A key joins the normalized query text with a digest of the FilterSet. Values
are put in canonical form before serializing (aware dates in UTC, integral
numbers as ints), so FilterSets that compare equal always produce the same
key.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Any

import orjson

from ..core.types import FilterSet


def _canonical(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(timezone.utc)
        return value.isoformat()
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return int(value) if float(value).is_integer() else float(value)
    if isinstance(value, tuple):
        return [_canonical(v) for v in value]
    return value


def filters_digest(filters: FilterSet) -> str:
    """Stable SHA-1 digest of a FilterSet."""
    fields = {
        "document_types": filters.document_types,
        "category_ids": filters.category_ids,
        "member_ids": filters.member_ids,
        "min_size": filters.min_size,
        "max_size": filters.max_size,
        "date_from": filters.date_from,
        "date_to": filters.date_to,
        "include_archived": filters.include_archived,
    }
    payload = orjson.dumps(
        {name: _canonical(value) for name, value in fields.items()},
        option=orjson.OPT_SORT_KEYS,
    )
    return hashlib.sha1(payload).hexdigest()


def cache_key(normalized_query: str, filters: FilterSet) -> str:
    return f"{normalized_query}|{filters_digest(filters)}"
