"""
Query normalization and validation.

Normalization trims the text, lower-cases it and collapses every run of
whitespace to a single space. Validation runs on the normalized text, so two
queries differing only by case or spacing are validated (and cached) alike.
"""

from __future__ import annotations

import regex

from ..utils.error_handling import InvalidQueryError, QueryProblem
from .types import WILDCARD, Query

_WHITESPACE = regex.compile(r"\s+")


def _lower(ch: str) -> str:
    # some characters lower-case to more than one code point (U+0130)
    lowered = ch.lower()
    return lowered if len(lowered) == 1 else ch


def normalize(raw: str) -> str:
    """Trim, lower-case and collapse whitespace runs to single spaces."""
    collapsed = _WHITESPACE.sub(" ", raw.strip())
    return "".join(_lower(ch) for ch in collapsed)


def validate(raw: str, min_length: int = 2, max_length: int = 200) -> QueryProblem | None:
    """Return the reason ``raw`` is not a valid query, or ``None``."""
    text = normalize(raw)
    if not text:
        return QueryProblem.EMPTY_QUERY
    if len(text) < min_length:
        return QueryProblem.TOO_SHORT
    if len(text) > max_length:
        return QueryProblem.TOO_LONG
    return None


_MESSAGES = {
    QueryProblem.EMPTY_QUERY: "Query is empty",
    QueryProblem.TOO_SHORT: "Query must be at least {min} characters",
    QueryProblem.TOO_LONG: "Query must be at most {max} characters",
}


def build_query(
    raw: str,
    min_length: int = 2,
    max_length: int = 200,
    allow_wildcard: bool = False,
) -> Query:
    """
    Validate ``raw`` and return it as a Query.

    Args:
        raw: Query text as typed
        min_length: Minimum normalized length
        max_length: Maximum normalized length
        allow_wildcard: Accept ``*`` regardless of the length bounds

    Raises:
        InvalidQueryError: If the text fails validation
    """
    query = Query(raw=raw, normalized=normalize(raw))
    if allow_wildcard and query.is_wildcard:
        return query

    problem = validate(raw, min_length, max_length)
    if problem is not None:
        raise InvalidQueryError(
            _MESSAGES[problem].format(min=min_length, max=max_length),
            reason=problem,
            context={"query": raw, "length": len(query.normalized)},
        )
    return query
