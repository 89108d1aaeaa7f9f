"""
Autocomplete suggestions.

Suggestions merge the user's own past queries with name-prefix matches from
the document and folder sources. History matches always score 1.0; source
matches carry the score assigned by the source.
"""

from __future__ import annotations

from typing import Any

from ..core.history import SearchHistory
from ..core.query import normalize
from ..core.types import Suggestion, SuggestionType
from ..utils.logging_config import get_logger

HISTORY_SCORE = 1.0


class SuggestionMerger:
    """Builds ranked, capped suggestion lists for a typed prefix."""

    def __init__(
        self,
        history: SearchHistory,
        documents: Any,
        folders: Any,
        history_limit: int = 3,
        min_prefix_length: int = 2,
    ) -> None:
        self.history = history
        self.name_sources = [documents, folders]
        self.history_limit = history_limit
        self.min_prefix_length = min_prefix_length
        self.logger = get_logger()

    def suggest(self, user_id: int | None, prefix: str, max_suggestions: int) -> list[Suggestion]:
        """
        Suggestions for ``prefix``, best first.

        Gathers up to ``history_limit`` history matches and up to half of
        ``max_suggestions`` name matches from each name source, then sorts
        by descending score (stable) and truncates to ``max_suggestions``.
        Returns an empty list for short prefixes or an anonymous user.
        """
        text = normalize(prefix)
        if user_id is None or len(text) < self.min_prefix_length or max_suggestions <= 0:
            return []

        suggestions = [
            Suggestion(query, SuggestionType.HISTORY, HISTORY_SCORE)
            for query in self.history.matching(user_id, text, self.history_limit)
        ]

        per_source = max_suggestions // 2
        for source in self.name_sources:
            suggestions.extend(self._from_source(source, text, per_source))

        suggestions.sort(key=lambda s: s.score, reverse=True)
        return suggestions[:max_suggestions]

    def _from_source(self, source: Any, text: str, limit: int) -> list[Suggestion]:
        suggest = getattr(source, "suggest", None)
        if suggest is None or limit <= 0:
            return []
        try:
            return list(suggest(text, limit))[:limit]
        except Exception as e:
            name = getattr(getattr(source, "kind", None), "value", type(source).__name__)
            self.logger.log_source_error(name, str(e), context="suggest")
            return []
