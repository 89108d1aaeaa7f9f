"""
Ranking and autocomplete for famsearch.

- scorer: relevance score and the document sort pipeline
- suggestions: merged history and name-prefix autocomplete
"""

from .scorer import ScoringWeights, rank_result, relevance_score, sort_documents
from .suggestions import SuggestionMerger

__all__ = [
    "ScoringWeights",
    "rank_result",
    "relevance_score",
    "sort_documents",
    "SuggestionMerger",
]
