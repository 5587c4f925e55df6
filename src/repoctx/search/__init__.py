"""Query intent classification and relevance scoring."""

from repoctx.search.intent import IntentClassifier, IntentScope, IntentType, QueryIntent
from repoctx.search.relevance import RelevanceScorer

__all__ = [
    "IntentClassifier",
    "IntentScope",
    "IntentType",
    "QueryIntent",
    "RelevanceScorer",
]
