"""Relevance scoring of files, functions and classes for a query.

Every indexed file is scored; there is no shortcut that looks at only the
first few. Function and class scores start from their owning file's score.

File score =
    100   if the path is one of the intent's literal targets
  + 2 x   case-insensitive occurrences of each query word longer than 3 chars
  + 20    debugging intent and "test" in the path
  + 15    creation intent and "template" in the path
  + 10    dependency-graph complexity above 10
  + 3 x   number of dependents
  + 25    path is in the recent-files list

Function / class score = file score + 50 if its lower-cased name is a query word.
"""

from __future__ import annotations

from repoctx.graph.builder import DependencyGraph
from repoctx.indexer.models import ContentIndex
from repoctx.search.intent import IntentType, QueryIntent

TARGET_BONUS = 100
WORD_OCCURRENCE_WEIGHT = 2
MIN_WORD_LENGTH = 4
DEBUG_TEST_BONUS = 20
CREATION_TEMPLATE_BONUS = 15
COMPLEXITY_THRESHOLD = 10
COMPLEXITY_BONUS = 10
DEPENDENT_WEIGHT = 3
RECENT_FILE_BONUS = 25
NAME_MENTION_BONUS = 50

FUNCTION_PREFIX = "function:"
CLASS_PREFIX = "class:"


def query_words(query: str) -> list[str]:
    return query.lower().split()


class RelevanceScorer:
    """Scores indexed content against a query and its intent.

    Returns one ordered dict: file paths first (index order), then
    `function:<path>:<name>` keys, then `class:<path>:<name>` keys. Scores
    are non-negative ints and depend only on the inputs.
    """

    def __init__(
        self,
        index: ContentIndex,
        graph: DependencyGraph,
        recent_files: list[str] | None = None,
    ) -> None:
        self.index = index
        self.graph = graph
        self.recent_files = set(recent_files or [])

    def score(self, query: str, intent: QueryIntent) -> dict[str, int]:
        words = query_words(query)
        word_set = set(words)
        scores: dict[str, int] = {}

        for path, content in self.index.files.items():
            scores[path] = self.score_file(path, content, words, intent)

        for key, func in self.index.functions.items():
            score = scores.get(func.path, 0)
            if func.name.lower() in word_set:
                score += NAME_MENTION_BONUS
            scores[f"{FUNCTION_PREFIX}{key}"] = score

        for key, cls in self.index.classes.items():
            score = scores.get(cls.path, 0)
            if cls.name.lower() in word_set:
                score += NAME_MENTION_BONUS
            scores[f"{CLASS_PREFIX}{key}"] = score

        return scores

    def score_file(
        self, path: str, content: str, words: list[str], intent: QueryIntent
    ) -> int:
        score = 0

        if path in intent.targets:
            score += TARGET_BONUS

        content_lower = content.lower()
        for word in words:
            if len(word) >= MIN_WORD_LENGTH:
                score += content_lower.count(word) * WORD_OCCURRENCE_WEIGHT

        if intent.type == IntentType.DEBUGGING and "test" in path:
            score += DEBUG_TEST_BONUS
        if intent.type == IntentType.CREATION and "template" in path:
            score += CREATION_TEMPLATE_BONUS

        if self.graph.complexity_of(path) > COMPLEXITY_THRESHOLD:
            score += COMPLEXITY_BONUS
        score += len(self.graph.dependents_of(path)) * DEPENDENT_WEIGHT

        if path in self.recent_files:
            score += RECENT_FILE_BONUS

        return score
