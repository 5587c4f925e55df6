"""Query intent classification.

Maps a free-text developer query to a structured intent using fixed,
ordered keyword rules. The first rule that matches decides the type and
the scope, so rule order is part of the behavior:

  type:   debugging > creation > refactoring > explanation > analysis > general
  scope:  project > function > file > local
  action: first of create, modify, delete, fix, add, remove, update

Keywords match as case-insensitive substrings ("show" contains "how",
"call" contains "all"), and targets are any `word.word` token, which also
picks up decimals. Both are accepted approximations.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field


class IntentType(str, Enum):
    DEBUGGING = "debugging"
    CREATION = "creation"
    REFACTORING = "refactoring"
    EXPLANATION = "explanation"
    ANALYSIS = "analysis"
    GENERAL = "general"


class IntentScope(str, Enum):
    PROJECT = "project"
    FUNCTION = "function"
    FILE = "file"
    LOCAL = "local"


class QueryIntent(BaseModel):
    type: IntentType = IntentType.GENERAL
    targets: list[str] = Field(default_factory=list)
    action: str | None = None
    scope: IntentScope = IntentScope.LOCAL


_TYPE_RULES: list[tuple[re.Pattern[str], IntentType]] = [
    (re.compile(r"fix|bug|error|issue", re.IGNORECASE), IntentType.DEBUGGING),
    (re.compile(r"create|add|implement|build", re.IGNORECASE), IntentType.CREATION),
    (re.compile(r"refactor|improve|optimize", re.IGNORECASE), IntentType.REFACTORING),
    (re.compile(r"explain|understand|what|how", re.IGNORECASE), IntentType.EXPLANATION),
    (re.compile(r"analyze|review|check", re.IGNORECASE), IntentType.ANALYSIS),
]

_SCOPE_RULES: list[tuple[re.Pattern[str], IntentScope]] = [
    (re.compile(r"whole|entire|all|project", re.IGNORECASE), IntentScope.PROJECT),
    (re.compile(r"function|method", re.IGNORECASE), IntentScope.FUNCTION),
    (re.compile(r"file|module", re.IGNORECASE), IntentScope.FILE),
]

ACTION_WORDS = ("create", "modify", "delete", "fix", "add", "remove", "update")

_TARGET_RE = re.compile(r"\w+\.\w+", re.ASCII)


class IntentClassifier:
    """Pure, stateless query classifier.

    Usage:
        intent = IntentClassifier().classify("fix the login bug in auth.js")
        # intent.type == IntentType.DEBUGGING, intent.targets == ["auth.js"]
    """

    def classify(self, query: str) -> QueryIntent:
        lowered = query.lower()
        return QueryIntent(
            type=_first_rule(query, _TYPE_RULES, IntentType.GENERAL),
            targets=_TARGET_RE.findall(query),
            action=next((a for a in ACTION_WORDS if a in lowered), None),
            scope=_first_rule(query, _SCOPE_RULES, IntentScope.LOCAL),
        )


def _first_rule(query, rules, default):
    for pattern, label in rules:
        if pattern.search(query):
            return label
    return default
