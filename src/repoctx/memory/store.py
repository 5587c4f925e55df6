"""Session memory: conversation log, decision log, preferences, recent files."""

from __future__ import annotations

import threading

from repoctx.analysis.models import Severity
from repoctx.config import MemoryConfig
from repoctx.memory.models import (
    ConversationEntry,
    DecisionEntry,
    DynamicState,
    Interaction,
    MemoryState,
)

DECISION_KEYWORDS = ("architecture", "design", "pattern", "structure", "refactor", "migrate")


def is_architectural_decision(interaction: Interaction) -> bool:
    query = interaction.query.lower()
    response = interaction.response.lower()
    return any(kw in query or kw in response for kw in DECISION_KEYWORDS)


def assess_impact(interaction: Interaction) -> Severity:
    touched = len(interaction.files_modified)
    if touched > 5:
        return Severity.HIGH
    if touched > 2:
        return Severity.MEDIUM
    return Severity.LOW


def is_related(text1: str, text2: str) -> bool:
    """Two texts are related when they share more than two words longer than 3 chars."""
    words2 = set(text2.lower().split())
    common = [w for w in text1.lower().split() if w in words2 and len(w) > 3]
    return len(common) > 2


class MemoryStore:
    """Process-scoped history for one session.

    All mutation goes through a lock so concurrent queries cannot push the
    logs past their limits.
    """

    def __init__(
        self,
        config: MemoryConfig | None = None,
        state: MemoryState | None = None,
        dynamic: DynamicState | None = None,
    ) -> None:
        self.config = config or MemoryConfig()
        self.state = state or MemoryState()
        self.dynamic = dynamic or DynamicState()
        self._lock = threading.Lock()

    @property
    def recent_files(self) -> list[str]:
        return list(self.dynamic.recent_files)

    def update(self, interaction: Interaction) -> None:
        with self._lock:
            conversations = self.state.conversations
            conversations.append(ConversationEntry(
                query=interaction.query,
                response=interaction.response,
                context=interaction.context,
            ))
            if len(conversations) > self.config.max_conversations:
                del conversations[: len(conversations) - self.config.max_conversations]

            for path in interaction.files_modified:
                self._push_recent(path)

            if is_architectural_decision(interaction):
                self.state.decisions.append(DecisionEntry(
                    description=interaction.query,
                    decision=interaction.response,
                    impact=assess_impact(interaction),
                ))

            self._update_preferences(interaction)

    def add_recent_file(self, path: str) -> None:
        with self._lock:
            self._push_recent(path)

    def set_focus(self, focus: str | None) -> None:
        with self._lock:
            self.dynamic.current_focus = focus

    def _push_recent(self, path: str) -> None:
        recent = self.dynamic.recent_files
        if path in recent:
            recent.remove(path)
        recent.insert(0, path)
        del recent[self.config.max_recent_files:]

    def _update_preferences(self, interaction: Interaction) -> None:
        if "const" in interaction.response:
            self.state.preferences["prefer_const"] = True
        if "async/await" in interaction.response:
            self.state.preferences["prefer_async"] = True

    def relevant(self, query: str) -> dict:
        """Recent related conversations, related decisions and similar past queries."""
        with self._lock:
            conversations = list(self.state.conversations)
            decisions = list(self.state.decisions)

        recent = [c for c in conversations[-5:] if is_related(c.query, query)]
        related_decisions = [d for d in decisions if is_related(d.description, query)][:3]

        similar: list[str] = []
        for conv in reversed(conversations):
            if conv.query not in similar and is_related(conv.query, query):
                similar.append(conv.query)
            if len(similar) == 3:
                break

        return {
            "recent_conversations": recent,
            "relevant_decisions": related_decisions,
            "similar_queries": similar,
        }
