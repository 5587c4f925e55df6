"""Tests for the session memory store."""

from __future__ import annotations

import threading

import pytest
from pydantic import ValidationError

from repoctx.analysis.models import Severity
from repoctx.config import MemoryConfig
from repoctx.memory.models import Interaction
from repoctx.memory.store import (
    MemoryStore,
    assess_impact,
    is_architectural_decision,
    is_related,
)


class TestRecentFiles:
    def test_push_moves_to_front(self):
        store = MemoryStore()
        for path in ("a.js", "b.js", "c.js"):
            store.add_recent_file(path)
        store.add_recent_file("a.js")
        assert store.recent_files == ["a.js", "c.js", "b.js"]

    def test_capped_at_twenty(self):
        store = MemoryStore()
        for i in range(30):
            store.add_recent_file(f"f{i}.js")
        assert len(store.recent_files) == 20
        assert store.recent_files[0] == "f29.js"
        assert "f9.js" not in store.recent_files

    def test_repush_keeps_size(self):
        store = MemoryStore()
        for i in range(20):
            store.add_recent_file(f"f{i}.js")
        before = set(store.recent_files)
        store.add_recent_file("f5.js")
        assert set(store.recent_files) == before
        assert store.recent_files[0] == "f5.js"

    def test_update_pushes_modified_files(self):
        store = MemoryStore()
        store.update(Interaction(query="q", response="r", files_modified=["a.js", "b.js"]))
        assert store.recent_files == ["b.js", "a.js"]

    def test_smallest_limit_keeps_latest(self):
        store = MemoryStore(MemoryConfig(max_recent_files=1))
        store.add_recent_file("a.js")
        store.add_recent_file("b.js")
        assert store.recent_files == ["b.js"]

    def test_non_positive_limit_rejected(self):
        with pytest.raises(ValidationError):
            MemoryConfig(max_recent_files=-1)


class TestConversationLog:
    def test_trimmed_to_limit(self):
        store = MemoryStore()
        for i in range(130):
            store.update(Interaction(query=f"question {i}", response="ok"))
        conversations = store.state.conversations
        assert len(conversations) == 100
        assert conversations[0].query == "question 30"
        assert conversations[-1].query == "question 129"

    def test_configurable_limit(self):
        store = MemoryStore(MemoryConfig(max_conversations=3))
        for i in range(5):
            store.update(Interaction(query=f"q{i}"))
        assert [c.query for c in store.state.conversations] == ["q2", "q3", "q4"]

    def test_concurrent_updates_respect_limit(self):
        store = MemoryStore(MemoryConfig(max_conversations=50, max_recent_files=5))

        def worker(n: int):
            for i in range(40):
                store.update(Interaction(query=f"w{n}-{i}", files_modified=[f"{n}-{i}.js"]))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.state.conversations) == 50
        assert len(store.recent_files) == 5


class TestDecisions:
    def test_keyword_detection(self):
        assert is_architectural_decision(Interaction(query="should we migrate to ESM?"))
        assert is_architectural_decision(
            Interaction(query="q", response="Use the repository pattern")
        )
        assert not is_architectural_decision(Interaction(query="fix typo", response="done"))

    def test_impact(self):
        assert assess_impact(Interaction(query="q", files_modified=["a"] * 6)) == Severity.HIGH
        assert assess_impact(Interaction(query="q", files_modified=["a"] * 3)) == Severity.MEDIUM
        assert assess_impact(Interaction(query="q", files_modified=["a"] * 2)) == Severity.LOW

    def test_decision_logged(self):
        store = MemoryStore()
        store.update(Interaction(
            query="refactor the payment module",
            response="split it into services",
            files_modified=["a.js", "b.js", "c.js"],
        ))
        store.update(Interaction(query="fix typo", response="done"))

        assert len(store.state.decisions) == 1
        decision = store.state.decisions[0]
        assert decision.description == "refactor the payment module"
        assert decision.decision == "split it into services"
        assert decision.impact == Severity.MEDIUM

    def test_preferences(self):
        store = MemoryStore()
        store.update(Interaction(query="q", response="use const and async/await here"))
        assert store.state.preferences == {"prefer_const": True, "prefer_async": True}


class TestRelevantMemory:
    def test_is_related(self):
        assert is_related(
            "how does the login session token work",
            "refresh the login session token",
        )
        # Only two shared long words
        assert not is_related("login session", "login session")
        # Short words never count
        assert not is_related("a b c the and for", "a b c the and for")

    def test_relevant(self):
        store = MemoryStore()
        store.update(Interaction(query="design the login session token flow", response="ok"))
        store.update(Interaction(query="unrelated question about styling", response="ok"))
        store.update(Interaction(query="design the login session token flow", response="ok"))

        memory = store.relevant("rework login session token handling")
        assert len(memory["recent_conversations"]) == 2
        assert [d.description for d in memory["relevant_decisions"]] == [
            "design the login session token flow",
            "design the login session token flow",
        ]
        assert memory["similar_queries"] == ["design the login session token flow"]

    def test_recent_conversations_only_last_five(self):
        store = MemoryStore()
        store.update(Interaction(query="login session token expiry"))
        for i in range(5):
            store.update(Interaction(query=f"other thing {i}"))
        memory = store.relevant("login session token expiry")
        assert memory["recent_conversations"] == []
        assert memory["similar_queries"] == ["login session token expiry"]

    def test_focus(self):
        store = MemoryStore()
        store.set_focus("checkout")
        assert store.dynamic.current_focus == "checkout"
