"""Data models for session memory."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from repoctx.analysis.models import Severity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Interaction(BaseModel):
    """One query/response turn reported back by the caller."""

    query: str
    response: str = ""
    context: Any = None
    files_modified: list[str] = Field(default_factory=list)


class ConversationEntry(BaseModel):
    query: str
    response: str
    timestamp: datetime = Field(default_factory=_utcnow)
    context: Any = None


class DecisionEntry(BaseModel):
    description: str
    decision: str
    timestamp: datetime = Field(default_factory=_utcnow)
    impact: Severity = Severity.LOW


class MemoryState(BaseModel):
    conversations: list[ConversationEntry] = Field(default_factory=list)
    decisions: list[DecisionEntry] = Field(default_factory=list)
    preferences: dict[str, bool] = Field(default_factory=dict)


class DynamicState(BaseModel):
    recent_files: list[str] = Field(default_factory=list)
    current_focus: str | None = None
