"""Session memory for conversations, decisions and recently touched files."""

from repoctx.memory.models import (
    ConversationEntry,
    DecisionEntry,
    DynamicState,
    Interaction,
    MemoryState,
)
from repoctx.memory.store import MemoryStore

__all__ = [
    "ConversationEntry",
    "DecisionEntry",
    "DynamicState",
    "Interaction",
    "MemoryState",
    "MemoryStore",
]
