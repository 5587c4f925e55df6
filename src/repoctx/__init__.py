"""repoctx - budgeted, relevance-ranked repository context for LLM prompts."""

__version__ = "0.1.0"
