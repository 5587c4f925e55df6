"""Heuristic content indexing for JavaScript/TypeScript repositories."""

from repoctx.indexer.core import ContentIndexer
from repoctx.indexer.extract import calculate_complexity, extract_block
from repoctx.indexer.models import (
    ClassRecord,
    CommentRecord,
    ContentIndex,
    FunctionRecord,
    TestRecord,
)

__all__ = [
    "ClassRecord",
    "CommentRecord",
    "ContentIndex",
    "ContentIndexer",
    "FunctionRecord",
    "TestRecord",
    "calculate_complexity",
    "extract_block",
]
