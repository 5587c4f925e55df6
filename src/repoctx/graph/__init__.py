"""File-level dependency graph built from import/require/export statements."""

from repoctx.graph.builder import DependencyGraph, DependencyGraphBuilder, extract_dependencies
from repoctx.graph.models import DependencyExcerpt, DependencyNode

__all__ = [
    "DependencyExcerpt",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "DependencyNode",
    "extract_dependencies",
]
