"""Data models for the file dependency graph."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DependencyNode(BaseModel):
    """Import/export facts for one script file."""

    imports: list[str] = Field(default_factory=list)  # raw import targets
    exports: list[str] = Field(default_factory=list)
    dependents: list[str] = Field(default_factory=list)
    complexity: int = 1


class DependencyExcerpt(BaseModel):
    """The slice of a DependencyNode that goes into an assembled context."""

    imports: list[str] = Field(default_factory=list)
    exports: list[str] = Field(default_factory=list)
    complexity: int = 1
