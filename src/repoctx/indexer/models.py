"""Data models for indexed repository content."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FunctionRecord(BaseModel):
    """A function found by one of the heuristic extraction passes.

    Arrow functions and bare method signatures carry no params or body;
    only classic declarations get a brace-scanned body.
    """

    name: str
    path: str
    params: list[str] = Field(default_factory=list)
    body: str = ""
    complexity: int = 1
    calls: list[str] = Field(default_factory=list)
    summarized: bool = False  # set by compression when the body is replaced

    @property
    def key(self) -> str:
        return f"{self.path}:{self.name}"


class ClassRecord(BaseModel):
    """A class declaration and what could be read out of its body."""

    name: str
    path: str
    methods: list[str] = Field(default_factory=list)
    properties: list[str] = Field(default_factory=list)
    extends: str | None = None
    body: str = ""
    summary: str | None = None  # set by compression once the body is dropped

    @property
    def key(self) -> str:
        return f"{self.path}:{self.name}"


class CommentRecord(BaseModel):
    """A TODO / FIXME / NOTE line comment or a JSDoc block."""

    type: str
    text: str
    line: int = 0


class TestRecord(BaseModel):
    """A test case declared with test(), it() or describe()."""

    name: str
    type: str = "unit"


class ContentIndex(BaseModel):
    """Everything the indexer knows about file contents."""

    files: dict[str, str] = Field(default_factory=dict)
    functions: dict[str, FunctionRecord] = Field(default_factory=dict)
    classes: dict[str, ClassRecord] = Field(default_factory=dict)
    comments: dict[str, list[CommentRecord]] = Field(default_factory=dict)
    tests: dict[str, list[TestRecord]] = Field(default_factory=dict)
