"""Data models for assembled query contexts."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from repoctx.analysis.models import ArchitecturalPattern, CodeSmell, QualityMetrics, Route
from repoctx.graph.models import DependencyExcerpt
from repoctx.indexer.models import ClassRecord, FunctionRecord
from repoctx.memory.models import ConversationEntry, DecisionEntry
from repoctx.search.intent import QueryIntent


class TokenEstimator:
    """Estimate token counts: one token per 4 characters, rounded up."""

    CHARS_PER_TOKEN = 4

    @classmethod
    def estimate(cls, text: str) -> int:
        return math.ceil(len(text) / cls.CHARS_PER_TOKEN)

    @classmethod
    def estimate_model(cls, model: BaseModel) -> int:
        """Estimate for a model by its compact JSON serialization."""
        return cls.estimate(model.model_dump_json())


class ProjectSummary(BaseModel):
    name: str | None = None
    language: str | None = None
    framework: str | None = None
    description: str | None = None


class SelectedFile(BaseModel):
    path: str
    content: str
    relevance: int = 0
    summarized: bool = False


class StructureSummary(BaseModel):
    entry_points: list[str] = Field(default_factory=list)
    main_modules: list[str] = Field(default_factory=list)
    routes: list[Route] = Field(default_factory=list)
    total_files: int = 0


class HotSpot(BaseModel):
    location: str
    complexity: int


class RelevantAnalysis(BaseModel):
    quality: QualityMetrics | None = None
    code_smells: list[CodeSmell] | None = None
    patterns: list[ArchitecturalPattern] | None = None
    complexity: list[HotSpot] | None = None


class RelevantMemory(BaseModel):
    recent_conversations: list[ConversationEntry] = Field(default_factory=list)
    relevant_decisions: list[DecisionEntry] = Field(default_factory=list)
    similar_queries: list[str] = Field(default_factory=list)


class Selection(BaseModel):
    """What the content selector admitted, in admission order."""

    files: list[SelectedFile] = Field(default_factory=list)
    functions: list[FunctionRecord] = Field(default_factory=list)
    classes: list[ClassRecord] = Field(default_factory=list)
    tokens_used: int = 0
    token_budget: int = 0


# Bookkeeping fields that describe the payload but are not part of it
_BOOKKEEPING = {"token_budget", "estimated_tokens", "over_budget", "compression_steps"}


class Context(BaseModel):
    """The bounded payload handed to the prompt builder for one query."""

    query: str = ""
    project: ProjectSummary = Field(default_factory=ProjectSummary)
    intent: QueryIntent = Field(default_factory=QueryIntent)
    relevant_files: list[SelectedFile] = Field(default_factory=list)
    relevant_functions: list[FunctionRecord] = Field(default_factory=list)
    relevant_classes: list[ClassRecord] = Field(default_factory=list)
    dependencies: dict[str, DependencyExcerpt] = Field(default_factory=dict)
    patterns: list[ArchitecturalPattern] = Field(default_factory=list)
    structure: StructureSummary = Field(default_factory=StructureSummary)
    analysis: RelevantAnalysis | None = None
    memory: RelevantMemory | None = None

    token_budget: int = 0
    estimated_tokens: int = 0
    over_budget: bool = False
    compression_steps: list[str] = Field(default_factory=list)

    def payload_json(self) -> str:
        return self.model_dump_json(exclude=_BOOKKEEPING)

    def estimate_tokens(self) -> int:
        return TokenEstimator.estimate(self.payload_json())

    def render(self) -> str:
        """Render the context as prompt text."""
        sections: list[str] = []
        project = self.project

        sections.append(f"# Repository context for: {self.query}")
        sections.append(
            f"# Project: {project.name or 'unknown'} "
            f"(language: {project.language or 'unknown'}, "
            f"framework: {project.framework or 'none'})"
        )
        if project.description:
            sections.append(f"# {project.description}")
        sections.append(
            f"# Intent: {self.intent.type.value}, scope: {self.intent.scope.value}"
            + (f", action: {self.intent.action}" if self.intent.action else "")
        )
        sections.append("")

        if self.patterns:
            sections.append("## Architecture")
            for p in self.patterns:
                sections.append(f"- {p.type} (confidence {p.confidence:.2f})")
            sections.append("")

        if self.structure.entry_points or self.structure.routes:
            sections.append("## Structure")
            if self.structure.entry_points:
                sections.append(f"Entry points: {', '.join(self.structure.entry_points)}")
            for route in self.structure.routes:
                sections.append(f"- {route.method} {route.path}")
            sections.append("")

        for f in self.relevant_files:
            marker = " (summarized)" if f.summarized else ""
            sections.append(f"## {f.path}{marker}")
            dep = self.dependencies.get(f.path)
            if dep and dep.imports:
                sections.append(f"# imports: {', '.join(dep.imports)}")
            sections.append(f.content)
            sections.append("")

        if self.relevant_functions:
            sections.append("## Functions")
            for func in self.relevant_functions:
                sections.append(
                    f"### {func.path}:{func.name}({', '.join(func.params)}) "
                    f"complexity={func.complexity}"
                )
                if func.body:
                    sections.append(func.body)
            sections.append("")

        if self.relevant_classes:
            sections.append("## Classes")
            for cls in self.relevant_classes:
                base = f" extends {cls.extends}" if cls.extends else ""
                sections.append(f"### {cls.path}:{cls.name}{base}")
                sections.append(cls.summary or f"methods: {', '.join(cls.methods)}")
            sections.append("")

        if self.memory and self.memory.relevant_decisions:
            sections.append("## Earlier decisions")
            for d in self.memory.relevant_decisions:
                sections.append(f"- [{d.impact.value}] {d.description}")
            sections.append("")

        return "\n".join(sections)

    def summary(self) -> str:
        """Human-readable summary of what's in the context."""
        lines = [
            f"Context for: {self.query}",
            f"Intent: {self.intent.type.value} ({self.intent.scope.value})",
            f"Tokens: ~{self.estimated_tokens:,} / {self.token_budget:,}"
            + (" [over budget]" if self.over_budget else ""),
            f"Files: {len(self.relevant_files)}, functions: {len(self.relevant_functions)}, "
            f"classes: {len(self.relevant_classes)}",
        ]
        if self.compression_steps:
            lines.append(f"Compression: {', '.join(self.compression_steps)}")
        lines.append("")
        for f in self.relevant_files:
            flag = " (summarized)" if f.summarized else ""
            lines.append(f"  {f.path} relevance={f.relevance}{flag}")
        return "\n".join(lines)
