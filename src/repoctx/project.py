"""The ProjectContext aggregate: everything known about one analyzed repository."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from repoctx.analysis.models import (
    ArchitecturalPattern,
    CodeSmell,
    ProjectMetadata,
    ProjectStructure,
    QualityMetrics,
    SecurityFinding,
)
from repoctx.graph.builder import DependencyGraph
from repoctx.indexer.models import ContentIndex
from repoctx.memory.models import DynamicState, MemoryState


class AnalysisState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    patterns: list[ArchitecturalPattern] = Field(default_factory=list)
    dependencies: DependencyGraph = Field(default_factory=DependencyGraph)
    quality: QualityMetrics = Field(default_factory=QualityMetrics)
    smells: list[CodeSmell] = Field(default_factory=list)
    security: list[SecurityFinding] = Field(default_factory=list)


class ProjectContext(BaseModel):
    """Aggregate root for one repository.

    An analysis run builds a complete new instance and the engine swaps it
    in; a live instance is never patched section by section. `memory` and
    `dynamic` are shared with the session's MemoryStore so that history
    survives re-analysis.
    """

    metadata: ProjectMetadata = Field(default_factory=ProjectMetadata)
    structure: ProjectStructure = Field(default_factory=ProjectStructure)
    analysis: AnalysisState = Field(default_factory=AnalysisState)
    content: ContentIndex = Field(default_factory=ContentIndex)
    memory: MemoryState = Field(default_factory=MemoryState)
    dynamic: DynamicState = Field(default_factory=DynamicState)
