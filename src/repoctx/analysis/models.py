"""Data models for project-level analysis results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severity / impact / potential levels shared by analysis findings."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProjectMetadata(BaseModel):
    """What the manifest and file listing say about the project."""

    name: str | None = None
    language: str | None = None
    framework: str | None = None
    dependencies: list[str] = Field(default_factory=list)
    version: str | None = None
    description: str | None = None


class ModuleInfo(BaseModel):
    path: str
    type: str = "module"
    dependencies: list[str] = Field(default_factory=list)


class Route(BaseModel):
    method: str
    path: str
    file: str = ""


class ConfigFile(BaseModel):
    path: str
    type: str = "config"


class ProjectStructure(BaseModel):
    """Path-heuristic view of how the repository is organised."""

    tree: list[str] = Field(default_factory=list)
    modules: dict[str, ModuleInfo] = Field(default_factory=dict)
    entry_points: list[str] = Field(default_factory=list)
    routes: list[Route] = Field(default_factory=list)
    configs: dict[str, ConfigFile] = Field(default_factory=dict)


class ArchitecturalPattern(BaseModel):
    type: str
    confidence: float
    evidence: list[str] = Field(default_factory=list)


class CodeSmell(BaseModel):
    type: str
    location: str
    severity: Severity
    complexity: int | None = None


class SecurityFinding(BaseModel):
    type: str
    path: str
    line: int
    severity: Severity


class QualityMetrics(BaseModel):
    total_files: int = 0
    total_functions: int = 0
    total_classes: int = 0
    avg_complexity: float = 0.0
    code_smells: list[CodeSmell] = Field(default_factory=list)
    coverage: float = 0.0  # test files per function, as a percentage


class HealthItem(BaseModel):
    """One strength, weakness, opportunity or risk."""

    area: str
    description: str
    impact: Severity | None = None
    suggestion: str | None = None
    potential: Severity | None = None
    severity: Severity | None = None
    mitigation: str | None = None


class Recommendation(BaseModel):
    priority: Severity
    area: str
    action: str
    impact: str
    effort: Severity


class HealthReport(BaseModel):
    strengths: list[HealthItem] = Field(default_factory=list)
    weaknesses: list[HealthItem] = Field(default_factory=list)
    opportunities: list[HealthItem] = Field(default_factory=list)
    risks: list[HealthItem] = Field(default_factory=list)
    score: int = 0
    recommendations: list[Recommendation] = Field(default_factory=list)
