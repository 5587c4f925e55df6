"""Architectural pattern detection from structure and metadata."""

from __future__ import annotations

from repoctx.analysis.models import ArchitecturalPattern, ProjectMetadata, ProjectStructure

_MVC_NAMES = {"controller", "model", "view"}
_MVC_TYPES = {"controller", "model"}


def detect_patterns(
    structure: ProjectStructure, metadata: ProjectMetadata
) -> list[ArchitecturalPattern]:
    patterns: list[ArchitecturalPattern] = []

    if any(
        name in _MVC_NAMES or module.type in _MVC_TYPES
        for name, module in structure.modules.items()
    ):
        patterns.append(ArchitecturalPattern(
            type="MVC",
            confidence=0.8,
            evidence=["Folders structure suggests MVC pattern"],
        ))

    services = [m for m in structure.modules.values() if m.type == "service"]
    if len(services) > 3:
        patterns.append(ArchitecturalPattern(
            type="Microservices",
            confidence=0.7,
            evidence=["Multiple service modules detected"],
        ))

    if metadata.framework in ("React", "Vue"):
        patterns.append(ArchitecturalPattern(
            type="Component-Based",
            confidence=0.9,
            evidence=[f"{metadata.framework} framework"],
        ))

    if any(route.method in ("GET", "POST") for route in structure.routes):
        patterns.append(ArchitecturalPattern(
            type="RESTful API",
            confidence=0.85,
            evidence=["HTTP methods in routes"],
        ))

    return patterns
