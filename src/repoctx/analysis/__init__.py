"""Project, structure, pattern, quality and health analysis."""

from repoctx.analysis.patterns import detect_patterns
from repoctx.analysis.project import ProjectAnalyzer
from repoctx.analysis.quality import calculate_quality, scan_security
from repoctx.analysis.structure import StructureAnalyzer

__all__ = [
    "ProjectAnalyzer",
    "StructureAnalyzer",
    "calculate_quality",
    "detect_patterns",
    "scan_security",
]
