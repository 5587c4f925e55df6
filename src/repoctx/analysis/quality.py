"""Quality metrics, code smells and a light security scan."""

from __future__ import annotations

import re

from repoctx.analysis.models import CodeSmell, QualityMetrics, SecurityFinding, Severity
from repoctx.graph.builder import DependencyGraph, is_script
from repoctx.indexer.models import ContentIndex

LONG_FUNCTION_CHARS = 500
HIGH_COMPLEXITY = 10

_SECURITY_RULES: list[tuple[str, re.Pattern[str], Severity]] = [
    ("Use of eval", re.compile(r"\beval\s*\("), Severity.HIGH),
    ("Dynamic Function constructor", re.compile(r"\bnew\s+Function\s*\("), Severity.HIGH),
    ("Unsafe innerHTML assignment", re.compile(r"\.innerHTML\s*=(?!=)"), Severity.MEDIUM),
    ("document.write", re.compile(r"\bdocument\.write\s*\("), Severity.MEDIUM),
    (
        "Hardcoded credential",
        re.compile(
            r"\b(?:password|passwd|secret|api_?key|token)\s*[:=]\s*['\"][^'\"]{4,}['\"]",
            re.IGNORECASE,
        ),
        Severity.HIGH,
    ),
]


def calculate_quality(index: ContentIndex, graph: DependencyGraph) -> QualityMetrics:
    metrics = QualityMetrics(
        total_files=len(index.files),
        total_functions=len(index.functions),
        total_classes=len(index.classes),
    )

    complexities = [f.complexity for f in index.functions.values()]
    if complexities:
        metrics.avg_complexity = sum(complexities) / len(complexities)

    for key, func in index.functions.items():
        if func.body and len(func.body) > LONG_FUNCTION_CHARS:
            metrics.code_smells.append(CodeSmell(
                type="Long Function", location=key, severity=Severity.MEDIUM
            ))
        if func.complexity > HIGH_COMPLEXITY:
            metrics.code_smells.append(CodeSmell(
                type="High Complexity",
                location=key,
                severity=Severity.HIGH,
                complexity=func.complexity,
            ))

    for group in graph.circular_groups():
        metrics.code_smells.append(CodeSmell(
            type="Circular Dependency",
            location=" -> ".join(group),
            severity=Severity.MEDIUM,
        ))

    if index.functions:
        metrics.coverage = len(index.tests) / len(index.functions) * 100

    return metrics


def scan_security(files: dict[str, str]) -> list[SecurityFinding]:
    """Line-level pattern scan of script files for risky constructs."""
    findings: list[SecurityFinding] = []
    for path, content in files.items():
        if not is_script(path):
            continue
        for lineno, line in enumerate(content.splitlines(), start=1):
            for kind, pattern, severity in _SECURITY_RULES:
                if pattern.search(line):
                    findings.append(SecurityFinding(
                        type=kind, path=path, line=lineno, severity=severity
                    ))
    return findings
