"""Project health report: strengths, weaknesses, opportunities, risks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repoctx.analysis.models import HealthItem, HealthReport, Recommendation, Severity

if TYPE_CHECKING:
    from repoctx.project import ProjectContext

BASE_SCORE = 50
_WEAKNESS_PENALTY = {Severity.HIGH: 15, Severity.MEDIUM: 10, Severity.LOW: 5}
_RISK_PENALTY = {Severity.HIGH: 20, Severity.MEDIUM: 10}
_PRIORITY_ORDER = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


def find_outdated_dependencies(dependencies: list[str]) -> list[str]:
    """Name-based guess at dependencies that are past their prime."""
    return [
        dep for dep in dependencies
        if "jquery" in dep or ("angular" in dep and "@angular" not in dep)
    ]


def calculate_health_score(report: HealthReport) -> int:
    score = BASE_SCORE + len(report.strengths) * 10
    for weakness in report.weaknesses:
        score -= _WEAKNESS_PENALTY.get(weakness.impact, 0)
    for risk in report.risks:
        score -= _RISK_PENALTY.get(risk.severity, 0)
    return max(0, min(100, score))


def generate_recommendations(report: HealthReport) -> list[Recommendation]:
    """High-severity risks, then high-impact weaknesses, then up to 3 opportunities."""
    recommendations: list[Recommendation] = []

    for risk in report.risks:
        if risk.severity == Severity.HIGH:
            recommendations.append(Recommendation(
                priority=Severity.HIGH,
                area=risk.area,
                action=risk.mitigation or "",
                impact="Reduces critical risk",
                effort=Severity.MEDIUM,
            ))

    for weakness in report.weaknesses:
        if weakness.impact == Severity.HIGH:
            recommendations.append(Recommendation(
                priority=Severity.MEDIUM,
                area=weakness.area,
                action=weakness.suggestion or "",
                impact="Improves code quality",
                effort=Severity.MEDIUM,
            ))

    for opportunity in report.opportunities[:3]:
        recommendations.append(Recommendation(
            priority=Severity.LOW,
            area=opportunity.area,
            action=opportunity.description,
            impact="Enhances capabilities",
            effort=Severity.HIGH,
        ))

    return sorted(recommendations, key=lambda r: _PRIORITY_ORDER[r.priority])


def analyze_health(project: ProjectContext) -> HealthReport:
    report = HealthReport()
    quality = project.analysis.quality

    if any(p.confidence > 0.8 for p in project.analysis.patterns):
        report.strengths.append(HealthItem(
            area="Architecture",
            description="Clear architectural patterns detected",
            impact=Severity.HIGH,
        ))
    if quality.coverage > 70:
        report.strengths.append(HealthItem(
            area="Testing",
            description=f"Good test coverage ({quality.coverage:.1f}%)",
            impact=Severity.HIGH,
        ))
    if project.metadata.dependencies:
        report.strengths.append(HealthItem(
            area="Dependencies",
            description="Using modern libraries and frameworks",
            impact=Severity.MEDIUM,
        ))

    if quality.avg_complexity > 10:
        report.weaknesses.append(HealthItem(
            area="Complexity",
            description=f"High average complexity ({quality.avg_complexity:.1f})",
            impact=Severity.HIGH,
            suggestion="Consider breaking down complex functions",
        ))
    if len(quality.code_smells) > 10:
        report.weaknesses.append(HealthItem(
            area="Code Quality",
            description=f"{len(quality.code_smells)} code smells detected",
            impact=Severity.MEDIUM,
            suggestion="Refactor problematic areas",
        ))
    if len(project.content.comments) < 5:
        report.weaknesses.append(HealthItem(
            area="Documentation",
            description="Limited code documentation",
            impact=Severity.LOW,
            suggestion="Add JSDoc comments to main functions",
        ))

    if not project.metadata.framework:
        report.opportunities.append(HealthItem(
            area="Framework",
            description="Could benefit from a modern framework",
            potential=Severity.HIGH,
        ))
    if quality.coverage < 50:
        report.opportunities.append(HealthItem(
            area="Testing",
            description="Increase test coverage for better reliability",
            potential=Severity.HIGH,
        ))

    outdated = find_outdated_dependencies(project.metadata.dependencies)
    if outdated:
        report.risks.append(HealthItem(
            area="Dependencies",
            description=f"{len(outdated)} potentially outdated dependencies",
            severity=Severity.MEDIUM,
            mitigation="Update dependencies regularly",
        ))
    if project.analysis.security:
        report.risks.append(HealthItem(
            area="Security",
            description=f"{len(project.analysis.security)} potential security issues",
            severity=Severity.HIGH,
            mitigation="Review and fix security vulnerabilities",
        ))

    report.score = calculate_health_score(report)
    report.recommendations = generate_recommendations(report)
    return report
