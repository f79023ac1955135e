"""Report assembly: turns an analysis result into five titled report sections."""

from __future__ import annotations

from chartplan.analysis.analyzer import PatternAnalyzer
from chartplan.analysis.strategy import STRATEGY_DESCRIPTIONS, STRATEGY_STEPS, strategy_rationale
from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import (
    AnalysisMetrics,
    AnalysisResult,
    ArchitecturePattern,
    BestPractice,
    ChartStrategy,
    Severity,
)
from chartplan.models.report import (
    ActionItem,
    AlternativeStrategy,
    Report,
    ReportItem,
    ReportLevel,
    ReportSection,
)
from chartplan.observability.logging import get_logger

_logger = get_logger("report.recommender")

MAX_AFFECTED_RESOURCES = 5
MAX_ACTION_ITEMS = 10

# Most severe first; info findings are not listed.
_REPORTED_SEVERITIES = tuple(
    sorted((s for s in Severity if s.rank >= Severity.WARNING.rank), key=lambda s: s.rank, reverse=True)
)

# Keyword groups checked in order; the first match decides the effort.
_EFFORT_RULES = (
    (("generate", "helm"), "Low (automated)"),
    (("review", "check"), "Low"),
    (("configure", "add"), "Medium"),
    (("refactor", "redesign"), "High"),
)


class Recommender:
    """Runs the analyzer over a graph and renders the result as report sections."""

    def __init__(self, analyzer: PatternAnalyzer) -> None:
        self._analyzer = analyzer

    def generate_report(self, graph: ResourceGraph) -> Report:
        result = self._analyzer.analyze(graph)
        report = build_report(result)
        _logger.info("report_generated", sections=len(report.sections))
        return report


def build_report(result: AnalysisResult) -> Report:
    """Assemble the Overview, Architecture Patterns, Best Practices, Chart Strategy and Action Items sections."""
    return Report(
        analysis_result=result,
        sections=[
            _overview_section(result),
            _patterns_section(result),
            _best_practices_section(result),
            _strategy_section(result),
            _action_items_section(result),
        ],
    )


def complexity_level(score: int) -> tuple[str, ReportLevel]:
    if score < 30:
        return "Low", ReportLevel.SUCCESS
    if score < 60:
        return "Medium", ReportLevel.INFO
    return "High", ReportLevel.WARNING


def coupling_level(score: int) -> tuple[str, ReportLevel]:
    if score < 20:
        return "Low - well decoupled", ReportLevel.SUCCESS
    if score < 50:
        return "Medium", ReportLevel.INFO
    return "High - tightly coupled", ReportLevel.WARNING


def _overview_section(result: AnalysisResult) -> ReportSection:
    metrics = result.metrics
    complexity_label, complexity_report_level = complexity_level(metrics.complexity_score)
    coupling_label, coupling_report_level = coupling_level(metrics.coupling_score)
    items = [
        ReportItem("Total Services", f"{metrics.total_services} services detected"),
        ReportItem("Total Resources", f"{metrics.total_resources} Kubernetes resources"),
        ReportItem(
            "Complexity Score",
            f"{metrics.complexity_score}/100 ({complexity_label})",
            complexity_report_level,
        ),
        ReportItem(
            "Coupling Score",
            f"{metrics.coupling_score}/100 ({coupling_label})",
            coupling_report_level,
        ),
    ]
    if metrics.resources_by_kind:
        lines = ["Resource distribution:"]
        lines.extend(f"  • {kind}: {count}" for kind, count in sorted(metrics.resources_by_kind.items()))
        items.append(ReportItem("Resource Types", "\n".join(lines)))
    return ReportSection(
        title="Overview",
        description="High-level analysis of your Kubernetes resources",
        items=items,
    )


def explain_pattern(pattern: ArchitecturePattern, metrics: AnalysisMetrics) -> str:
    if pattern is ArchitecturePattern.MICROSERVICES:
        return (
            f"Your application follows a microservices architecture with {metrics.total_services} "
            "independent services. This suggests separate deployments and potentially a service mesh."
        )
    if pattern is ArchitecturePattern.MONOLITH:
        return (
            "Your application is a monolithic service. This is suitable for simpler applications "
            "or early-stage products."
        )
    if pattern is ArchitecturePattern.STATEFUL:
        return (
            f"Your application has {metrics.stateful_services} stateful services requiring persistent "
            "storage. Ensure proper backup and disaster recovery."
        )
    if pattern is ArchitecturePattern.STATELESS:
        return "Your application is stateless, which is ideal for horizontal scaling and rolling updates."
    if pattern is ArchitecturePattern.VENDOR_EXTENSION:
        return (
            f"Detected {metrics.vendor_resource_count} vendor-extension resources. These need dedicated "
            "handling for platform integration."
        )
    return "Custom architecture pattern detected."


def _patterns_section(result: AnalysisResult) -> ReportSection:
    items = [
        ReportItem(
            "Primary Pattern",
            f"{result.primary_pattern} (confidence: {result.confidence}%)",
            ReportLevel.SUCCESS,
        )
    ]
    if len(result.detected_patterns) > 1:
        secondary = [str(p) for p in result.detected_patterns if p != result.primary_pattern]
        items.append(ReportItem("Secondary Patterns", ", ".join(secondary)))
    items.append(ReportItem("What This Means", explain_pattern(result.primary_pattern, result.metrics)))
    return ReportSection(
        title="Architecture Patterns",
        description="Detected architectural patterns in your application",
        items=items,
    )


def _best_practices_section(result: AnalysisResult) -> ReportSection:
    by_severity: dict[Severity, list[BestPractice]] = {}
    for bp in result.best_practices:
        if not bp.compliant:
            by_severity.setdefault(bp.severity, []).append(bp)
    total = sum(len(v) for v in by_severity.values())

    items = []
    if total == 0:
        items.append(ReportItem("Status", "✓ All best practices checks passed!", ReportLevel.SUCCESS))
    else:
        lines = [f"Found {total} best practice violations:"]
        for severity in _REPORTED_SEVERITIES:
            count = len(by_severity.get(severity, []))
            if count:
                lines.append(f"  • {severity.capitalize()}: {count}")
        items.append(ReportItem("Summary", "\n".join(lines), ReportLevel.WARNING))

    for severity in _REPORTED_SEVERITIES:
        level = ReportLevel.ERROR if severity is Severity.CRITICAL else ReportLevel.WARNING
        for bp in by_severity.get(severity, []):
            items.append(ReportItem(f"[{severity.upper()}] {bp.title}", _practice_content(bp), level))

    return ReportSection(
        title="Best Practices",
        description="Kubernetes and Helm best practices compliance",
        items=items,
    )


def _practice_content(bp: BestPractice) -> str:
    lines = [bp.description, "", "Affected resources:"]
    for res in bp.affected_resources[:MAX_AFFECTED_RESOURCES]:
        lines.append(f"  • {res.kind}/{res.name}")
    if len(bp.affected_resources) > MAX_AFFECTED_RESOURCES:
        lines.append(f"  ... and {len(bp.affected_resources) - MAX_AFFECTED_RESOURCES} more")
    lines.extend(["", "Recommendations:"])
    lines.extend(f"  • {rec}" for rec in bp.recommendations)
    return "\n".join(lines).strip()


def alternative_strategies(result: AnalysisResult) -> list[AlternativeStrategy]:
    strategy = result.recommended_strategy
    metrics = result.metrics
    if strategy is ChartStrategy.UNIVERSAL and metrics.total_services > 3:
        return [AlternativeStrategy(ChartStrategy.UMBRELLA, "Better modularity for multiple services")]
    if strategy is ChartStrategy.SEPARATE:
        return [AlternativeStrategy(ChartStrategy.UMBRELLA, "Easier coordination while maintaining independence")]
    if strategy is ChartStrategy.UMBRELLA and metrics.coupling_score > 70:
        return [
            AlternativeStrategy(
                ChartStrategy.UNIVERSAL,
                "High coupling suggests unified deployment might be simpler",
            )
        ]
    return []


def _strategy_section(result: AnalysisResult) -> ReportSection:
    strategy = result.recommended_strategy
    items = [
        ReportItem(
            "Recommended Strategy",
            f"{strategy}\n\n{STRATEGY_DESCRIPTIONS[strategy]}",
            ReportLevel.SUCCESS,
        ),
        ReportItem("Rationale", strategy_rationale(strategy, result.primary_pattern, result.metrics)),
    ]
    steps = STRATEGY_STEPS.get(strategy, [])
    if steps:
        items.append(
            ReportItem("Implementation Steps", "\n".join(f"{i}. {step}" for i, step in enumerate(steps, 1)))
        )
    alternatives = alternative_strategies(result)
    if alternatives:
        lines = ["Alternative approaches to consider:"]
        lines.extend(f"  • {alt.strategy}: {alt.reason}" for alt in alternatives)
        items.append(ReportItem("Alternatives", "\n".join(lines)))
    return ReportSection(
        title="Chart Strategy",
        description="Recommended Helm chart organization",
        items=items,
    )


def estimate_effort(step: str) -> str:
    lowered = step.lower()
    for keywords, effort in _EFFORT_RULES:
        if any(k in lowered for k in keywords):
            return effort
    return "Medium"


def severity_to_priority(severity: Severity) -> int:
    if severity in (Severity.CRITICAL, Severity.ERROR):
        return 1
    if severity is Severity.WARNING:
        return 2
    return 3


def action_items(result: AnalysisResult) -> list[ActionItem]:
    """Recommendation steps plus auto-fixable violations, sorted by priority."""
    items = [
        ActionItem(
            priority=rec.priority,
            title=step,
            category=rec.title,
            impact=rec.impact,
            effort=estimate_effort(step),
        )
        for rec in result.recommendations
        for step in rec.implementation_steps
    ]
    items.extend(
        ActionItem(
            priority=severity_to_priority(bp.severity),
            title=f"Auto-fix: {bp.title}",
            category=bp.category,
            impact="Improved compliance",
            effort="Low (automatic)",
            auto_fixable=True,
        )
        for bp in result.best_practices
        if not bp.compliant and bp.auto_fixable
    )
    return sorted(items, key=lambda item: item.priority)


def _action_items_section(result: AnalysisResult) -> ReportSection:
    by_priority: dict[int, list[ActionItem]] = {}
    for item in action_items(result):
        by_priority.setdefault(item.priority, []).append(item)

    report_items = []
    for priority in (1, 2, 3):
        bucket = by_priority.get(priority, [])
        if not bucket:
            continue
        lines: list[str] = []
        for item in bucket[:MAX_ACTION_ITEMS]:
            marker = "⚡" if item.auto_fixable else "•"
            lines.append(f"{marker} {item.title}")
            lines.append(f"  Category: {item.category} | Effort: {item.effort}")
            if item.impact:
                lines.append(f"  Impact: {item.impact}")
            lines.append("")
        if len(bucket) > MAX_ACTION_ITEMS:
            lines.append(f"... and {len(bucket) - MAX_ACTION_ITEMS} more")
        level = ReportLevel.WARNING if priority == 1 else ReportLevel.INFO
        report_items.append(ReportItem(f"Priority {priority} Items", "\n".join(lines).strip(), level))

    if not report_items:
        report_items.append(ReportItem("Status", "No action items - you're all set!", ReportLevel.SUCCESS))

    return ReportSection(
        title="Action Items",
        description="Prioritized list of improvements (⚡ = auto-fixable)",
        items=report_items,
    )
