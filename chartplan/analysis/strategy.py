"""Primary pattern selection, chart strategy, confidence and recommendations."""

from __future__ import annotations

from collections.abc import Mapping

from chartplan.models.analysis import (
    AnalysisMetrics,
    AnalysisResult,
    ArchitecturePattern,
    ChartStrategy,
    Recommendation,
)

STRATEGY_DESCRIPTIONS: dict[ChartStrategy, str] = {
    ChartStrategy.UNIVERSAL: "Single chart containing all services with centralized values.yaml",
    ChartStrategy.SEPARATE: "Separate independent charts for each service",
    ChartStrategy.LIBRARY: "Shared library chart with thin service-specific wrappers",
    ChartStrategy.UMBRELLA: "Umbrella chart managing multiple subchart dependencies",
    ChartStrategy.HYBRID: "Combination of universal and separate charts based on service characteristics",
}

STRATEGY_STEPS: dict[ChartStrategy, list[str]] = {
    ChartStrategy.UNIVERSAL: [
        "Generate a single chart in universal mode",
        "Organize services in values.yaml under the 'services' key",
        "Use service.enabled flags for optional components",
    ],
    ChartStrategy.SEPARATE: [
        "Generate one chart per service in separate mode",
        "Define clear service boundaries and APIs",
        "Manage inter-service dependencies explicitly",
    ],
    ChartStrategy.UMBRELLA: [
        "Create an umbrella chart with dependencies in Chart.yaml",
        "Generate subcharts for each service",
        "Coordinate versions and configuration through the parent chart",
    ],
    ChartStrategy.LIBRARY: [
        "Create a library chart with shared templates",
        "Generate thin wrapper charts for each service",
        "Import the library chart as a dependency",
    ],
}

_MICROSERVICES_SEPARATE_MIN = 5
_UMBRELLA_COUPLING_MAX = 20
_UMBRELLA_COMPLEXITY_MIN = 70
_COMPLEXITY_RECOMMENDATION_MIN = 60


def determine_primary_pattern(counts: Mapping[ArchitecturePattern, int], metrics: AnalysisMetrics) -> ArchitecturePattern:
    """Pick the most frequently detected pattern, or fall back to the metrics.

    *counts* must iterate in first-detected order; ties go to the pattern
    detected first.
    """
    best: ArchitecturePattern | None = None
    best_count = 0
    for pattern, count in counts.items():
        if count > best_count:
            best, best_count = pattern, count
    if best is not None:
        return best

    if metrics.vendor_resource_count > 0:
        return ArchitecturePattern.VENDOR_EXTENSION
    if metrics.total_services > 3 and metrics.coupling_score < 30:
        return ArchitecturePattern.MICROSERVICES
    if metrics.total_services <= 2 or metrics.coupling_score > 70:
        return ArchitecturePattern.MONOLITH
    if metrics.stateful_services > 0:
        return ArchitecturePattern.STATEFUL
    return ArchitecturePattern.STATELESS


def recommend_strategy(pattern: ArchitecturePattern, metrics: AnalysisMetrics) -> ChartStrategy:
    """Map the primary pattern and metrics to a chart strategy; the first matching rule wins."""
    services = metrics.total_services
    if pattern is ArchitecturePattern.VENDOR_EXTENSION:
        return ChartStrategy.HYBRID if services > 1 else ChartStrategy.UNIVERSAL
    if pattern is ArchitecturePattern.MICROSERVICES:
        if services > _MICROSERVICES_SEPARATE_MIN:
            return ChartStrategy.SEPARATE
        if services > 2 and metrics.coupling_score < _UMBRELLA_COUPLING_MAX:
            return ChartStrategy.UMBRELLA
    if pattern is ArchitecturePattern.MONOLITH or services <= 2:
        return ChartStrategy.UNIVERSAL
    if pattern is ArchitecturePattern.OPERATOR:
        return ChartStrategy.LIBRARY
    if metrics.complexity_score > _UMBRELLA_COMPLEXITY_MIN:
        return ChartStrategy.UMBRELLA
    return ChartStrategy.UNIVERSAL


def calculate_confidence(result: AnalysisResult) -> int:
    """Confidence in the recommendation, 0-100."""
    confidence = 50
    if result.metrics.total_resources > 20:
        confidence += 20
    elif result.metrics.total_resources > 10:
        confidence += 10

    if len(result.detected_patterns) > 3:
        confidence -= 15
    elif len(result.detected_patterns) == 1:
        confidence += 15

    if (
        result.primary_pattern is ArchitecturePattern.VENDOR_EXTENSION
        and result.metrics.vendor_resource_count > 0
    ):
        confidence += 15
    return max(0, min(confidence, 100))


def strategy_rationale(strategy: ChartStrategy, pattern: ArchitecturePattern, metrics: AnalysisMetrics) -> str:
    if strategy is ChartStrategy.UNIVERSAL:
        return (
            f"With {metrics.total_services} services and {pattern} pattern, "
            "a unified chart simplifies management while maintaining flexibility"
        )
    if strategy is ChartStrategy.SEPARATE:
        return (
            f"With {metrics.total_services} loosely-coupled services (coupling: {metrics.coupling_score}%), "
            "separate charts enable independent lifecycles"
        )
    if strategy is ChartStrategy.UMBRELLA:
        return (
            f"With {metrics.total_services} services and moderate coupling ({metrics.coupling_score}%), "
            "umbrella chart balances independence and coordination"
        )
    if strategy is ChartStrategy.LIBRARY:
        return "Operator pattern benefits from shared templates with service-specific customization"
    return "Mixed vendor-extension and application resources benefit from a hybrid approach"


def generate_recommendations(result: AnalysisResult) -> list[Recommendation]:
    """Build the prioritised recommendation list for a scored result."""
    strategy = result.recommended_strategy
    recommendations = [
        Recommendation(
            priority=1,
            title="Recommended Chart Strategy",
            description=STRATEGY_DESCRIPTIONS[strategy],
            rationale=strategy_rationale(strategy, result.primary_pattern, result.metrics),
            impact="Chart organization suited to maintenance and deployment needs",
            implementation_steps=list(STRATEGY_STEPS.get(strategy, [])),
        )
    ]

    violations = result.violation_count
    if violations > 0:
        recommendations.append(
            Recommendation(
                priority=2,
                title="Address Best Practice Violations",
                description=f"Found {violations} best practice violations that should be addressed",
                rationale="Following Kubernetes and Helm best practices improves security and reliability",
                impact="Fewer operational issues and a better security posture",
                implementation_steps=[
                    "Review the best practices section for specific violations",
                    "Prioritize critical and error severity items",
                    "Apply auto-fixable improvements where available",
                ],
            )
        )

    complexity = result.metrics.complexity_score
    if complexity > _COMPLEXITY_RECOMMENDATION_MIN:
        recommendations.append(
            Recommendation(
                priority=3,
                title="Consider Complexity Reduction",
                description=f"Complexity score is {complexity}/100, consider modularization",
                rationale="High complexity increases maintenance burden and deployment risk",
                impact="Easier troubleshooting and faster deployments",
                implementation_steps=[
                    "Break down large services into smaller components",
                    "Use subcharts for independent modules",
                    "Consider the umbrella chart pattern for coordination",
                ],
            )
        )
    return sorted(recommendations, key=lambda r: r.priority)
