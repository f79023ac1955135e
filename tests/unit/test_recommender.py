"""Tests for report assembly."""

from __future__ import annotations

from chartplan.analysis.analyzer import PatternAnalyzer
from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import (
    AnalysisMetrics,
    AnalysisResult,
    ArchitecturePattern,
    BestPractice,
    ChartStrategy,
    Recommendation,
    Severity,
)
from chartplan.models.report import Report, ReportLevel, ReportSection
from chartplan.models.resources import ResourceKey
from chartplan.report.recommender import (
    Recommender,
    action_items,
    alternative_strategies,
    build_report,
    complexity_level,
    coupling_level,
    estimate_effort,
    severity_to_priority,
)

# ---------------------------------------------------------------------------
# Helper factories
# ---------------------------------------------------------------------------


def _make_key(name: str) -> ResourceKey:
    return ResourceKey(group="apps", version="v1", kind="Deployment", namespace="default", name=name)


def _make_practice(
    severity: Severity = Severity.WARNING,
    compliant: bool = False,
    auto_fixable: bool = False,
    affected: int = 1,
    title: str = "Something Wrong",
) -> BestPractice:
    return BestPractice(
        id="BP-T",
        title=title,
        description="Description",
        category="Testing",
        severity=severity,
        compliant=compliant,
        recommendations=["Fix it"],
        affected_resources=[_make_key(f"app-{i}") for i in range(affected)],
        auto_fixable=auto_fixable,
    )


def _make_result(**kwargs) -> AnalysisResult:  # type: ignore[no-untyped-def]
    kwargs.setdefault("metrics", AnalysisMetrics(total_services=1, total_resources=2))
    return AnalysisResult(**kwargs)


def _section(report: Report, title: str) -> ReportSection:
    return next(s for s in report.sections if s.title == title)


def _item_titles(section: ReportSection) -> list[str]:
    return [item.title for item in section.items]


# =====================================================================
# Sections
# =====================================================================


class TestBuildReport:
    def test_section_order(self) -> None:
        report = build_report(_make_result())
        assert [s.title for s in report.sections] == [
            "Overview",
            "Architecture Patterns",
            "Best Practices",
            "Chart Strategy",
            "Action Items",
        ]

    def test_overview_resource_types_sorted(self) -> None:
        metrics = AnalysisMetrics(total_resources=3, resources_by_kind={"Service": 1, "Deployment": 2})
        overview = _section(build_report(_make_result(metrics=metrics)), "Overview")
        types = overview.items[-1]
        assert types.title == "Resource Types"
        assert types.content == "Resource distribution:\n  • Deployment: 2\n  • Service: 1"

    def test_overview_omits_resource_types_when_empty(self) -> None:
        overview = _section(build_report(_make_result(metrics=AnalysisMetrics())), "Overview")
        assert "Resource Types" not in _item_titles(overview)

    def test_secondary_patterns(self) -> None:
        result = _make_result(
            detected_patterns=[ArchitecturePattern.MICROSERVICES, ArchitecturePattern.STATELESS],
            primary_pattern=ArchitecturePattern.MICROSERVICES,
            confidence=65,
        )
        patterns = _section(build_report(result), "Architecture Patterns")
        assert patterns.items[0].content == "microservices (confidence: 65%)"
        assert patterns.items[1].content == "stateless"

    def test_best_practices_all_passed(self) -> None:
        result = _make_result(best_practices=[_make_practice(Severity.INFO, compliant=True)])
        section = _section(build_report(result), "Best Practices")
        assert _item_titles(section) == ["Status"]
        assert section.items[0].level is ReportLevel.SUCCESS

    def test_best_practices_grouped_by_severity(self) -> None:
        result = _make_result(
            best_practices=[
                _make_practice(Severity.WARNING, title="Warn"),
                _make_practice(Severity.CRITICAL, title="Crit"),
                _make_practice(Severity.ERROR, title="Err"),
            ]
        )
        section = _section(build_report(result), "Best Practices")
        assert _item_titles(section) == ["Summary", "[CRITICAL] Crit", "[ERROR] Err", "[WARNING] Warn"]
        assert section.items[0].content.splitlines() == [
            "Found 3 best practice violations:",
            "  • Critical: 1",
            "  • Error: 1",
            "  • Warning: 1",
        ]
        assert section.items[1].level is ReportLevel.ERROR
        assert section.items[2].level is ReportLevel.WARNING

    def test_info_findings_counted_but_not_listed(self) -> None:
        result = _make_result(
            best_practices=[
                _make_practice(Severity.INFO, title="Note"),
                _make_practice(Severity.WARNING, title="Warn"),
            ]
        )
        section = _section(build_report(result), "Best Practices")
        assert _item_titles(section) == ["Summary", "[WARNING] Warn"]
        assert section.items[0].content.splitlines() == ["Found 2 best practice violations:", "  • Warning: 1"]

    def test_severity_rank_orders_sections(self) -> None:
        ranked = sorted(Severity, key=lambda s: s.rank, reverse=True)
        assert ranked == [Severity.CRITICAL, Severity.ERROR, Severity.WARNING, Severity.INFO]

    def test_affected_resources_truncated(self) -> None:
        result = _make_result(best_practices=[_make_practice(affected=8)])
        content = _section(build_report(result), "Best Practices").items[1].content
        assert "  • Deployment/app-4" in content
        assert "app-5" not in content
        assert "  ... and 3 more" in content

    def test_strategy_section(self) -> None:
        result = _make_result(recommended_strategy=ChartStrategy.SEPARATE)
        section = _section(build_report(result), "Chart Strategy")
        assert _item_titles(section) == ["Recommended Strategy", "Rationale", "Implementation Steps", "Alternatives"]
        assert section.items[2].content.startswith("1. Generate one chart per service in separate mode")
        assert "umbrella: Easier coordination" in section.items[3].content

    def test_no_action_items(self) -> None:
        section = _section(build_report(_make_result()), "Action Items")
        assert _item_titles(section) == ["Status"]
        assert section.items[0].content == "No action items - you're all set!"


# =====================================================================
# Action items
# =====================================================================


class TestActionItems:
    def test_steps_and_auto_fixes(self) -> None:
        result = _make_result(
            recommendations=[
                Recommendation(priority=2, title="Fix", description="", impact="Better", implementation_steps=["Review"]),
            ],
            best_practices=[
                _make_practice(Severity.ERROR, auto_fixable=True, title="Root"),
                _make_practice(Severity.WARNING, auto_fixable=True, compliant=True),
            ],
        )
        items = action_items(result)
        assert [(i.priority, i.title) for i in items] == [(1, "Auto-fix: Root"), (2, "Review")]
        assert items[0].effort == "Low (automatic)"
        assert items[0].auto_fixable is True

    def test_bucket_truncated(self) -> None:
        steps = [f"Step {i}" for i in range(12)]
        result = _make_result(
            recommendations=[Recommendation(priority=1, title="Big", description="", implementation_steps=steps)]
        )
        section = _section(build_report(result), "Action Items")
        assert _item_titles(section) == ["Priority 1 Items"]
        assert section.items[0].level is ReportLevel.WARNING
        assert section.items[0].content.endswith("... and 2 more")
        assert "Step 10" not in section.items[0].content

    def test_auto_fix_marker(self) -> None:
        result = _make_result(best_practices=[_make_practice(Severity.WARNING, auto_fixable=True, title="RO")])
        section = _section(build_report(result), "Action Items")
        assert section.items[0].title == "Priority 2 Items"
        assert section.items[0].content.startswith("⚡ Auto-fix: RO")


# =====================================================================
# Helpers
# =====================================================================


class TestLevels:
    def test_complexity_level(self) -> None:
        assert complexity_level(29) == ("Low", ReportLevel.SUCCESS)
        assert complexity_level(30) == ("Medium", ReportLevel.INFO)
        assert complexity_level(60) == ("High", ReportLevel.WARNING)

    def test_coupling_level(self) -> None:
        assert coupling_level(19)[1] is ReportLevel.SUCCESS
        assert coupling_level(20) == ("Medium", ReportLevel.INFO)
        assert coupling_level(50) == ("High - tightly coupled", ReportLevel.WARNING)


class TestEstimateEffort:
    def test_keywords_in_order(self) -> None:
        assert estimate_effort("Generate a single chart in universal mode") == "Low (automated)"
        assert estimate_effort("Review the best practices section") == "Low"
        assert estimate_effort("Add a readinessProbe") == "Medium"
        assert estimate_effort("Refactor the service") == "High"
        assert estimate_effort("Something else entirely") == "Medium"

    def test_severity_to_priority(self) -> None:
        assert severity_to_priority(Severity.CRITICAL) == 1
        assert severity_to_priority(Severity.ERROR) == 1
        assert severity_to_priority(Severity.WARNING) == 2
        assert severity_to_priority(Severity.INFO) == 3


class TestAlternativeStrategies:
    def test_universal_with_many_services(self) -> None:
        result = _make_result(metrics=AnalysisMetrics(total_services=4))
        assert [a.strategy for a in alternative_strategies(result)] == [ChartStrategy.UMBRELLA]

    def test_tightly_coupled_umbrella(self) -> None:
        result = _make_result(
            recommended_strategy=ChartStrategy.UMBRELLA,
            metrics=AnalysisMetrics(total_services=4, coupling_score=71),
        )
        assert [a.strategy for a in alternative_strategies(result)] == [ChartStrategy.UNIVERSAL]

    def test_none(self) -> None:
        assert alternative_strategies(_make_result(recommended_strategy=ChartStrategy.LIBRARY)) == []


class TestRecommender:
    def test_generate_report_runs_analyzer(self) -> None:
        report = Recommender(PatternAnalyzer()).generate_report(ResourceGraph())
        assert report.analysis_result.primary_pattern is ArchitecturePattern.MONOLITH
        assert len(report.sections) == 5
