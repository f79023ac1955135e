"""Tests for report rendering."""

from __future__ import annotations

import json

import pytest

from chartplan.errors import ReportSerializationError
from chartplan.models.analysis import AnalysisMetrics, AnalysisResult, ArchitecturePattern, BestPractice, Severity
from chartplan.models.report import Report, ReportItem, ReportLevel, ReportSection
from chartplan.report.formatter import RULE_WIDTH, Formatter
from chartplan.report.recommender import build_report

# ---------------------------------------------------------------------------
# Helper factories
# ---------------------------------------------------------------------------


def _make_report() -> Report:
    section = ReportSection(
        title="Overview",
        description="High-level analysis",
        items=[
            ReportItem("Total Services", "3 services detected"),
            ReportItem("Warning", "first line\n\nsecond line", ReportLevel.WARNING),
        ],
    )
    return Report(analysis_result=AnalysisResult(), sections=[section, ReportSection(title="Empty")])


def _make_result(violations: int = 0) -> AnalysisResult:
    practices = [
        BestPractice(
            id="BP-T",
            title="t",
            description="d",
            category="c",
            severity=Severity.WARNING,
            compliant=False,
        )
        for _ in range(violations)
    ]
    return AnalysisResult(
        primary_pattern=ArchitecturePattern.MICROSERVICES,
        confidence=65,
        best_practices=practices,
        metrics=AnalysisMetrics(total_services=4, total_resources=12, complexity_score=40, coupling_score=10),
    )


# =====================================================================
# Text
# =====================================================================


class TestFormatReport:
    def test_plain_text(self) -> None:
        text = Formatter(title="Report").format_report(_make_report())
        assert text.startswith("======\nReport\n======\n\n")
        assert "▶ Overview\nHigh-level analysis\n" + "-" * RULE_WIDTH in text
        assert "ℹ Total Services\n  3 services detected\n" in text
        assert "⚠ Warning\n  first line\n\n  second line\n" in text
        assert "\033[" not in text

    def test_practice_paragraphs_keep_blank_lines(self) -> None:
        text = Formatter().format_report(build_report(_make_result(violations=1)))
        assert "⚠ [WARNING] t\n  d\n\n  Affected resources:\n\n  Recommendations:\n" in text

    def test_item_without_content(self) -> None:
        section = ReportSection(title="Only", items=[ReportItem("Bare", "", ReportLevel.INFO)])
        text = Formatter().format_report(Report(analysis_result=AnalysisResult(), sections=[section]))
        assert text.endswith("ℹ Bare\n\n")

    def test_sections_separated_by_blank_line(self) -> None:
        text = Formatter().format_report(_make_report())
        assert "\n\n▶ Empty\n" in text

    def test_color(self) -> None:
        text = Formatter(color=True).format_report(_make_report())
        assert "\033[1;36m▶ Overview\033[0m" in text
        assert "\033[90mHigh-level analysis\033[0m" in text
        assert "\033[1;33m⚠ Warning\033[0m" in text

    def test_does_not_modify_report(self) -> None:
        report = build_report(_make_result(violations=1))
        before = Formatter().format_json(report)
        Formatter(color=True).format_report(report)
        Formatter().format_markdown(report)
        assert Formatter().format_json(report) == before


# =====================================================================
# JSON
# =====================================================================


class TestFormatJson:
    def test_valid_json(self) -> None:
        report = build_report(_make_result())
        data = json.loads(Formatter().format_json(report))
        assert data["analysis_result"]["primary_pattern"] == "microservices"
        assert [s["title"] for s in data["sections"]] == [
            "Overview",
            "Architecture Patterns",
            "Best Practices",
            "Chart Strategy",
            "Action Items",
        ]

    def test_non_ascii_kept(self) -> None:
        assert "✓" in Formatter().format_json(build_report(_make_result()))

    def test_unserializable_value(self) -> None:
        result = _make_result()
        result.metrics.resources_by_kind = {"Deployment": object()}  # type: ignore[dict-item]
        with pytest.raises(ReportSerializationError):
            Formatter().format_json(Report(analysis_result=result))


# =====================================================================
# Markdown / summary
# =====================================================================


class TestFormatMarkdown:
    def test_layout(self) -> None:
        md = Formatter(title="Plan").format_markdown(_make_report())
        assert md.startswith("# Plan\n\n## Overview\n\n*High-level analysis*\n\n### Total Services\n\n")
        assert "```\n3 services detected\n```\n\n" in md
        assert "## Empty\n\n" in md
        assert "*\n\n## Empty" not in md


class TestFormatSummary:
    def test_no_violations(self) -> None:
        summary = Formatter().format_summary(_make_result())
        assert summary.splitlines() == [
            "Analysis Summary",
            "",
            "Services: 4 | Resources: 12 | Complexity: 40/100 | Coupling: 10/100",
            "Primary Pattern: microservices (confidence: 65%)",
            "Recommended Strategy: universal",
            "",
            "✓ All best practices checks passed",
        ]

    def test_violations(self) -> None:
        summary = Formatter().format_summary(_make_result(violations=2))
        assert summary.endswith("⚠ 2 best practice violations found\n")

    def test_color(self) -> None:
        summary = Formatter(color=True).format_summary(_make_result(violations=1))
        assert "\033[33m⚠ 1 best practice violations found\033[0m" in summary
