"""Text, JSON, Markdown and summary renderings of a report.

Formatting never modifies the report or the analysis result it wraps.
"""

from __future__ import annotations

import json
from dataclasses import asdict

from chartplan.errors import ReportSerializationError
from chartplan.models.analysis import AnalysisResult
from chartplan.models.config import DEFAULT_REPORT_TITLE
from chartplan.models.report import Report, ReportItem, ReportLevel, ReportSection

RULE_WIDTH = 80

_LEVEL_ICONS = {
    ReportLevel.SUCCESS: "✓",
    ReportLevel.INFO: "ℹ",
    ReportLevel.WARNING: "⚠",
    ReportLevel.ERROR: "✗",
}

_LEVEL_COLORS = {
    ReportLevel.SUCCESS: "green",
    ReportLevel.INFO: "blue",
    ReportLevel.WARNING: "yellow",
    ReportLevel.ERROR: "red",
}

_ANSI_CODES = {
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "gray": "90",
    "white": "37",
}


class Formatter:
    """Renders reports. ANSI colours are only emitted when ``color`` is True."""

    def __init__(self, color: bool = False, title: str = DEFAULT_REPORT_TITLE) -> None:
        self.color = color
        self.title = title

    def format_report(self, report: Report) -> str:
        parts = [self._header(self.title), "\n\n"]
        for i, section in enumerate(report.sections):
            if i > 0:
                parts.append("\n")
            parts.append(self._section(section))
        return "".join(parts)

    def format_json(self, report: Report) -> str:
        """Serialize *report* as indented JSON.

        Raises:
            ReportSerializationError: the report holds values JSON cannot encode.
        """
        try:
            return json.dumps(asdict(report), indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise ReportSerializationError(f"Cannot serialize report: {exc}") from exc

    def format_markdown(self, report: Report) -> str:
        parts = [f"# {self.title}\n\n"]
        for section in report.sections:
            parts.append(f"## {section.title}\n\n")
            if section.description:
                parts.append(f"*{section.description}*\n\n")
            for item in section.items:
                parts.append(f"### {item.title}\n\n")
                parts.append(f"```\n{item.content}\n```\n\n")
        return "".join(parts)

    def format_summary(self, result: AnalysisResult) -> str:
        metrics = result.metrics
        lines = [
            self._colorize("Analysis Summary", "cyan", bold=True),
            "",
            f"Services: {metrics.total_services} | Resources: {metrics.total_resources} | "
            f"Complexity: {metrics.complexity_score}/100 | Coupling: {metrics.coupling_score}/100",
            f"Primary Pattern: {result.primary_pattern} (confidence: {result.confidence}%)",
            f"Recommended Strategy: {result.recommended_strategy}",
            "",
        ]
        violations = result.violation_count
        if violations > 0:
            lines.append(self._colorize(f"⚠ {violations} best practice violations found", "yellow"))
        else:
            lines.append(self._colorize("✓ All best practices checks passed", "green"))
        return "\n".join(lines) + "\n"

    def _header(self, text: str) -> str:
        line = "=" * len(text)
        return f"{line}\n{text}\n{line}"

    def _section(self, section: ReportSection) -> str:
        parts = [self._colorize(f"▶ {section.title}", "cyan", bold=True), "\n"]
        if section.description:
            parts.extend([self._colorize(section.description, "gray"), "\n"])
        parts.extend(["-" * RULE_WIDTH, "\n\n"])
        for item in section.items:
            parts.extend([self._item(item), "\n"])
        return "".join(parts)

    def _item(self, item: ReportItem) -> str:
        icon = _LEVEL_ICONS.get(item.level, "•")
        color = _LEVEL_COLORS.get(item.level, "white")
        parts = [self._colorize(f"{icon} {item.title}", color, bold=True), "\n"]
        if item.content:
            # Blank lines separate paragraphs and are kept without indentation.
            parts.extend(f"  {line}\n" if line else "\n" for line in item.content.split("\n"))
        return "".join(parts)

    def _colorize(self, text: str, color: str, bold: bool = False) -> str:
        if not self.color:
            return text
        code = _ANSI_CODES.get(color)
        if code is None:
            return text
        if bold:
            return f"\033[1;{code}m{text}\033[0m"
        return f"\033[{code}m{text}\033[0m"
