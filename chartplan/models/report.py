"""Report data structures produced by the recommender and consumed by the formatter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from chartplan.models.analysis import AnalysisResult, ChartStrategy


class ReportLevel(StrEnum):
    """Display level of a report item."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ReportItem:
    """A titled block of text inside a report section."""

    title: str
    content: str
    level: ReportLevel = ReportLevel.INFO


@dataclass
class ReportSection:
    title: str
    description: str = ""
    items: list[ReportItem] = field(default_factory=list)


@dataclass
class Report:
    """Full analysis report: the raw result plus five rendered sections."""

    analysis_result: AnalysisResult
    sections: list[ReportSection] = field(default_factory=list)


@dataclass
class ActionItem:
    """A prioritised action derived from recommendations or auto-fixable findings."""

    priority: int
    title: str
    category: str
    impact: str = ""
    effort: str = "Medium"
    auto_fixable: bool = False


@dataclass
class AlternativeStrategy:
    strategy: ChartStrategy
    reason: str
