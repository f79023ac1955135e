"""Core data structures for chartplan."""

from chartplan.models.analysis import (
    AnalysisMetrics,
    AnalysisResult,
    ArchitecturePattern,
    BestPractice,
    ChartStrategy,
    Recommendation,
    Severity,
)
from chartplan.models.config import ChartplanConfig
from chartplan.models.report import (
    ActionItem,
    AlternativeStrategy,
    Report,
    ReportItem,
    ReportLevel,
    ReportSection,
)
from chartplan.models.resources import ProcessedResource, ResourceGroup, ResourceKey

__all__ = [
    "ActionItem",
    "AlternativeStrategy",
    "AnalysisMetrics",
    "AnalysisResult",
    "ArchitecturePattern",
    "BestPractice",
    "ChartStrategy",
    "ChartplanConfig",
    "ProcessedResource",
    "Recommendation",
    "Report",
    "ReportItem",
    "ReportLevel",
    "ReportSection",
    "ResourceGroup",
    "ResourceKey",
    "Severity",
]
