"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_VENDOR_GROUP = "deckhouse.io"
DEFAULT_DEPENDS_ON_ANNOTATION = "chartplan.io/depends-on"
DEFAULT_REPORT_TITLE = "Chart Plan - Analysis Report"


@dataclass
class DetectionConfig:
    """Relationship and pattern detection configuration."""

    vendor_group: str = DEFAULT_VENDOR_GROUP
    depends_on_annotation: str = DEFAULT_DEPENDS_ON_ANNOTATION


@dataclass
class ReportConfig:
    """Report rendering configuration."""

    color: bool = False
    title: str = DEFAULT_REPORT_TITLE


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class ChartplanConfig:
    """Top-level chartplan configuration."""

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    log: LogConfig = field(default_factory=LogConfig)
