"""Exceptions raised by chartplan."""

from __future__ import annotations


class ChartplanError(Exception):
    """Base class for all chartplan errors."""


class AnalysisCancelledError(ChartplanError):
    """Raised when the caller cancels relationship detection.

    No partial graph is returned when this is raised.
    """

    def __init__(self, processed: int, total: int) -> None:
        super().__init__(f"Graph build cancelled after {processed}/{total} resources")
        self.processed = processed
        self.total = total


class ReportSerializationError(ChartplanError):
    """Raised when a report cannot be rendered as JSON."""


class ConfigError(ChartplanError, ValueError):
    """Raised for invalid CHARTPLAN_* environment configuration."""
