"""Composition root: builds the configured components and runs one analysis.

Every ``build_*`` function and ``analyze`` take an optional config; when it is
omitted the configuration is loaded from the CHARTPLAN_* environment.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from chartplan.analysis.analyzer import PatternAnalyzer
from chartplan.config import load_config
from chartplan.detectors import default_detectors
from chartplan.graph.builder import GraphBuilder
from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.config import ChartplanConfig
from chartplan.models.report import Report
from chartplan.models.resources import ProcessedResource
from chartplan.observability.logging import setup_logging
from chartplan.patterns.detectors import default_pattern_detectors
from chartplan.practices import default_checkers
from chartplan.report.formatter import Formatter
from chartplan.report.recommender import Recommender


@dataclass
class AnalysisOutcome:
    """The grouped graph and the report produced from it."""

    graph: ResourceGraph
    report: Report


def _resolve(config: ChartplanConfig | None) -> ChartplanConfig:
    return config if config is not None else load_config()


def build_graph_builder(config: ChartplanConfig | None = None) -> GraphBuilder:
    config = _resolve(config)
    return GraphBuilder(default_detectors(config.detection))


def build_pattern_analyzer(config: ChartplanConfig | None = None) -> PatternAnalyzer:
    config = _resolve(config)
    vendor_group = config.detection.vendor_group
    return PatternAnalyzer(
        detectors=default_pattern_detectors(vendor_group),
        checkers=default_checkers(),
        vendor_group=vendor_group,
    )


def build_recommender(config: ChartplanConfig | None = None) -> Recommender:
    return Recommender(build_pattern_analyzer(config))


def build_formatter(config: ChartplanConfig | None = None) -> Formatter:
    config = _resolve(config)
    return Formatter(color=config.report.color, title=config.report.title)


def analyze(
    resources: Iterable[ProcessedResource],
    config: ChartplanConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> AnalysisOutcome:
    """Build the graph, group it, analyze it and assemble the report.

    Logging is set up at ``config.log.level`` unless structlog is already
    configured by the caller.

    Raises:
        ConfigError: *config* is omitted and a CHARTPLAN_* variable is invalid.
        AnalysisCancelledError: *cancel_event* was set during graph building.
    """
    config = _resolve(config)
    if not structlog.is_configured():
        setup_logging(config.log.level)

    graph = build_graph_builder(config).build(resources, cancel_event=cancel_event)
    report = build_recommender(config).generate_report(graph)
    return AnalysisOutcome(graph=graph, report=report)
