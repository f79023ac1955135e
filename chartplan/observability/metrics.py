"""Prometheus instrumentation for the analysis pipeline.

Counters only describe how often things happen; no analysis data is kept.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

relationships_detected_total = Counter(
    "chartplan_relationships_detected_total",
    "Relationships emitted by relationship detectors",
    ["detector"],
)

graph_build_duration_seconds = Histogram(
    "chartplan_graph_build_duration_seconds",
    "Time spent building and grouping the resource graph",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)

findings_total = Counter(
    "chartplan_findings_total",
    "Best-practice findings reported by checkers",
    ["severity", "compliant"],
)

analyses_total = Counter(
    "chartplan_analyses_total",
    "Completed pattern analyses",
    ["primary_pattern"],
)
