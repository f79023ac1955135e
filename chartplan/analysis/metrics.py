"""Quantitative metrics over a grouped resource graph."""

from __future__ import annotations

from collections import Counter

from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import AnalysisMetrics
from chartplan.models.config import DEFAULT_VENDOR_GROUP

MAX_SCORE = 100

# (threshold, points): the first threshold exceeded wins.
_RESOURCE_TIERS = ((50, 30), (20, 20), (10, 10))
_SERVICE_TIERS = ((10, 30), (5, 20), (2, 10))
_STATEFUL_SERVICE_POINTS = 10
_KIND_POINTS = 2


def compute_metrics(graph: ResourceGraph, vendor_group: str = DEFAULT_VENDOR_GROUP) -> AnalysisMetrics:
    """Compute counts and scores for *graph*. The graph must already be grouped."""
    metrics = AnalysisMetrics(
        total_services=len(graph.groups),
        total_resources=len(graph.resources),
        resources_by_kind=dict(Counter(key.kind for key in graph.resources)),
    )
    if metrics.total_services > 0:
        metrics.average_resources_per_service = metrics.total_resources / metrics.total_services

    metrics.stateful_services = sum(1 for g in graph.groups if g.has_kind("PersistentVolumeClaim", "StatefulSet"))
    metrics.services_with_ingress = sum(1 for g in graph.groups if g.has_kind("Ingress"))
    metrics.services_with_secrets = sum(1 for g in graph.groups if g.has_kind("Secret"))
    metrics.vendor_resource_count = sum(1 for key in graph.resources if key.group == vendor_group)

    metrics.complexity_score = complexity_score(
        metrics.total_resources,
        metrics.total_services,
        metrics.stateful_services,
        len(metrics.resources_by_kind),
    )
    metrics.coupling_score = coupling_score(graph)
    return metrics


def _tier_points(value: int, tiers: tuple[tuple[int, int], ...]) -> int:
    for threshold, points in tiers:
        if value > threshold:
            return points
    return 0


def complexity_score(total_resources: int, total_services: int, stateful_services: int, distinct_kinds: int) -> int:
    """Additive packaging-difficulty estimate, capped at 100."""
    score = (
        _tier_points(total_resources, _RESOURCE_TIERS)
        + _tier_points(total_services, _SERVICE_TIERS)
        + stateful_services * _STATEFUL_SERVICE_POINTS
        + distinct_kinds * _KIND_POINTS
    )
    return min(score, MAX_SCORE)


def coupling_score(graph: ResourceGraph) -> int:
    """Percentage of relationships that cross service boundaries (floor).

    An endpoint missing from the graph has no service, so a dangling edge
    counts towards the total but never as cross-service.
    """
    total = len(graph.relationships)
    if len(graph.groups) <= 1 or total == 0:
        return 0
    cross = 0
    for rel in graph.relationships:
        from_service = graph.service_name_of(rel.from_key)
        to_service = graph.service_name_of(rel.to_key)
        if from_service and to_service and from_service != to_service:
            cross += 1
    return cross * 100 // total
