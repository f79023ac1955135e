"""Tests for analysis metrics: counts, complexity and coupling."""

from __future__ import annotations

import pytest

from chartplan.analysis.metrics import complexity_score, compute_metrics, coupling_score
from chartplan.graph.models import Relationship, RelationshipType
from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.resources import ProcessedResource, ResourceGroup, ResourceKey

# ---------------------------------------------------------------------------
# Helper factories
# ---------------------------------------------------------------------------


def _make_resource(kind: str, name: str, service: str, group: str = "") -> ProcessedResource:
    key = ResourceKey(group=group, version="v1", kind=kind, namespace="default", name=name)
    return ProcessedResource(key=key, service_name=service)


def _make_graph(resources: list[ProcessedResource]) -> ResourceGraph:
    """Add *resources* and one group per distinct service name."""
    graph = ResourceGraph()
    groups: dict[str, ResourceGroup] = {}
    for r in resources:
        graph.add_resource(r)
        if r.service_name not in groups:
            groups[r.service_name] = ResourceGroup(name=r.service_name, namespace="default")
            graph.add_group(groups[r.service_name])
        groups[r.service_name].resources.append(r)
    return graph


def _link(graph: ResourceGraph, src: ResourceKey, dst: ResourceKey) -> None:
    graph.add_relationship(Relationship(from_key=src, to_key=dst, type=RelationshipType.NAME_REFERENCE))


# =====================================================================
# compute_metrics
# =====================================================================


class TestComputeMetrics:
    def test_counts(self) -> None:
        graph = _make_graph(
            [
                _make_resource("Deployment", "web", "web", group="apps"),
                _make_resource("Ingress", "web", "web", group="networking.k8s.io"),
                _make_resource("Secret", "web", "web"),
                _make_resource("StatefulSet", "db", "db", group="apps"),
                _make_resource("ModuleConfig", "mc", "mc", group="deckhouse.io"),
                _make_resource("Dex", "dex", "mc", group="auth.deckhouse.io"),
            ]
        )
        metrics = compute_metrics(graph)
        assert metrics.total_services == 3
        assert metrics.total_resources == 6
        assert metrics.average_resources_per_service == 2.0
        assert metrics.stateful_services == 1
        assert metrics.services_with_ingress == 1
        assert metrics.services_with_secrets == 1
        assert metrics.vendor_resource_count == 1
        assert metrics.resources_by_kind["Deployment"] == 1

    def test_empty_graph(self) -> None:
        metrics = compute_metrics(ResourceGraph())
        assert metrics.total_services == 0
        assert metrics.average_resources_per_service == 0.0
        assert metrics.complexity_score == 0
        assert metrics.coupling_score == 0


# =====================================================================
# complexity_score
# =====================================================================


class TestComplexityScore:
    @pytest.mark.parametrize(
        ("resources", "expected"),
        [(10, 0), (11, 10), (20, 10), (21, 20), (50, 20), (51, 30)],
    )
    def test_resource_tiers(self, resources: int, expected: int) -> None:
        assert complexity_score(resources, 0, 0, 0) == expected

    @pytest.mark.parametrize(("services", "expected"), [(2, 0), (3, 10), (6, 20), (11, 30)])
    def test_service_tiers(self, services: int, expected: int) -> None:
        assert complexity_score(0, services, 0, 0) == expected

    def test_stateful_and_kinds(self) -> None:
        assert complexity_score(0, 0, 2, 3) == 26

    def test_capped(self) -> None:
        assert complexity_score(100, 20, 10, 20) == 100


# =====================================================================
# coupling_score
# =====================================================================


class TestCouplingScore:
    def test_single_service(self) -> None:
        a = _make_resource("Deployment", "a", "svc")
        b = _make_resource("Service", "b", "svc")
        graph = _make_graph([a, b])
        _link(graph, a.key, b.key)
        assert coupling_score(graph) == 0

    def test_no_relationships(self) -> None:
        graph = _make_graph([_make_resource("Deployment", "a", "a"), _make_resource("Deployment", "b", "b")])
        assert coupling_score(graph) == 0

    def test_cross_service_fraction_floored(self) -> None:
        a = _make_resource("Deployment", "a", "one")
        b = _make_resource("Service", "b", "one")
        c = _make_resource("Deployment", "c", "two")
        graph = _make_graph([a, b, c])
        _link(graph, a.key, b.key)
        _link(graph, b.key, a.key)
        _link(graph, a.key, c.key)
        assert coupling_score(graph) == 33

    def test_dangling_edge_counts_in_total_only(self) -> None:
        a = _make_resource("Deployment", "a", "one")
        b = _make_resource("Deployment", "b", "two")
        graph = _make_graph([a, b])
        _link(graph, a.key, b.key)
        _link(graph, a.key, ResourceKey("", "v1", "Secret", "default", "ghost"))
        assert coupling_score(graph) == 50
