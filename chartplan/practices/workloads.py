"""Workload-kind specific pattern checks."""

from __future__ import annotations

from typing import Any

from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import BestPractice, Severity
from chartplan.practices.base import BestPracticeChecker, container_resources, containers_missing, workloads
from chartplan.values import as_list, as_map, as_str, container_list

_CATEGORY = "Patterns"


class InitContainerChecker(BestPracticeChecker):
    """Notes workloads that use init containers (BP-PAT-001, compliant)."""

    name = "init-containers"
    category = _CATEGORY

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        affected = [key for key, resource in workloads(graph) if as_list(resource.values.get("initContainers"))]
        if not affected:
            return []
        return [
            BestPractice(
                id="BP-PAT-001",
                title="Init Containers in Use",
                description="Init containers separate setup steps from the main application",
                category=self.category,
                severity=Severity.INFO,
                compliant=True,
                recommendations=[
                    "Keep init containers idempotent",
                    "Set resource requests on init containers too",
                ],
                affected_resources=affected,
            )
        ]


class StatefulSetPatternChecker(BestPracticeChecker):
    """StatefulSets missing serviceName, podManagementPolicy or updateStrategy (BP-SS-001)."""

    name = "statefulset-patterns"
    category = _CATEGORY

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        practices = []
        for key, resource in workloads(graph, ("StatefulSet",)):
            missing = _missing_statefulset_fields(resource.values)
            if not missing:
                continue
            practices.append(
                BestPractice(
                    id="BP-SS-001",
                    title="StatefulSet Configuration Incomplete",
                    description=f"StatefulSet {key.name} is missing: {', '.join(missing)}",
                    category=self.category,
                    severity=Severity.WARNING,
                    compliant=False,
                    recommendations=[
                        "Set serviceName to a headless Service for stable network identities",
                        "Set podManagementPolicy explicitly (OrderedReady or Parallel)",
                        "Set updateStrategy explicitly (RollingUpdate with partition, or OnDelete)",
                    ],
                    affected_resources=[key],
                )
            )
        return practices


def _missing_statefulset_fields(values: dict[str, Any]) -> list[str]:
    missing = []
    if not as_str(values.get("serviceName")):
        missing.append("serviceName")
    if values.get("podManagementPolicy") is None:
        missing.append("podManagementPolicy")
    if values.get("updateStrategy") is None:
        missing.append("updateStrategy")
    return missing


class DaemonSetPatternChecker(BestPracticeChecker):
    """DaemonSets missing tolerations, updateStrategy or container limits (BP-DS-001)."""

    name = "daemonset-patterns"
    category = _CATEGORY

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        practices = []
        for key, resource in workloads(graph, ("DaemonSet",)):
            missing = _missing_daemonset_fields(resource.values)
            if not missing:
                continue
            practices.append(
                BestPractice(
                    id="BP-DS-001",
                    title="DaemonSet Configuration Incomplete",
                    description=f"DaemonSet {key.name} is missing: {', '.join(missing)}",
                    category=self.category,
                    severity=Severity.WARNING,
                    compliant=False,
                    recommendations=[
                        "Add tolerations so the DaemonSet can run on tainted nodes",
                        "Set updateStrategy (RollingUpdate with maxUnavailable)",
                        "Set resource limits; DaemonSets run on every node",
                    ],
                    affected_resources=[key],
                )
            )
        return practices


def _missing_daemonset_fields(values: dict[str, Any]) -> list[str]:
    missing = []
    if values.get("tolerations") is None:
        missing.append("tolerations")
    if values.get("updateStrategy") is None:
        missing.append("updateStrategy")
    if containers_missing(values):
        missing.append("resource limits")
    else:
        containers = container_list(values)
        if containers is not None and any(not _has_limits(c) for c in containers):
            missing.append("resource limits")
    return missing


def _has_limits(container: dict[str, Any]) -> bool:
    resources = container_resources(container) or {}
    return as_map(resources.get("limits")) is not None
