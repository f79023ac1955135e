"""Resource management checks: limits, requests and QoS class."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import BestPractice, Severity
from chartplan.models.resources import ResourceKey
from chartplan.practices.base import BestPracticeChecker, container_resources, containers_missing, workloads
from chartplan.values import as_map, container_list

_CATEGORY = "Resource Management"


class ResourceLimitsChecker(BestPracticeChecker):
    """Flags workloads where no container declares limits (BP-001) or requests (BP-002)."""

    name = "resource-limits"
    category = _CATEGORY

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        missing_limits: list[ResourceKey] = []
        missing_requests: list[ResourceKey] = []

        for key, resource in workloads(graph):
            containers = container_list(resource.values)
            if containers is None:
                continue
            has_limits = has_requests = False
            for container in containers:
                resources = container_resources(container) or {}
                has_limits = has_limits or "limits" in resources
                has_requests = has_requests or "requests" in resources
            if not has_limits:
                missing_limits.append(key)
            if not has_requests:
                missing_requests.append(key)

        practices = []
        if missing_limits:
            practices.append(
                BestPractice(
                    id="BP-001",
                    title="Resource Limits Not Set",
                    description="Containers should have resource limits to prevent resource exhaustion",
                    category=self.category,
                    severity=Severity.WARNING,
                    compliant=False,
                    recommendations=[
                        "Add resources.limits.cpu and resources.limits.memory to all containers",
                        "Use reasonable limits based on application requirements",
                        "Consider a VerticalPodAutoscaler for sizing recommendations",
                    ],
                    affected_resources=missing_limits,
                )
            )
        if missing_requests:
            practices.append(
                BestPractice(
                    id="BP-002",
                    title="Resource Requests Not Set",
                    description="Containers should have resource requests for proper scheduling",
                    category=self.category,
                    severity=Severity.WARNING,
                    compliant=False,
                    recommendations=[
                        "Add resources.requests.cpu and resources.requests.memory to all containers",
                        "Set requests to typical usage, not peak usage",
                        "Keep requests at or below limits",
                    ],
                    affected_resources=missing_requests,
                )
            )
        if not missing_limits and not missing_requests:
            practices.append(
                BestPractice(
                    id="BP-001",
                    title="Resource Limits and Requests Configured",
                    description="All workloads have resource limits and requests",
                    category=self.category,
                    severity=Severity.INFO,
                    compliant=True,
                    recommendations=[
                        "Keep monitoring resource usage",
                        "Adjust limits to observed usage patterns",
                    ],
                )
            )
        return practices


class QoSClass(StrEnum):
    BEST_EFFORT = "BestEffort"
    BURSTABLE = "Burstable"
    GUARANTEED = "Guaranteed"


def qos_class(values: dict[str, Any]) -> QoSClass | None:
    """Infer the pod QoS class from a values bag; None when containers are malformed."""
    if containers_missing(values):
        return QoSClass.BEST_EFFORT
    containers = container_list(values)
    if containers is None:
        return None
    if not any(_declares_resources(c) for c in containers):
        return QoSClass.BEST_EFFORT
    if all(_is_guaranteed(c) for c in containers):
        return QoSClass.GUARANTEED
    return QoSClass.BURSTABLE


def _declares_resources(container: dict[str, Any]) -> bool:
    resources = container_resources(container) or {}
    return bool(as_map(resources.get("limits")) or as_map(resources.get("requests")))


def _is_guaranteed(container: dict[str, Any]) -> bool:
    resources = container_resources(container) or {}
    limits = as_map(resources.get("limits")) or {}
    requests = as_map(resources.get("requests")) or {}
    for name in ("cpu", "memory"):
        if name not in limits or name not in requests:
            return False
        if limits[name] != requests[name]:
            return False
    return True


class QoSClassChecker(BestPracticeChecker):
    """Reports BestEffort workloads (BP-QOS-001) and Guaranteed ones (BP-QOS-002)."""

    name = "qos-class"
    category = _CATEGORY

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        best_effort: list[ResourceKey] = []
        guaranteed: list[ResourceKey] = []
        for key, resource in workloads(graph):
            qos = qos_class(resource.values)
            if qos is QoSClass.BEST_EFFORT:
                best_effort.append(key)
            elif qos is QoSClass.GUARANTEED:
                guaranteed.append(key)

        practices = []
        if best_effort:
            practices.append(
                BestPractice(
                    id="BP-QOS-001",
                    title="BestEffort QoS Class",
                    description="Workloads without requests or limits are evicted first under node pressure",
                    category=self.category,
                    severity=Severity.WARNING,
                    compliant=False,
                    recommendations=[
                        "Set resources.requests for cpu and memory on every container",
                        "Set limits equal to requests for Guaranteed QoS on critical workloads",
                    ],
                    affected_resources=best_effort,
                )
            )
        if guaranteed:
            practices.append(
                BestPractice(
                    id="BP-QOS-002",
                    title="Guaranteed QoS Class",
                    description="Workloads with cpu and memory limits equal to requests get Guaranteed QoS",
                    category=self.category,
                    severity=Severity.INFO,
                    compliant=True,
                    recommendations=["Review Guaranteed sizing periodically to avoid over-provisioning"],
                    affected_resources=guaranteed,
                )
            )
        return practices
