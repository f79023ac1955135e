"""Availability and reliability checks."""

from __future__ import annotations

from typing import Any

from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import BestPractice, Severity
from chartplan.models.resources import ResourceKey
from chartplan.practices.base import BestPracticeChecker, workloads
from chartplan.values import as_int, as_map, container_list


class HighAvailabilityChecker(BestPracticeChecker):
    """Deployment replicas, health probes and PodDisruptionBudgets."""

    name = "high-availability"
    category = "High Availability"

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        single_replica: list[ResourceKey] = []
        missing_probes: list[ResourceKey] = []
        deployments: list[ResourceKey] = []

        for key, resource in workloads(graph, ("Deployment",)):
            deployments.append(key)
            if as_int(resource.values.get("replicas")) == 1:
                single_replica.append(key)
            containers = container_list(resource.values)
            if containers is not None and not any(_has_probe(c) for c in containers):
                missing_probes.append(key)

        practices = []
        if single_replica:
            practices.append(
                BestPractice(
                    id="BP-HA-001",
                    title="Single Replica Deployments",
                    description="Deployments with a single replica have no redundancy",
                    category=self.category,
                    severity=Severity.WARNING,
                    compliant=False,
                    recommendations=[
                        "Run at least 2 replicas for production workloads",
                        "Use a HorizontalPodAutoscaler for automatic scaling",
                        "Spread replicas across zones with pod anti-affinity",
                    ],
                    affected_resources=single_replica,
                    auto_fixable=True,
                )
            )
        if missing_probes:
            practices.append(
                BestPractice(
                    id="BP-HA-002",
                    title="Missing Health Probes",
                    description="Containers should have liveness and readiness probes",
                    category=self.category,
                    severity=Severity.ERROR,
                    compliant=False,
                    recommendations=[
                        "Add a livenessProbe to restart unhealthy containers",
                        "Add a readinessProbe to control traffic routing",
                    ],
                    affected_resources=missing_probes,
                )
            )
        if len(deployments) > 1 and not graph.has_kind("PodDisruptionBudget"):
            practices.append(
                BestPractice(
                    id="BP-HA-003",
                    title="No PodDisruptionBudget Defined",
                    description="A PodDisruptionBudget protects against voluntary disruptions",
                    category=self.category,
                    severity=Severity.INFO,
                    compliant=False,
                    recommendations=[
                        "Create a PodDisruptionBudget for critical deployments",
                        "Set minAvailable or maxUnavailable to match replica counts",
                    ],
                    affected_resources=deployments,
                )
            )
        return practices


def _has_probe(container: dict[str, Any]) -> bool:
    return "livenessProbe" in container or "readinessProbe" in container


class GracefulShutdownChecker(BestPracticeChecker):
    """Workloads with neither terminationGracePeriodSeconds nor a preStop hook (BP-GS-001)."""

    name = "graceful-shutdown"
    category = "Reliability"

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        affected = [key for key, resource in workloads(graph) if not _handles_shutdown(resource.values)]
        if not affected:
            return []
        return [
            BestPractice(
                id="BP-GS-001",
                title="Graceful Shutdown Not Configured",
                description="Workloads should drain in-flight work before termination",
                category=self.category,
                severity=Severity.WARNING,
                compliant=False,
                recommendations=[
                    "Set terminationGracePeriodSeconds to cover the longest request",
                    "Add a lifecycle.preStop hook to stop accepting traffic before SIGTERM",
                ],
                affected_resources=affected,
            )
        ]


def _handles_shutdown(values: dict[str, Any]) -> bool:
    if values.get("terminationGracePeriodSeconds") is not None:
        return True
    for container in container_list(values) or []:
        lifecycle = as_map(container.get("lifecycle")) or {}
        if lifecycle.get("preStop") is not None:
            return True
    return False
