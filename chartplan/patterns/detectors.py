"""Built-in architecture pattern detectors."""

from __future__ import annotations

from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import ArchitecturePattern
from chartplan.models.config import DEFAULT_VENDOR_GROUP
from chartplan.patterns.base import PatternDetector
from chartplan.values import map_list

_MIN_MICROSERVICES = 3


class MicroservicesDetector(PatternDetector):
    """Three or more service groups that each run a Deployment or StatefulSet."""

    name = "microservices"

    def detect(self, graph: ResourceGraph) -> list[ArchitecturePattern]:
        if len(graph.groups) < _MIN_MICROSERVICES:
            return []

        patterns = []
        with_workloads = sum(1 for g in graph.groups if g.has_kind("Deployment", "StatefulSet"))
        if with_workloads >= _MIN_MICROSERVICES:
            patterns.append(ArchitecturePattern.MICROSERVICES)
        if not graph.has_kind("PersistentVolumeClaim", "StatefulSet"):
            patterns.append(ArchitecturePattern.STATELESS)
        return patterns


class StatefulDetector(PatternDetector):
    name = "stateful"

    def detect(self, graph: ResourceGraph) -> list[ArchitecturePattern]:
        patterns = []
        if graph.has_kind("PersistentVolumeClaim", "StatefulSet"):
            patterns.append(ArchitecturePattern.STATEFUL)
        if graph.has_kind("DaemonSet"):
            patterns.append(ArchitecturePattern.DAEMONSET)
        return patterns


class JobDetector(PatternDetector):
    name = "job"

    def detect(self, graph: ResourceGraph) -> list[ArchitecturePattern]:
        if graph.has_kind("Job", "CronJob"):
            return [ArchitecturePattern.JOB]
        return []


class OperatorDetector(PatternDetector):
    """A CustomResourceDefinition shipped together with its controller Deployment."""

    name = "operator"

    def detect(self, graph: ResourceGraph) -> list[ArchitecturePattern]:
        if not graph.has_kind("CustomResourceDefinition"):
            return []
        for deployment in graph.resources_by_kind("Deployment"):
            if _looks_like_controller(deployment.name, deployment.labels):
                return [ArchitecturePattern.OPERATOR]
        return []


def _looks_like_controller(name: str, labels: dict[str, str]) -> bool:
    if "controller" in name or "operator" in name:
        return True
    return any("control-plane" in k or "control-plane" in v for k, v in labels.items())


class VendorExtensionDetector(PatternDetector):
    """Resources in the vendor API group, plus sidecar Deployments.

    Only resources whose group equals the vendor group exactly count here.
    """

    name = "vendor"

    def __init__(self, vendor_group: str = DEFAULT_VENDOR_GROUP) -> None:
        self._vendor_group = vendor_group

    def detect(self, graph: ResourceGraph) -> list[ArchitecturePattern]:
        patterns = []
        if any(key.group == self._vendor_group for key in graph.resources):
            patterns.append(ArchitecturePattern.VENDOR_EXTENSION)
        for deployment in graph.resources_by_kind("Deployment"):
            containers = map_list(deployment.values.get("containers"))
            if containers is not None and len(containers) > 1:
                patterns.append(ArchitecturePattern.SIDECAR)
                break
        return patterns


def default_pattern_detectors(vendor_group: str = DEFAULT_VENDOR_GROUP) -> list[PatternDetector]:
    """Return a fresh instance of every built-in pattern detector, in evaluation order."""
    return [
        MicroservicesDetector(),
        StatefulDetector(),
        VendorExtensionDetector(vendor_group),
        JobDetector(),
        OperatorDetector(),
    ]
