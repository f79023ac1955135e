"""Graph builder: runs relationship detectors and groups resources into services."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable

from chartplan.errors import AnalysisCancelledError
from chartplan.graph.models import Relationship
from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.resources import ProcessedResource, ResourceGroup, ResourceKey
from chartplan.observability.logging import get_logger
from chartplan.observability.metrics import graph_build_duration_seconds, relationships_detected_total

_logger = get_logger("graph.builder")


class RelationshipDetector(ABC):
    """Finds relationships originating from (or pointing to) one resource.

    Detectors only read resources. Higher ``priority`` runs first.
    """

    name: str = ""
    priority: int = 0

    @abstractmethod
    def detect(
        self,
        resource: ProcessedResource,
        all_resources: dict[ResourceKey, ProcessedResource],
    ) -> list[Relationship]:
        """Return the relationships contributed by *resource*."""


class GraphBuilder:
    """Builds a ResourceGraph from processed resources.

    The detector list is owned by the builder and kept sorted by priority,
    highest first; detectors with equal priority keep registration order.
    """

    def __init__(self, detectors: Iterable[RelationshipDetector] = ()) -> None:
        self._detectors: list[RelationshipDetector] = []
        for detector in detectors:
            self.add_detector(detector)

    @property
    def detectors(self) -> list[RelationshipDetector]:
        return list(self._detectors)

    def add_detector(self, detector: RelationshipDetector) -> None:
        self._detectors.append(detector)
        self._detectors = sorted(self._detectors, key=lambda d: d.priority, reverse=True)

    def build(
        self,
        resources: Iterable[ProcessedResource],
        cancel_event: threading.Event | None = None,
    ) -> ResourceGraph:
        """Index *resources*, detect relationships and group into services.

        Raises:
            AnalysisCancelledError: *cancel_event* was set before detection
                finished. No partial graph is returned.
        """
        t_start = time.monotonic()
        graph = ResourceGraph()
        for resource in resources:
            graph.add_resource(resource)

        total = len(graph)
        _logger.info("graph_build_started", resources=total, detectors=len(self._detectors))

        edge_counts: dict[str, int] = {d.name: 0 for d in self._detectors}
        for processed, resource in enumerate(list(graph.resources.values())):
            if cancel_event is not None and cancel_event.is_set():
                _logger.warning("graph_build_cancelled", processed=processed, total=total)
                raise AnalysisCancelledError(processed, total)
            for detector in self._detectors:
                relationships = detector.detect(resource, graph.resources)
                for rel in relationships:
                    graph.add_relationship(rel)
                edge_counts[detector.name] += len(relationships)

        for detector_name, count in edge_counts.items():
            if count:
                relationships_detected_total.labels(detector=detector_name).inc(count)
            _logger.debug("detector_finished", detector=detector_name, relationships=count)

        group_resources(graph)

        duration = time.monotonic() - t_start
        graph_build_duration_seconds.observe(duration)
        _logger.info(
            "graph_built",
            resources=total,
            relationships=len(graph.relationships),
            groups=len(graph.groups),
            duration_ms=round(duration * 1000.0, 2),
        )
        return graph


def group_resources(graph: ResourceGraph) -> None:
    """Partition every resource of *graph* into exactly one service group.

    1. Resources with a service name seed the group of that name.
    2. Each remaining resource joins the group of the first related resource
       (outgoing edges, then incoming) that is already grouped. One pass
       only: a resource grouped here is visible to later resources in the
       same pass, but nothing is revisited.
    3. Whatever is left becomes a standalone group named after its service
       name, or its own name when that is empty.
    """
    groups: dict[str, ResourceGroup] = {}
    grouped: set[ResourceKey] = set()

    def join(name: str, key: ResourceKey, resource: ProcessedResource) -> None:
        group = groups.get(name)
        if group is None:
            group = groups[name] = ResourceGroup(name=name, namespace=key.namespace)
        group.resources.append(resource)
        grouped.add(key)

    for key, resource in graph.resources.items():
        if resource.service_name:
            join(resource.service_name, key, resource)
    seeded = len(grouped)

    for key, resource in graph.resources.items():
        if key in grouped:
            continue
        related = _find_related_service(graph, key, grouped)
        if related:
            resource.service_name = related
            join(related, key, resource)
    linked = len(grouped) - seeded

    for key, resource in graph.resources.items():
        if key in grouped:
            continue
        if not resource.service_name:
            resource.service_name = resource.name
        join(resource.service_name, key, resource)

    for group in groups.values():
        graph.add_group(group)

    _logger.info(
        "groups_resolved",
        groups=len(groups),
        seeded=seeded,
        linked=linked,
        standalone=len(grouped) - seeded - linked,
    )


def _find_related_service(graph: ResourceGraph, key: ResourceKey, grouped: set[ResourceKey]) -> str:
    for rel in graph.relationships_from(key):
        target, found = graph.get_resource(rel.to_key)
        if found and target is not None and target.service_name and rel.to_key in grouped:
            return target.service_name
    for rel in graph.relationships_to(key):
        source, found = graph.get_resource(rel.from_key)
        if found and source is not None and source.service_name and rel.from_key in grouped:
            return source.service_name
    return ""
