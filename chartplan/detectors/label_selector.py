"""Label-selector relationships: Service -> workloads, ServiceMonitor -> Service."""

from __future__ import annotations

from chartplan.detectors.base import ResourceIndex, relationship, selector_matches, selector_string
from chartplan.graph.builder import RelationshipDetector
from chartplan.graph.models import Relationship, RelationshipType
from chartplan.models.resources import ProcessedResource
from chartplan.values import nested, string_map

_TEMPLATE_KINDS = ("Deployment", "StatefulSet", "DaemonSet", "ReplicaSet")


class LabelSelectorDetector(RelationshipDetector):
    """Matches selectors against pod template labels or Service labels."""

    name = "label_selector"
    priority = 100

    def detect(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        if resource.kind == "Service":
            return self._service_to_workloads(resource, all_resources)
        if resource.kind == "ServiceMonitor":
            return self._service_monitor_to_services(resource, all_resources)
        return []

    def _service_to_workloads(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        selector = string_map(nested(resource.obj, "spec", "selector"))
        if not selector:
            return []

        relationships = []
        for key, target in all_resources.items():
            if key.namespace != resource.namespace:
                continue
            if key.kind == "Pod":
                pod_labels = target.labels
            elif key.kind in _TEMPLATE_KINDS:
                pod_labels = string_map(nested(target.obj, "spec", "template", "metadata", "labels"))
            else:
                continue
            if selector_matches(selector, pod_labels):
                relationships.append(
                    relationship(
                        resource,
                        key,
                        RelationshipType.LABEL_SELECTOR,
                        "spec.selector",
                        selector=selector_string(selector),
                    )
                )
        return relationships

    def _service_monitor_to_services(
        self, resource: ProcessedResource, all_resources: ResourceIndex
    ) -> list[Relationship]:
        match_labels = string_map(nested(resource.obj, "spec", "selector", "matchLabels"))
        if not match_labels:
            return []

        return [
            relationship(
                resource,
                key,
                RelationshipType.SERVICE_MONITOR,
                "spec.selector",
                selector=selector_string(match_labels),
            )
            for key, target in all_resources.items()
            if key.kind == "Service"
            and key.namespace == resource.namespace
            and selector_matches(match_labels, target.labels)
        ]
