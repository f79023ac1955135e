"""Helpers shared by the built-in relationship detectors."""

from __future__ import annotations

from typing import Any

from chartplan.graph.models import Relationship, RelationshipType
from chartplan.models.resources import ProcessedResource, ResourceKey
from chartplan.values import as_map, nested

# Kinds whose manifest carries a pod spec.
POD_SPEC_KINDS = frozenset({"Deployment", "StatefulSet", "DaemonSet", "ReplicaSet", "Job", "CronJob", "Pod"})

ResourceIndex = dict[ResourceKey, ProcessedResource]


def pod_spec_path(kind: str) -> tuple[str, ...]:
    """Return the manifest path of the pod spec for *kind*."""
    if kind == "CronJob":
        return ("spec", "jobTemplate", "spec", "template", "spec")
    if kind == "Pod":
        return ("spec",)
    return ("spec", "template", "spec")


def pod_spec(resource: ProcessedResource) -> dict[str, Any] | None:
    """Return the pod spec of a workload manifest, or None."""
    if resource.kind not in POD_SPEC_KINDS:
        return None
    return as_map(nested(resource.obj, *pod_spec_path(resource.kind)))


def find_resource(
    all_resources: ResourceIndex,
    group: str,
    kind: str,
    namespace: str,
    name: str,
) -> ResourceKey | None:
    """Find a resource by group, kind, namespace and name, ignoring the API version."""
    if not name:
        return None
    for key in all_resources:
        if key.kind == kind and key.name == name and key.namespace == namespace and key.group == group:
            return key
    return None


def relationship(
    resource: ProcessedResource,
    target: ResourceKey,
    rel_type: RelationshipType,
    field: str,
    **details: str,
) -> Relationship:
    return Relationship(from_key=resource.key, to_key=target, type=rel_type, field=field, details=details)


def selector_matches(selector: dict[str, str], labels: dict[str, str]) -> bool:
    """Equality-based selector match. An empty selector matches nothing."""
    if not selector or not labels:
        return False
    return all(labels.get(k) == v for k, v in selector.items())


def selector_string(selector: dict[str, str]) -> str:
    return ",".join(f"{k}={selector[k]}" for k in sorted(selector))


def group_of(api_version: str) -> str:
    """Return the API group of an ``apiVersion`` string (``""`` for core)."""
    return api_version.rpartition("/")[0]
