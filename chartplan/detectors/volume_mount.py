"""Volume and environment references from pod specs to ConfigMaps, Secrets and PVCs."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from chartplan.detectors.base import ResourceIndex, find_resource, pod_spec, relationship
from chartplan.graph.builder import RelationshipDetector
from chartplan.graph.models import Relationship, RelationshipType
from chartplan.models.resources import ProcessedResource
from chartplan.values import as_map, as_str, maps_in, nested_str

# (target kind, target name, relationship type, field, details)
_Reference = tuple[str, str, RelationshipType, str, dict[str, str]]


class VolumeMountDetector(RelationshipDetector):
    """Finds ConfigMaps, Secrets and PVCs consumed by a workload's pod spec."""

    name = "volume_mount"
    priority = 80

    def detect(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        spec = pod_spec(resource)
        if spec is None:
            return []

        relationships = []
        for kind, target_name, rel_type, field, details in _references(spec):
            target = find_resource(all_resources, "", kind, resource.namespace, target_name)
            if target is not None:
                relationships.append(relationship(resource, target, rel_type, field, **details))
        return relationships


def _references(spec: dict[str, Any]) -> Iterator[_Reference]:
    for volume in maps_in(spec.get("volumes")):
        yield from _volume_references(volume)
    for container in maps_in(spec.get("initContainers")) + maps_in(spec.get("containers")):
        yield from _env_references(container)


def _volume_references(volume: dict[str, Any]) -> Iterator[_Reference]:
    volume_name = as_str(volume.get("name")) or ""

    cm_name = nested_str(volume, "configMap", "name")
    if cm_name:
        yield (
            "ConfigMap",
            cm_name,
            RelationshipType.VOLUME_MOUNT,
            "volumes[].configMap",
            {"volumeName": volume_name, "configMapName": cm_name},
        )
    secret_name = nested_str(volume, "secret", "secretName")
    if secret_name:
        yield (
            "Secret",
            secret_name,
            RelationshipType.VOLUME_MOUNT,
            "volumes[].secret",
            {"volumeName": volume_name, "secretName": secret_name},
        )
    claim_name = nested_str(volume, "persistentVolumeClaim", "claimName")
    if claim_name:
        yield (
            "PersistentVolumeClaim",
            claim_name,
            RelationshipType.PVC,
            "volumes[].persistentVolumeClaim",
            {"volumeName": volume_name, "pvcName": claim_name},
        )

    projected = as_map(volume.get("projected")) or {}
    for source in maps_in(projected.get("sources")):
        cm_name = nested_str(source, "configMap", "name")
        if cm_name:
            yield (
                "ConfigMap",
                cm_name,
                RelationshipType.VOLUME_MOUNT,
                "volumes[].projected.sources[].configMap",
                {"volumeName": volume_name, "configMapName": cm_name},
            )
        secret_name = nested_str(source, "secret", "name")
        if secret_name:
            yield (
                "Secret",
                secret_name,
                RelationshipType.VOLUME_MOUNT,
                "volumes[].projected.sources[].secret",
                {"volumeName": volume_name, "secretName": secret_name},
            )


def _env_references(container: dict[str, Any]) -> Iterator[_Reference]:
    for source in maps_in(container.get("envFrom")):
        cm_name = nested_str(source, "configMapRef", "name")
        if cm_name:
            yield (
                "ConfigMap",
                cm_name,
                RelationshipType.ENV_FROM,
                "containers[].envFrom[].configMapRef",
                {"configMapName": cm_name},
            )
        secret_name = nested_str(source, "secretRef", "name")
        if secret_name:
            yield (
                "Secret",
                secret_name,
                RelationshipType.ENV_FROM,
                "containers[].envFrom[].secretRef",
                {"secretName": secret_name},
            )

    for env_var in maps_in(container.get("env")):
        env_name = as_str(env_var.get("name")) or ""
        cm_name = nested_str(env_var, "valueFrom", "configMapKeyRef", "name")
        if cm_name:
            yield (
                "ConfigMap",
                cm_name,
                RelationshipType.ENV_VALUE_FROM,
                "containers[].env[].valueFrom.configMapKeyRef",
                {"configMapName": cm_name, "envVarName": env_name},
            )
        secret_name = nested_str(env_var, "valueFrom", "secretKeyRef", "name")
        if secret_name:
            yield (
                "Secret",
                secret_name,
                RelationshipType.ENV_VALUE_FROM,
                "containers[].env[].valueFrom.secretKeyRef",
                {"secretName": secret_name, "envVarName": env_name},
            )
