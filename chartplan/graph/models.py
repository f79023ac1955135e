"""Relationship types and edges of the resource graph."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import StrEnum

from chartplan.models.resources import ResourceKey


class RelationshipType(StrEnum):
    """Types of relationships between Kubernetes resources."""

    LABEL_SELECTOR = "label_selector"
    NAME_REFERENCE = "name_reference"
    VOLUME_MOUNT = "volume_mount"
    ENV_FROM = "env_from"
    ENV_VALUE_FROM = "env_value_from"
    ANNOTATION = "annotation"
    SERVICE_ACCOUNT = "service_account"
    OWNER_REFERENCE = "owner_reference"
    IMAGE_PULL_SECRET = "image_pull_secret"
    CLUSTER_ROLE_BINDING = "cluster_role_binding"
    ROLE_BINDING = "role_binding"
    PVC = "pvc"
    INGRESS_CLASS = "ingress_class"
    SERVICE_MONITOR = "service_monitor"
    VENDOR = "vendor"
    GATEWAY_ROUTE = "gateway_route"
    SCALE_TARGET = "scale_target"
    STORAGE_CLASS = "storage_class"
    CUSTOM_DEPENDENCY = "custom_dependency"


@dataclass(frozen=True)
class Relationship:
    """A directed edge. Either end may be absent from the graph (dangling)."""

    from_key: ResourceKey
    to_key: ResourceKey
    type: RelationshipType
    field: str = ""  # path of the field that creates this relationship
    details: dict[str, str] = dataclasses.field(default_factory=dict)
