"""Owner-reference relationships from ``metadata.ownerReferences``."""

from __future__ import annotations

from chartplan.detectors.base import ResourceIndex, find_resource, group_of, relationship
from chartplan.graph.builder import RelationshipDetector
from chartplan.graph.models import Relationship, RelationshipType
from chartplan.models.resources import ProcessedResource
from chartplan.values import as_str, maps_in, nested


class OwnerReferenceDetector(RelationshipDetector):
    """Links a resource to its owners.

    Owners are looked up in the resource's namespace first, then among
    cluster-scoped resources.
    """

    name = "owner_reference"
    priority = 75

    def detect(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        relationships = []
        for owner in maps_in(nested(resource.obj, "metadata", "ownerReferences")):
            kind = as_str(owner.get("kind")) or ""
            name = as_str(owner.get("name")) or ""
            group = group_of(as_str(owner.get("apiVersion")) or "")
            target = find_resource(all_resources, group, kind, resource.namespace, name)
            if target is None and resource.namespace:
                target = find_resource(all_resources, group, kind, "", name)
            if target is None:
                continue
            details = {"ownerKind": kind, "ownerName": name}
            if owner.get("controller") is True:
                details["controller"] = "true"
            relationships.append(
                relationship(resource, target, RelationshipType.OWNER_REFERENCE, "metadata.ownerReferences[]", **details)
            )
        return relationships
