"""Vendor-extension relationships between resources of the vendor API group."""

from __future__ import annotations

from chartplan.detectors.base import ResourceIndex, relationship
from chartplan.graph.builder import RelationshipDetector
from chartplan.graph.models import Relationship, RelationshipType
from chartplan.models.config import DEFAULT_VENDOR_GROUP
from chartplan.models.resources import ProcessedResource, ResourceKey


def is_vendor_group(group: str, vendor_group: str) -> bool:
    """True for the vendor group itself and any of its subgroups."""
    return group.endswith(vendor_group)


class VendorGroupDetector(RelationshipDetector):
    """Links every vendor-group resource to every other vendor-group resource."""

    name = "vendor"
    priority = 80

    def __init__(self, vendor_group: str = DEFAULT_VENDOR_GROUP) -> None:
        self._vendor_group = vendor_group

    def _is_vendor(self, key: ResourceKey) -> bool:
        return is_vendor_group(key.group, self._vendor_group)

    def detect(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        if not self._is_vendor(resource.key):
            return []
        return [
            relationship(resource, key, RelationshipType.VENDOR, "apiGroup", vendorGroup=key.group)
            for key in all_resources
            if key != resource.key and self._is_vendor(key)
        ]
