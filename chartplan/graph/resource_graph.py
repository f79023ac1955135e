"""In-memory resource graph: resources, relationships, groups, orphans."""

from __future__ import annotations

from chartplan.graph.models import Relationship
from chartplan.models.resources import ProcessedResource, ResourceGroup, ResourceKey


class ResourceGraph:
    """Resources by key plus an append-only relationship list.

    Relationship lookups are linear scans over the full list; manifest sets
    are small enough that no index is kept. No method raises: absence is
    reported through a ``found`` flag or an empty result.
    """

    def __init__(self) -> None:
        self.resources: dict[ResourceKey, ProcessedResource] = {}
        self.relationships: list[Relationship] = []
        self.groups: list[ResourceGroup] = []
        self.orphans: list[ProcessedResource] = []

    def add_resource(self, resource: ProcessedResource) -> None:
        """Add *resource*, replacing any resource with the same key."""
        self.resources[resource.key] = resource

    def add_relationship(self, relationship: Relationship) -> None:
        self.relationships.append(relationship)

    def get_resource(self, key: ResourceKey) -> tuple[ProcessedResource | None, bool]:
        """Return ``(resource, True)`` if *key* is present, else ``(None, False)``."""
        resource = self.resources.get(key)
        return resource, resource is not None

    def relationships_from(self, key: ResourceKey) -> list[Relationship]:
        """Outgoing edges of *key*, in insertion order."""
        return [rel for rel in self.relationships if rel.from_key == key]

    def relationships_to(self, key: ResourceKey) -> list[Relationship]:
        """Incoming edges of *key*, in insertion order."""
        return [rel for rel in self.relationships if rel.to_key == key]

    def resources_by_kind(self, kind: str) -> list[ProcessedResource]:
        return [r for key, r in self.resources.items() if key.kind == kind]

    def has_kind(self, *kinds: str) -> bool:
        return any(key.kind in kinds for key in self.resources)

    def add_group(self, group: ResourceGroup) -> None:
        self.groups.append(group)

    def add_orphan(self, resource: ProcessedResource) -> None:
        self.orphans.append(resource)

    def service_name_of(self, key: ResourceKey) -> str:
        """Service name of the resource at *key*, or "" when the key is not in the graph."""
        resource = self.resources.get(key)
        return resource.service_name if resource is not None else ""

    def __len__(self) -> int:
        return len(self.resources)
