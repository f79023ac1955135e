"""Resource relationship graph and service grouping."""

from chartplan.graph.builder import GraphBuilder, RelationshipDetector, group_resources
from chartplan.graph.models import Relationship, RelationshipType
from chartplan.graph.resource_graph import ResourceGraph

__all__ = [
    "GraphBuilder",
    "Relationship",
    "RelationshipDetector",
    "RelationshipType",
    "ResourceGraph",
    "group_resources",
]
