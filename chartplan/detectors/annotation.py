"""Relationships declared through metadata annotations."""

from __future__ import annotations

from chartplan.detectors.base import ResourceIndex, find_resource, relationship
from chartplan.graph.builder import RelationshipDetector
from chartplan.graph.models import Relationship, RelationshipType
from chartplan.models.config import DEFAULT_DEPENDS_ON_ANNOTATION, DEFAULT_VENDOR_GROUP
from chartplan.models.resources import ProcessedResource

_CERT_MANAGER_GROUP = "cert-manager.io"
_NGINX_PREFIX = "nginx.ingress.kubernetes.io/"


class AnnotationDetector(RelationshipDetector):
    """Detects cert-manager issuers, vendor controller hooks and declared dependencies.

    ``depends_on_annotation`` takes a comma-separated list of resource names;
    each matches resources in the same namespace or cluster-scoped ones.
    """

    name = "annotation"
    priority = 70

    def __init__(
        self,
        vendor_group: str = DEFAULT_VENDOR_GROUP,
        depends_on_annotation: str = DEFAULT_DEPENDS_ON_ANNOTATION,
    ) -> None:
        self._vendor_prefix = f"{vendor_group}/"
        self._depends_on = depends_on_annotation

    def detect(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        annotations = resource.annotations
        if not annotations:
            return []
        relationships = self._cert_manager(resource, annotations, all_resources)
        relationships.extend(self._vendor_controllers(resource, annotations, all_resources))
        relationships.extend(self._custom_dependencies(resource, annotations, all_resources))
        return relationships

    def _cert_manager(
        self, resource: ProcessedResource, annotations: dict[str, str], all_resources: ResourceIndex
    ) -> list[Relationship]:
        relationships = []
        for annotation, kind, namespace in (
            ("cert-manager.io/cluster-issuer", "ClusterIssuer", ""),
            ("cert-manager.io/issuer", "Issuer", resource.namespace),
        ):
            issuer = annotations.get(annotation, "")
            target = find_resource(all_resources, _CERT_MANAGER_GROUP, kind, namespace, issuer)
            if target is not None:
                relationships.append(
                    relationship(
                        resource,
                        target,
                        RelationshipType.ANNOTATION,
                        f"metadata.annotations[{annotation}]",
                        issuer=issuer,
                        annotation=annotation,
                    )
                )
        return relationships

    def _vendor_controllers(
        self, resource: ProcessedResource, annotations: dict[str, str], all_resources: ResourceIndex
    ) -> list[Relationship]:
        relationships = []
        for key, value in annotations.items():
            if key.startswith(_NGINX_PREFIX):
                target = next((k for k in all_resources if k.kind == "IngressNginxController"), None)
            elif key.startswith(self._vendor_prefix) and ("auth" in key or "dex" in key):
                target = next(
                    (
                        k
                        for k in all_resources
                        if k.kind == "DexAuthenticator" and k.namespace == resource.namespace
                    ),
                    None,
                )
            else:
                continue
            if target is not None:
                relationships.append(
                    relationship(
                        resource,
                        target,
                        RelationshipType.VENDOR,
                        f"metadata.annotations[{key}]",
                        annotation=key,
                        annotationValue=value,
                    )
                )
        return relationships

    def _custom_dependencies(
        self, resource: ProcessedResource, annotations: dict[str, str], all_resources: ResourceIndex
    ) -> list[Relationship]:
        names = [n.strip() for n in annotations.get(self._depends_on, "").split(",") if n.strip()]
        return [
            relationship(
                resource,
                key,
                RelationshipType.CUSTOM_DEPENDENCY,
                f"metadata.annotations[{self._depends_on}]",
                dependsOn=key.name,
            )
            for name in names
            for key in all_resources
            if key.name == name and key.namespace in (resource.namespace, "") and key != resource.key
        ]
