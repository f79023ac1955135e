"""Direct name references between resources.

Covers Ingress backends and TLS secrets, IngressClass, StatefulSet governing
Services, RBAC bindings, PVC storage classes, ServiceAccounts and image pull
secrets of workloads, autoscaler targets and Gateway API routes.
"""

from __future__ import annotations

from typing import Any

from chartplan.detectors.base import (
    ResourceIndex,
    find_resource,
    group_of,
    pod_spec,
    relationship,
)
from chartplan.graph.builder import RelationshipDetector
from chartplan.graph.models import Relationship, RelationshipType
from chartplan.models.resources import ProcessedResource
from chartplan.values import as_str, maps_in, nested, nested_str

_RBAC_GROUP = "rbac.authorization.k8s.io"
_GATEWAY_GROUP = "gateway.networking.k8s.io"
_ROUTE_KINDS = frozenset({"HTTPRoute", "GRPCRoute", "TCPRoute", "TLSRoute", "UDPRoute"})
_SCALER_KINDS = frozenset({"HorizontalPodAutoscaler", "ScaledObject"})


class NameReferenceDetector(RelationshipDetector):
    """Emits edges for fields that name another resource.

    An edge is only emitted when the named resource is part of the input.
    """

    name = "name_reference"
    priority = 90

    def detect(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        relationships: list[Relationship] = []
        kind = resource.kind

        if kind == "Ingress":
            relationships.extend(self._ingress(resource, all_resources))
        elif kind == "StatefulSet":
            relationships.extend(self._statefulset_service(resource, all_resources))
        elif kind in ("RoleBinding", "ClusterRoleBinding"):
            relationships.extend(self._role_binding(resource, all_resources))
        elif kind == "PersistentVolumeClaim":
            relationships.extend(self._storage_class(resource, all_resources))
        elif kind in _SCALER_KINDS:
            relationships.extend(self._scale_target(resource, all_resources))
        elif kind in _ROUTE_KINDS:
            relationships.extend(self._gateway_route(resource, all_resources))

        spec = pod_spec(resource)
        if spec is not None:
            relationships.extend(self._service_account(resource, spec, all_resources))
            relationships.extend(self._image_pull_secrets(resource, spec, all_resources))
        return relationships

    def _ingress(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        relationships = []
        ns = resource.namespace

        backends: list[tuple[str, str]] = []
        default_backend = nested_str(resource.obj, "spec", "defaultBackend", "service", "name")
        if default_backend:
            backends.append((default_backend, "spec.defaultBackend.service.name"))
        for rule in maps_in(nested(resource.obj, "spec", "rules")):
            for path in maps_in(nested(rule, "http", "paths")):
                service_name = nested_str(path, "backend", "service", "name")
                if service_name:
                    backends.append((service_name, "spec.rules[].http.paths[].backend.service.name"))

        for service_name, field in backends:
            target = find_resource(all_resources, "", "Service", ns, service_name)
            if target is not None:
                relationships.append(
                    relationship(resource, target, RelationshipType.NAME_REFERENCE, field, serviceName=service_name)
                )

        for tls in maps_in(nested(resource.obj, "spec", "tls")):
            secret_name = as_str(tls.get("secretName"))
            target = find_resource(all_resources, "", "Secret", ns, secret_name or "")
            if target is not None:
                relationships.append(
                    relationship(
                        resource,
                        target,
                        RelationshipType.NAME_REFERENCE,
                        "spec.tls[].secretName",
                        secretName=secret_name or "",
                    )
                )

        class_name = nested_str(resource.obj, "spec", "ingressClassName")
        target = find_resource(all_resources, "networking.k8s.io", "IngressClass", "", class_name)
        if target is not None:
            relationships.append(
                relationship(
                    resource,
                    target,
                    RelationshipType.INGRESS_CLASS,
                    "spec.ingressClassName",
                    ingressClassName=class_name,
                )
            )
        return relationships

    def _statefulset_service(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        service_name = nested_str(resource.obj, "spec", "serviceName")
        target = find_resource(all_resources, "", "Service", resource.namespace, service_name)
        if target is None:
            return []
        return [
            relationship(
                resource, target, RelationshipType.NAME_REFERENCE, "spec.serviceName", serviceName=service_name
            )
        ]

    def _role_binding(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        relationships = []
        rel_type = (
            RelationshipType.CLUSTER_ROLE_BINDING
            if resource.kind == "ClusterRoleBinding"
            else RelationshipType.ROLE_BINDING
        )

        role_kind = nested_str(resource.obj, "roleRef", "kind")
        role_name = nested_str(resource.obj, "roleRef", "name")
        if role_kind in ("Role", "ClusterRole"):
            role_ns = resource.namespace if role_kind == "Role" else ""
            target = find_resource(all_resources, _RBAC_GROUP, role_kind, role_ns, role_name)
            if target is not None:
                relationships.append(
                    relationship(resource, target, rel_type, "roleRef", roleKind=role_kind, roleName=role_name)
                )

        for subject in maps_in(resource.obj.get("subjects")):
            if subject.get("kind") != "ServiceAccount":
                continue
            sa_name = as_str(subject.get("name")) or ""
            sa_ns = as_str(subject.get("namespace")) or resource.namespace
            target = find_resource(all_resources, "", "ServiceAccount", sa_ns, sa_name)
            if target is not None:
                relationships.append(
                    relationship(
                        resource,
                        target,
                        rel_type,
                        "subjects[]",
                        subjectKind="ServiceAccount",
                        subjectName=sa_name,
                    )
                )
        return relationships

    def _storage_class(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        class_name = nested_str(resource.obj, "spec", "storageClassName")
        target = find_resource(all_resources, "storage.k8s.io", "StorageClass", "", class_name)
        if target is None:
            return []
        return [
            relationship(
                resource,
                target,
                RelationshipType.STORAGE_CLASS,
                "spec.storageClassName",
                storageClassName=class_name,
            )
        ]

    def _scale_target(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        ref = nested(resource.obj, "spec", "scaleTargetRef")
        target_name = nested_str(ref, "name")
        # ScaledObject defaults to a Deployment when kind is omitted.
        target_kind = nested_str(ref, "kind") or "Deployment"
        target_group = group_of(nested_str(ref, "apiVersion") or "apps/v1")
        target = find_resource(all_resources, target_group, target_kind, resource.namespace, target_name)
        if target is None:
            return []
        return [
            relationship(
                resource,
                target,
                RelationshipType.SCALE_TARGET,
                "spec.scaleTargetRef",
                targetKind=target_kind,
                targetName=target_name,
            )
        ]

    def _gateway_route(self, resource: ProcessedResource, all_resources: ResourceIndex) -> list[Relationship]:
        relationships = []
        for parent in maps_in(nested(resource.obj, "spec", "parentRefs")):
            name = as_str(parent.get("name")) or ""
            ns = as_str(parent.get("namespace")) or resource.namespace
            target = find_resource(all_resources, _GATEWAY_GROUP, "Gateway", ns, name)
            if target is not None:
                relationships.append(
                    relationship(resource, target, RelationshipType.GATEWAY_ROUTE, "spec.parentRefs[]", gateway=name)
                )

        for rule in maps_in(nested(resource.obj, "spec", "rules")):
            for backend in maps_in(rule.get("backendRefs")):
                if (as_str(backend.get("kind")) or "Service") != "Service":
                    continue
                name = as_str(backend.get("name")) or ""
                ns = as_str(backend.get("namespace")) or resource.namespace
                target = find_resource(all_resources, "", "Service", ns, name)
                if target is not None:
                    relationships.append(
                        relationship(
                            resource,
                            target,
                            RelationshipType.GATEWAY_ROUTE,
                            "spec.rules[].backendRefs[]",
                            serviceName=name,
                        )
                    )
        return relationships

    def _service_account(
        self, resource: ProcessedResource, spec: dict[str, Any], all_resources: ResourceIndex
    ) -> list[Relationship]:
        sa_name = as_str(spec.get("serviceAccountName")) or ""
        target = find_resource(all_resources, "", "ServiceAccount", resource.namespace, sa_name)
        if target is None:
            return []
        return [
            relationship(
                resource,
                target,
                RelationshipType.SERVICE_ACCOUNT,
                "serviceAccountName",
                serviceAccountName=sa_name,
            )
        ]

    def _image_pull_secrets(
        self, resource: ProcessedResource, spec: dict[str, Any], all_resources: ResourceIndex
    ) -> list[Relationship]:
        relationships = []
        for entry in maps_in(spec.get("imagePullSecrets")):
            secret_name = as_str(entry.get("name")) or ""
            target = find_resource(all_resources, "", "Secret", resource.namespace, secret_name)
            if target is not None:
                relationships.append(
                    relationship(
                        resource,
                        target,
                        RelationshipType.IMAGE_PULL_SECRET,
                        "imagePullSecrets",
                        secretName=secret_name,
                    )
                )
        return relationships
