"""Shared factories for chartplan integration tests.

Builds realistic manifests and values bags so integration tests can run the
whole pipeline: graph building, grouping, analysis and report rendering.
"""

from __future__ import annotations

from typing import Any

import pytest

from chartplan.models.config import ChartplanConfig
from chartplan.models.resources import ProcessedResource

# ---------------------------------------------------------------------------
# Values helpers
# ---------------------------------------------------------------------------

HARDENED_CONTAINER: dict[str, Any] = {
    "name": "app",
    "securityContext": {
        "runAsNonRoot": True,
        "readOnlyRootFilesystem": True,
        "capabilities": {"drop": ["ALL"]},
        "seccompProfile": {"type": "RuntimeDefault"},
    },
    "resources": {
        "limits": {"cpu": "500m", "memory": "256Mi"},
        "requests": {"cpu": "500m", "memory": "256Mi"},
    },
    "livenessProbe": {"httpGet": {"path": "/healthz", "port": 8080}},
    "readinessProbe": {"httpGet": {"path": "/ready", "port": 8080}},
}


def hardened_values(replicas: int = 2, **overrides: Any) -> dict[str, Any]:
    """Values bag of a workload that passes every container-level check."""
    values: dict[str, Any] = {
        "replicas": replicas,
        "terminationGracePeriodSeconds": 30,
        "containers": [dict(HARDENED_CONTAINER)],
    }
    values.update(overrides)
    return values


# ---------------------------------------------------------------------------
# Resource factory helpers
# ---------------------------------------------------------------------------


def make_resource(
    kind: str,
    name: str,
    api_version: str = "v1",
    namespace: str = "default",
    spec: dict[str, Any] | None = None,
    labels: dict[str, str] | None = None,
    annotations: dict[str, str] | None = None,
    values: dict[str, Any] | None = None,
    service_name: str = "",
) -> ProcessedResource:
    """Create a ProcessedResource from a minimal manifest."""
    metadata: dict[str, Any] = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    if labels:
        metadata["labels"] = labels
    if annotations:
        metadata["annotations"] = annotations
    manifest: dict[str, Any] = {"apiVersion": api_version, "kind": kind, "metadata": metadata}
    if spec is not None:
        manifest["spec"] = spec
    return ProcessedResource.from_manifest(manifest, values=values, service_name=service_name)


def make_deployment(
    name: str,
    values: dict[str, Any] | None = None,
    service_name: str = "",
    pod_spec: dict[str, Any] | None = None,
    annotations: dict[str, str] | None = None,
) -> ProcessedResource:
    """Create a Deployment whose pod template is labelled ``app: <name>``."""
    if values is None:
        values = hardened_values()
    spec = {
        "replicas": values.get("replicas", 1),
        "selector": {"matchLabels": {"app": name}},
        "template": {
            "metadata": {"labels": {"app": name}},
            "spec": pod_spec or {"containers": [{"name": name, "image": f"{name}:1.0"}]},
        },
    }
    return make_resource(
        "Deployment",
        name,
        api_version="apps/v1",
        spec=spec,
        annotations=annotations,
        values=values,
        service_name=service_name,
    )


def make_service(name: str, selector: dict[str, str] | None = None, service_name: str = "") -> ProcessedResource:
    return make_resource("Service", name, spec={"selector": selector or {"app": name}}, service_name=service_name)


def make_statefulset(name: str, values: dict[str, Any] | None = None, service_name: str = "") -> ProcessedResource:
    spec = {
        "serviceName": name,
        "template": {"metadata": {"labels": {"app": name}}, "spec": {"containers": [{"name": name}]}},
    }
    return make_resource(
        "StatefulSet",
        name,
        api_version="apps/v1",
        spec=spec,
        values=values
        if values is not None
        else hardened_values(serviceName=name, podManagementPolicy="OrderedReady", updateStrategy={}),
        service_name=service_name,
    )


def make_pdb(name: str) -> ProcessedResource:
    return make_resource("PodDisruptionBudget", name, api_version="policy/v1", spec={"minAvailable": 1})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config() -> ChartplanConfig:
    """Default configuration."""
    return ChartplanConfig()
