"""Pod Security Standards classification of a workload's values bag.

The three levels follow the Kubernetes Pod Security Standards: privileged,
baseline and restricted. Classification is heuristic; it looks at host
namespaces and container security contexts only.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from chartplan.values import as_list, as_map, as_str, container_list, is_true

_HOST_NAMESPACE_FIELDS = ("hostNetwork", "hostPID", "hostIPC")


class PodSecurityLevel(StrEnum):
    PRIVILEGED = "privileged"
    BASELINE = "baseline"
    RESTRICTED = "restricted"


def classify_pod_security(values: dict[str, Any]) -> PodSecurityLevel:
    """Classify a workload by its values bag.

    Any host namespace, or any privileged container, makes the whole
    workload privileged. A workload is restricted only when every container
    runs as non-root, drops ALL capabilities and sets a seccomp profile.
    Missing or malformed containers give baseline.
    """
    if any(is_true(values.get(f)) for f in _HOST_NAMESPACE_FIELDS):
        return PodSecurityLevel.PRIVILEGED

    containers = container_list(values)
    if containers is None:
        return PodSecurityLevel.BASELINE

    level = PodSecurityLevel.RESTRICTED
    for container in containers:
        sec_ctx = as_map(container.get("securityContext"))
        if sec_ctx is None:
            level = PodSecurityLevel.BASELINE
            continue
        if is_true(sec_ctx.get("privileged")):
            return PodSecurityLevel.PRIVILEGED
        if not _is_restricted(sec_ctx):
            level = PodSecurityLevel.BASELINE
    return level


def _is_restricted(sec_ctx: dict[str, Any]) -> bool:
    if not is_true(sec_ctx.get("runAsNonRoot")):
        return False
    if not _drops_all_capabilities(sec_ctx):
        return False
    return sec_ctx.get("seccompProfile") is not None


def _drops_all_capabilities(sec_ctx: dict[str, Any]) -> bool:
    capabilities = as_map(sec_ctx.get("capabilities")) or {}
    drop = as_list(capabilities.get("drop")) or []
    return any((as_str(cap) or "").upper() == "ALL" for cap in drop)
