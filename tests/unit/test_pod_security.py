"""Tests for Pod Security Standards and QoS classification."""

from __future__ import annotations

from typing import Any

import pytest

from chartplan.practices import PodSecurityLevel, QoSClass, classify_pod_security, qos_class

_RESTRICTED = {
    "runAsNonRoot": True,
    "capabilities": {"drop": ["ALL"]},
    "seccompProfile": {"type": "RuntimeDefault"},
}


def _values(*contexts: dict[str, Any] | None, **pod: Any) -> dict[str, Any]:
    containers = []
    for ctx in contexts:
        container: dict[str, Any] = {"name": "c"}
        if ctx is not None:
            container["securityContext"] = ctx
        containers.append(container)
    return {"containers": containers, **pod}


class TestClassifyPodSecurity:
    @pytest.mark.parametrize("field", ["hostNetwork", "hostPID", "hostIPC"])
    def test_host_namespaces_are_privileged(self, field: str) -> None:
        assert classify_pod_security(_values(_RESTRICTED, **{field: True})) is PodSecurityLevel.PRIVILEGED

    def test_restricted(self) -> None:
        assert classify_pod_security(_values(_RESTRICTED, _RESTRICTED)) is PodSecurityLevel.RESTRICTED

    def test_drop_all_case_insensitive(self) -> None:
        ctx = {**_RESTRICTED, "capabilities": {"drop": ["all"]}}
        assert classify_pod_security(_values(ctx)) is PodSecurityLevel.RESTRICTED

    def test_one_container_without_context_is_baseline(self) -> None:
        assert classify_pod_security(_values(_RESTRICTED, None)) is PodSecurityLevel.BASELINE

    def test_missing_seccomp_is_baseline(self) -> None:
        ctx = {k: v for k, v in _RESTRICTED.items() if k != "seccompProfile"}
        assert classify_pod_security(_values(ctx)) is PodSecurityLevel.BASELINE

    def test_privileged_container_wins_over_earlier_baseline(self) -> None:
        assert classify_pod_security(_values(None, {"privileged": True})) is PodSecurityLevel.PRIVILEGED

    def test_missing_or_malformed_containers(self) -> None:
        assert classify_pod_security({}) is PodSecurityLevel.BASELINE
        assert classify_pod_security({"containers": "bad"}) is PodSecurityLevel.BASELINE

    def test_host_network_string_ignored(self) -> None:
        assert classify_pod_security(_values(_RESTRICTED, hostNetwork="true")) is PodSecurityLevel.RESTRICTED


class TestQoSClass:
    def test_missing_containers(self) -> None:
        assert qos_class({}) is QoSClass.BEST_EFFORT

    def test_malformed_containers(self) -> None:
        assert qos_class({"containers": 3}) is None

    def test_no_resources(self) -> None:
        assert qos_class({"containers": [{"name": "c"}]}) is QoSClass.BEST_EFFORT

    def test_guaranteed(self) -> None:
        res = {"limits": {"cpu": "1", "memory": "1Gi"}, "requests": {"cpu": "1", "memory": "1Gi"}}
        assert qos_class({"containers": [{"resources": res}]}) is QoSClass.GUARANTEED

    def test_unequal_limits_burstable(self) -> None:
        res = {"limits": {"cpu": "2", "memory": "1Gi"}, "requests": {"cpu": "1", "memory": "1Gi"}}
        assert qos_class({"containers": [{"resources": res}]}) is QoSClass.BURSTABLE

    def test_one_container_without_resources_burstable(self) -> None:
        res = {"limits": {"cpu": "1", "memory": "1Gi"}, "requests": {"cpu": "1", "memory": "1Gi"}}
        assert qos_class({"containers": [{"resources": res}, {"name": "sidecar"}]}) is QoSClass.BURSTABLE
