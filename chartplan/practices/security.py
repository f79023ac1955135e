"""Container security checks and Pod Security Standards classification."""

from __future__ import annotations

from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import BestPractice, Severity
from chartplan.models.resources import ResourceKey
from chartplan.practices.base import BestPracticeChecker, append_once, containers_missing, workloads
from chartplan.practices.pod_security import PodSecurityLevel, classify_pod_security
from chartplan.values import as_map, container_list, is_true

_CATEGORY = "Security"


class SecurityChecker(BestPracticeChecker):
    """Checks container security contexts.

    A workload without containers in its values bag is treated as running as
    root with a writable root filesystem. Each workload appears at most once
    per finding.
    """

    name = "security"
    category = _CATEGORY

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        run_as_root: list[ResourceKey] = []
        writable_root_fs: list[ResourceKey] = []
        privileged: list[ResourceKey] = []

        for key, resource in workloads(graph):
            if containers_missing(resource.values):
                append_once(run_as_root, key)
                append_once(writable_root_fs, key)
                continue
            containers = container_list(resource.values)
            if containers is None:
                continue
            for container in containers:
                sec_ctx = as_map(container.get("securityContext"))
                if sec_ctx is None:
                    append_once(run_as_root, key)
                    append_once(writable_root_fs, key)
                    continue
                if not is_true(sec_ctx.get("runAsNonRoot")):
                    append_once(run_as_root, key)
                if not is_true(sec_ctx.get("readOnlyRootFilesystem")):
                    append_once(writable_root_fs, key)
                if is_true(sec_ctx.get("privileged")):
                    append_once(privileged, key)

        practices = []
        if run_as_root:
            practices.append(
                BestPractice(
                    id="BP-SEC-001",
                    title="Containers Running as Root",
                    description="Containers should run as a non-root user",
                    category=self.category,
                    severity=Severity.ERROR,
                    compliant=False,
                    recommendations=[
                        "Add securityContext.runAsNonRoot: true to containers",
                        "Add securityContext.runAsUser with a non-zero UID",
                        "Make sure the image supports running as non-root",
                    ],
                    affected_resources=run_as_root,
                    auto_fixable=True,
                )
            )
        if writable_root_fs:
            practices.append(
                BestPractice(
                    id="BP-SEC-002",
                    title="Root Filesystem Not Read-Only",
                    description="Containers should use a read-only root filesystem",
                    category=self.category,
                    severity=Severity.WARNING,
                    compliant=False,
                    recommendations=[
                        "Add securityContext.readOnlyRootFilesystem: true",
                        "Mount emptyDir volumes for writable directories",
                    ],
                    affected_resources=writable_root_fs,
                    auto_fixable=True,
                )
            )
        if privileged:
            practices.append(
                BestPractice(
                    id="BP-SEC-003",
                    title="Privileged Containers Detected",
                    description="Privileged containers have full host access and should be avoided",
                    category=self.category,
                    severity=Severity.CRITICAL,
                    compliant=False,
                    recommendations=[
                        "Remove securityContext.privileged: true",
                        "Grant specific capabilities instead of privileged mode",
                        "Enforce Pod Security Standards on the namespace",
                    ],
                    affected_resources=privileged,
                )
            )
        return practices


class PodSecurityStandardsChecker(BestPracticeChecker):
    """Reports workloads that classify as Privileged (BP-PSS-001)."""

    name = "pod-security-standards"
    category = _CATEGORY

    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        privileged = [
            key
            for key, resource in workloads(graph)
            if classify_pod_security(resource.values) is PodSecurityLevel.PRIVILEGED
        ]
        if not privileged:
            return []
        return [
            BestPractice(
                id="BP-PSS-001",
                title="Privileged Pod Security Level",
                description="Workloads use host namespaces or privileged containers and only pass the Privileged profile",
                category=self.category,
                severity=Severity.CRITICAL,
                compliant=False,
                recommendations=[
                    "Disable hostNetwork, hostPID and hostIPC unless strictly required",
                    "Remove privileged containers",
                    "Target the Restricted profile: runAsNonRoot, drop ALL capabilities, set a seccompProfile",
                ],
                affected_resources=privileged,
            )
        ]
