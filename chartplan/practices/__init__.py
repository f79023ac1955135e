"""Best-practice checkers and Pod Security Standards classification."""

from __future__ import annotations

from chartplan.practices.availability import GracefulShutdownChecker, HighAvailabilityChecker
from chartplan.practices.base import WORKLOAD_KINDS, BestPracticeChecker
from chartplan.practices.pod_security import PodSecurityLevel, classify_pod_security
from chartplan.practices.resources import QoSClass, QoSClassChecker, ResourceLimitsChecker, qos_class
from chartplan.practices.security import PodSecurityStandardsChecker, SecurityChecker
from chartplan.practices.workloads import (
    DaemonSetPatternChecker,
    InitContainerChecker,
    StatefulSetPatternChecker,
)


def default_checkers() -> list[BestPracticeChecker]:
    """Return a fresh instance of every built-in checker, in report order."""
    return [
        ResourceLimitsChecker(),
        SecurityChecker(),
        HighAvailabilityChecker(),
        InitContainerChecker(),
        QoSClassChecker(),
        StatefulSetPatternChecker(),
        DaemonSetPatternChecker(),
        GracefulShutdownChecker(),
        PodSecurityStandardsChecker(),
    ]


__all__ = [
    "WORKLOAD_KINDS",
    "BestPracticeChecker",
    "DaemonSetPatternChecker",
    "GracefulShutdownChecker",
    "HighAvailabilityChecker",
    "InitContainerChecker",
    "PodSecurityLevel",
    "PodSecurityStandardsChecker",
    "QoSClass",
    "QoSClassChecker",
    "ResourceLimitsChecker",
    "SecurityChecker",
    "StatefulSetPatternChecker",
    "classify_pod_security",
    "default_checkers",
    "qos_class",
]
