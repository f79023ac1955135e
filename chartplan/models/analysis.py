"""Pattern analysis and best-practice data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from chartplan.models.resources import ResourceKey


class ArchitecturePattern(StrEnum):
    """Architecture pattern detected across the whole resource set."""

    MICROSERVICES = "microservices"
    MONOLITH = "monolith"
    STATEFUL = "stateful"
    STATELESS = "stateless"
    SIDECAR = "sidecar"
    DAEMONSET = "daemonset"
    JOB = "job"
    OPERATOR = "operator"
    VENDOR_EXTENSION = "vendor-extension"


class ChartStrategy(StrEnum):
    """Recommended Helm chart organisation."""

    UNIVERSAL = "universal"
    SEPARATE = "separate"
    LIBRARY = "library"
    UMBRELLA = "umbrella"
    HYBRID = "hybrid"


class Severity(StrEnum):
    """Finding severity, ordered by impact."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Return 0 (info) .. 3 (critical)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.INFO: 0,
    Severity.WARNING: 1,
    Severity.ERROR: 2,
    Severity.CRITICAL: 3,
}


@dataclass
class BestPractice:
    """A compliant practice or a violation reported by a checker."""

    id: str
    title: str
    description: str
    category: str
    severity: Severity
    compliant: bool
    recommendations: list[str] = field(default_factory=list)
    affected_resources: list[ResourceKey] = field(default_factory=list)
    auto_fixable: bool = False

    @property
    def is_violation(self) -> bool:
        """True for non-compliant findings above info severity."""
        return not self.compliant and self.severity != Severity.INFO


@dataclass
class AnalysisMetrics:
    """Quantitative metrics derived from a resource graph."""

    total_services: int = 0
    total_resources: int = 0
    resources_by_kind: dict[str, int] = field(default_factory=dict)
    average_resources_per_service: float = 0.0
    stateful_services: int = 0
    services_with_ingress: int = 0
    services_with_secrets: int = 0
    complexity_score: int = 0  # 0-100
    coupling_score: int = 0  # 0-100, lower is better
    vendor_resource_count: int = 0


@dataclass
class Recommendation:
    """A high-level architectural recommendation. Priority 1 is the highest."""

    priority: int
    title: str
    description: str
    rationale: str = ""
    impact: str = ""
    implementation_steps: list[str] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Outcome of one pattern analysis run."""

    detected_patterns: list[ArchitecturePattern] = field(default_factory=list)
    primary_pattern: ArchitecturePattern = ArchitecturePattern.STATELESS
    recommended_strategy: ChartStrategy = ChartStrategy.UNIVERSAL
    confidence: int = 0  # 0-100
    best_practices: list[BestPractice] = field(default_factory=list)
    metrics: AnalysisMetrics = field(default_factory=AnalysisMetrics)
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def violation_count(self) -> int:
        """Number of non-compliant findings above info severity."""
        return sum(1 for bp in self.best_practices if bp.is_violation)
