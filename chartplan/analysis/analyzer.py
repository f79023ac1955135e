"""Pattern analyzer: runs pattern detectors and checkers over a grouped graph."""

from __future__ import annotations

from collections.abc import Iterable

from chartplan.analysis.metrics import compute_metrics
from chartplan.analysis.strategy import (
    calculate_confidence,
    determine_primary_pattern,
    generate_recommendations,
    recommend_strategy,
)
from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import AnalysisResult, ArchitecturePattern
from chartplan.models.config import DEFAULT_VENDOR_GROUP
from chartplan.observability.logging import get_logger
from chartplan.observability.metrics import analyses_total, findings_total
from chartplan.patterns.base import PatternDetector
from chartplan.practices.base import BestPracticeChecker

_logger = get_logger("analysis.analyzer")


class PatternAnalyzer:
    """Classifies a grouped graph and scores it against best practices.

    Detectors and checkers run in the order given. The analyzer only reads
    the graph.
    """

    def __init__(
        self,
        detectors: Iterable[PatternDetector] = (),
        checkers: Iterable[BestPracticeChecker] = (),
        vendor_group: str = DEFAULT_VENDOR_GROUP,
    ) -> None:
        self._detectors = list(detectors)
        self._checkers = list(checkers)
        self._vendor_group = vendor_group

    def add_detector(self, detector: PatternDetector) -> None:
        self._detectors.append(detector)

    def add_checker(self, checker: BestPracticeChecker) -> None:
        self._checkers.append(checker)

    def analyze(self, graph: ResourceGraph) -> AnalysisResult:
        result = AnalysisResult(metrics=compute_metrics(graph, self._vendor_group))

        # Insertion order of the counter is first-detected order.
        counts: dict[ArchitecturePattern, int] = {}
        for detector in self._detectors:
            for pattern in detector.detect(graph):
                if pattern not in counts:
                    result.detected_patterns.append(pattern)
                    _logger.debug("pattern_detected", detector=detector.name, pattern=str(pattern))
                counts[pattern] = counts.get(pattern, 0) + 1
        result.primary_pattern = determine_primary_pattern(counts, result.metrics)

        for checker in self._checkers:
            practices = checker.check(graph)
            for bp in practices:
                findings_total.labels(severity=str(bp.severity), compliant=str(bp.compliant).lower()).inc()
            result.best_practices.extend(practices)

        result.recommended_strategy = recommend_strategy(result.primary_pattern, result.metrics)
        result.confidence = calculate_confidence(result)
        result.recommendations = generate_recommendations(result)

        analyses_total.labels(primary_pattern=str(result.primary_pattern)).inc()
        _logger.info(
            "analysis_complete",
            primary_pattern=str(result.primary_pattern),
            strategy=str(result.recommended_strategy),
            confidence=result.confidence,
            patterns=len(result.detected_patterns),
            findings=len(result.best_practices),
            violations=result.violation_count,
        )
        return result
