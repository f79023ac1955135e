"""Metrics, strategy selection and the pattern analyzer."""

from chartplan.analysis.analyzer import PatternAnalyzer
from chartplan.analysis.metrics import complexity_score, compute_metrics, coupling_score
from chartplan.analysis.strategy import (
    calculate_confidence,
    determine_primary_pattern,
    generate_recommendations,
    recommend_strategy,
)

__all__ = [
    "PatternAnalyzer",
    "calculate_confidence",
    "complexity_score",
    "compute_metrics",
    "coupling_score",
    "determine_primary_pattern",
    "generate_recommendations",
    "recommend_strategy",
]
