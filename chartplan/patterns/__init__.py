"""Architecture pattern detection."""

from chartplan.patterns.base import PatternDetector
from chartplan.patterns.detectors import (
    JobDetector,
    MicroservicesDetector,
    OperatorDetector,
    StatefulDetector,
    VendorExtensionDetector,
    default_pattern_detectors,
)

__all__ = [
    "JobDetector",
    "MicroservicesDetector",
    "OperatorDetector",
    "PatternDetector",
    "StatefulDetector",
    "VendorExtensionDetector",
    "default_pattern_detectors",
]
