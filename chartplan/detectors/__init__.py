"""Built-in relationship detectors."""

from __future__ import annotations

from chartplan.detectors.annotation import AnnotationDetector
from chartplan.detectors.label_selector import LabelSelectorDetector
from chartplan.detectors.name_reference import NameReferenceDetector
from chartplan.detectors.owner_reference import OwnerReferenceDetector
from chartplan.detectors.vendor import VendorGroupDetector
from chartplan.detectors.volume_mount import VolumeMountDetector
from chartplan.graph.builder import RelationshipDetector
from chartplan.models.config import DetectionConfig


def default_detectors(config: DetectionConfig | None = None) -> list[RelationshipDetector]:
    """Return a fresh instance of every built-in detector."""
    config = config or DetectionConfig()
    return [
        LabelSelectorDetector(),
        NameReferenceDetector(),
        VolumeMountDetector(),
        VendorGroupDetector(config.vendor_group),
        OwnerReferenceDetector(),
        AnnotationDetector(config.vendor_group, config.depends_on_annotation),
    ]


__all__ = [
    "AnnotationDetector",
    "LabelSelectorDetector",
    "NameReferenceDetector",
    "OwnerReferenceDetector",
    "VendorGroupDetector",
    "VolumeMountDetector",
    "default_detectors",
]
