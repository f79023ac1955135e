"""Pattern detector contract."""

from __future__ import annotations

from abc import ABC, abstractmethod

from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import ArchitecturePattern


class PatternDetector(ABC):
    """Inspects a finished graph and reports the architecture patterns it sees.

    Detectors are pure: they read the graph and never modify it. A detector
    may report several patterns, or none.
    """

    name: str = ""

    @abstractmethod
    def detect(self, graph: ResourceGraph) -> list[ArchitecturePattern]:
        """Return the patterns present in *graph*."""
