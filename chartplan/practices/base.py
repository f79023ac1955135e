"""Best-practice checker contract and shared helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from chartplan.graph.resource_graph import ResourceGraph
from chartplan.models.analysis import BestPractice
from chartplan.models.resources import ProcessedResource, ResourceKey
from chartplan.values import as_map

WORKLOAD_KINDS = ("Deployment", "StatefulSet", "DaemonSet")


class BestPracticeChecker(ABC):
    """Inspects a finished graph and reports compliant practices or violations.

    Checkers never raise on unexpected value shapes: anything that is not
    the expected shape counts as "no evidence".
    """

    name: str = ""
    category: str = ""

    @abstractmethod
    def check(self, graph: ResourceGraph) -> list[BestPractice]:
        """Return the findings for *graph*."""


def workloads(graph: ResourceGraph, kinds: tuple[str, ...] = WORKLOAD_KINDS) -> Iterator[tuple[ResourceKey, ProcessedResource]]:
    """Yield ``(key, resource)`` for every resource of *kinds*, in graph order."""
    for key, resource in graph.resources.items():
        if key.kind in kinds:
            yield key, resource


def containers_missing(values: dict[str, Any]) -> bool:
    """True when the values bag has no containers entry (absent or null)."""
    return values.get("containers") is None


def container_resources(container: dict[str, Any]) -> dict[str, Any] | None:
    return as_map(container.get("resources"))


def append_once(keys: list[ResourceKey], key: ResourceKey) -> None:
    if key not in keys:
        keys.append(key)
