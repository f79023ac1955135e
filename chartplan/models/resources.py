"""Resource identity and processed-resource data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chartplan.values import string_map


@dataclass(frozen=True)
class ResourceKey:
    """Unique identity of a Kubernetes resource.

    ``namespace`` is empty for cluster-scoped resources.
    """

    group: str
    version: str
    kind: str
    namespace: str
    name: str

    @property
    def api_version(self) -> str:
        """Return the ``apiVersion`` string (``group/version`` or ``version``)."""
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    @classmethod
    def from_api_version(cls, api_version: str, kind: str, namespace: str, name: str) -> ResourceKey:
        """Build a key from an ``apiVersion`` string such as ``apps/v1``."""
        group, _, version = api_version.rpartition("/")
        return cls(group=group, version=version, kind=kind, namespace=namespace, name=name)

    def __str__(self) -> str:
        if not self.namespace:
            return f"{self.kind}/{self.name}"
        return f"{self.kind}/{self.namespace}/{self.name}"


@dataclass
class ProcessedResource:
    """A resource produced by the upstream processing stage.

    ``values`` is the decoded values bag extracted for the resource's kind
    (containers, replicas, tolerations, ...). ``obj`` is the raw manifest,
    read by relationship detectors. The analysis engine only reads both;
    grouping may set ``service_name``.
    """

    key: ResourceKey
    service_name: str = ""
    values: dict[str, Any] = field(default_factory=dict)
    obj: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_manifest(
        cls,
        manifest: dict[str, Any],
        values: dict[str, Any] | None = None,
        service_name: str = "",
    ) -> ProcessedResource:
        """Build a resource whose key is derived from ``apiVersion``/``kind``/``metadata``."""
        metadata = manifest.get("metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        key = ResourceKey.from_api_version(
            str(manifest.get("apiVersion", "")),
            kind=str(manifest.get("kind", "")),
            namespace=str(metadata.get("namespace") or ""),
            name=str(metadata.get("name") or ""),
        )
        return cls(key=key, service_name=service_name, values=values or {}, obj=manifest)

    @property
    def kind(self) -> str:
        return self.key.kind

    @property
    def name(self) -> str:
        return self.key.name

    @property
    def namespace(self) -> str:
        return self.key.namespace

    @property
    def labels(self) -> dict[str, str]:
        """Return ``metadata.labels``; non-string entries are dropped."""
        return string_map(self._metadata().get("labels"))

    @property
    def annotations(self) -> dict[str, str]:
        """Return ``metadata.annotations``; non-string entries are dropped."""
        return string_map(self._metadata().get("annotations"))

    def _metadata(self) -> dict[str, Any]:
        metadata = self.obj.get("metadata")
        return metadata if isinstance(metadata, dict) else {}


@dataclass
class ResourceGroup:
    """A named service group. After grouping every resource is in exactly one group."""

    name: str
    namespace: str = ""
    resources: list[ProcessedResource] = field(default_factory=list)

    def has_kind(self, *kinds: str) -> bool:
        """Return True if any member resource is one of *kinds*."""
        return any(r.kind in kinds for r in self.resources)
