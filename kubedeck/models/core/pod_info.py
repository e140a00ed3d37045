"""Pod and container models mirrored from the Kubernetes API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kubedeck.utils.formatting import parse_timestamp
from kubedeck.utils.resource_parser import parse_memory_from_dict

_PHASE_RUNNING = "Running"
_STATUS_TERMINATING = "Terminating"


class ContainerInfo(BaseModel):
    """One container declared in a pod spec."""

    model_config = ConfigDict(frozen=True)

    name: str
    memory_limit: str | None = None
    memory_limit_bytes: float = 0.0

    @property
    def has_memory_limit(self) -> bool:
        return bool(self.memory_limit)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContainerInfo:
        limits = (data.get("resources") or {}).get("limits") or {}
        return cls(
            name=str(data.get("name", "")),
            memory_limit=limits.get("memory"),
            memory_limit_bytes=parse_memory_from_dict(data, "limits", "memory"),
        )


class PodRecord(BaseModel):
    """Snapshot of one pod as last reported by the API server.

    Identity (namespace, name, uid) never changes for a given record; a
    MODIFIED event replaces the whole record in the mirror.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str
    name: str
    uid: str
    resource_version: str = ""
    phase: str = "Unknown"
    reason: str | None = None
    deletion_timestamp: str | None = None
    start_time: datetime | None = None
    creation_time: datetime | None = None
    node_name: str | None = None
    containers: tuple[ContainerInfo, ...] = ()
    container_reasons: tuple[str, ...] = ()
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PodRecord:
        """Build a record from a Pod object as returned by the API."""
        metadata = data.get("metadata") or {}
        spec = data.get("spec") or {}
        status = data.get("status") or {}
        return cls(
            namespace=str(metadata.get("namespace", "")),
            name=str(metadata.get("name", "")),
            uid=str(metadata.get("uid", "")),
            resource_version=str(metadata.get("resourceVersion", "")),
            phase=str(status.get("phase") or "Unknown"),
            reason=status.get("reason"),
            deletion_timestamp=metadata.get("deletionTimestamp"),
            start_time=parse_timestamp(status.get("startTime")),
            creation_time=parse_timestamp(metadata.get("creationTimestamp")),
            node_name=spec.get("nodeName"),
            containers=tuple(
                ContainerInfo.from_dict(container)
                for container in spec.get("containers") or []
            ),
            container_reasons=_container_reasons(status),
            raw=data,
        )

    @property
    def is_terminating(self) -> bool:
        return self.deletion_timestamp is not None

    @property
    def has_running_phase(self) -> bool:
        return self.phase == _PHASE_RUNNING

    @property
    def is_running(self) -> bool:
        """Running phase and not being deleted."""
        return self.has_running_phase and not self.is_terminating

    @property
    def is_running_or_terminating(self) -> bool:
        return self.is_running or self.is_terminating

    @property
    def started_at(self) -> datetime | None:
        return self.start_time or self.creation_time

    @property
    def status(self) -> str:
        """Status column value, following the kubectl convention."""
        if self.is_terminating:
            return _STATUS_TERMINATING
        if self.reason:
            return self.reason
        if self.container_reasons:
            return self.container_reasons[0]
        return self.phase

    def container(self, name: str | None) -> ContainerInfo | None:
        """Return the container called ``name``, if declared."""
        return next((c for c in self.containers if c.name == name), None)

    def container_index(self, name: str | None) -> int:
        return next(
            (index for index, c in enumerate(self.containers) if c.name == name),
            -1,
        )


def _container_reasons(status: dict[str, Any]) -> tuple[str, ...]:
    reasons: list[str] = []
    for container_status in status.get("containerStatuses") or []:
        state = container_status.get("state") or {}
        for key in ("waiting", "terminated"):
            reason = (state.get(key) or {}).get("reason")
            if reason:
                reasons.append(str(reason))
    return tuple(reasons)


__all__ = [
    "ContainerInfo",
    "PodRecord",
]
