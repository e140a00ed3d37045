"""In-memory mirror of the pods of one namespace."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from kubedeck.constants.enums import WatchEventType
from kubedeck.models.core.pod_info import PodRecord


@dataclass(frozen=True)
class WatchEvent:
    """One event delivered by a pods watch stream.

    ``pod`` is None for ``ERROR`` and ``BOOKMARK`` events; ``raw`` keeps the
    event object (a ``Status`` for errors).
    """

    type: WatchEventType
    pod: PodRecord | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WatchEvent:
        try:
            event_type = WatchEventType(str(data.get("type", "")).upper())
        except ValueError:
            event_type = WatchEventType.ERROR
        obj = data.get("object") or {}
        pod = None
        if event_type in (
            WatchEventType.ADDED,
            WatchEventType.MODIFIED,
            WatchEventType.DELETED,
        ):
            pod = PodRecord.from_dict(obj)
        return cls(type=event_type, pod=pod, raw=obj)

    @property
    def resource_version(self) -> str:
        if self.pod is not None:
            return self.pod.resource_version
        return str((self.raw.get("metadata") or {}).get("resourceVersion", ""))


class PodMirror:
    """Ordered set of pods keyed by uid, plus the watch bookmark.

    Invariants:
    - At most one record per uid.
    - MODIFIED replaces in place; only ADDED appends and DELETED removes,
      so display order is stable across updates.
    """

    def __init__(self) -> None:
        self._pods: dict[str, PodRecord] = {}
        self.resource_version: str = ""

    def __iter__(self) -> Iterator[PodRecord]:
        return iter(list(self._pods.values()))

    def __len__(self) -> int:
        return len(self._pods)

    def __contains__(self, uid: object) -> bool:
        return uid in self._pods

    def get(self, uid: str | None) -> PodRecord | None:
        if uid is None:
            return None
        return self._pods.get(uid)

    def uids(self) -> list[str]:
        return list(self._pods)

    def add(self, pod: PodRecord) -> None:
        """Append ``pod``, or replace it in place if its uid is already known."""
        self._pods[pod.uid] = pod

    def update(self, pod: PodRecord) -> None:
        """Replace ``pod`` in place; unknown uids are appended."""
        self._pods[pod.uid] = pod

    def remove(self, uid: str) -> PodRecord | None:
        return self._pods.pop(uid, None)

    def clear(self) -> None:
        self._pods.clear()
        self.resource_version = ""

    def reset(self, pods: Iterable[PodRecord], resource_version: str) -> None:
        """Replace the whole content with a fresh listing."""
        self._pods = {pod.uid: pod for pod in pods}
        self.resource_version = resource_version

    def apply(self, event: WatchEvent) -> PodRecord | None:
        """Apply one watch event and advance the bookmark.

        Returns:
            The record that was added, replaced or removed, or None for events
            that carry no pod.
        """
        if event.resource_version:
            self.resource_version = event.resource_version
        pod = event.pod
        if pod is None:
            return None
        if event.type is WatchEventType.ADDED:
            self.add(pod)
            return pod
        if event.type is WatchEventType.MODIFIED:
            self.update(pod)
            return pod
        if event.type is WatchEventType.DELETED:
            self.remove(pod.uid)
            return pod
        return None


__all__ = [
    "PodMirror",
    "WatchEvent",
]
