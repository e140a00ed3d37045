"""Dashboard state owned by the dashboard controller."""

from __future__ import annotations

from dataclasses import dataclass, field

from kubedeck.constants.enums import SyncState
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.models.core.pod_mirror import PodMirror


@dataclass
class SelectionState:
    """Currently selected pod and container.

    ``generation`` increases on every selection change. Background callbacks
    capture it when they start and compare on completion, so a late result
    for a previous selection is dropped.
    """

    pod_uid: str | None = None
    container: str | None = None
    generation: int = 0

    def select(self, pod_uid: str, container: str | None) -> int:
        self.pod_uid = pod_uid
        self.container = container
        self.generation += 1
        return self.generation

    def clear(self) -> None:
        self.pod_uid = None
        self.container = None
        self.generation += 1

    def is_current(self, generation: int) -> bool:
        return generation == self.generation and self.pod_uid is not None

    def is_selected(self, pod_uid: str, container: str | None = None) -> bool:
        if self.pod_uid != pod_uid:
            return False
        return container is None or self.container == container


@dataclass
class DashboardState:
    """Mutable state of the dashboard for the current namespace."""

    namespace: str | None = None
    mirror: PodMirror = field(default_factory=PodMirror)
    selection: SelectionState = field(default_factory=SelectionState)
    sync_state: SyncState = SyncState.IDLE

    @property
    def selected_pod(self) -> PodRecord | None:
        return self.mirror.get(self.selection.pod_uid)

    def reset(self) -> None:
        """Forget the namespace, its pods and the selection."""
        self.namespace = None
        self.mirror.clear()
        self.selection.clear()
        self.sync_state = SyncState.IDLE


__all__ = [
    "DashboardState",
    "SelectionState",
]
