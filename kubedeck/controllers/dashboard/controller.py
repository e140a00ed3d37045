"""Dashboard controller: owner of the namespace, the selection and the registry.

Selecting a pod tears down everything under ``dashboard.pod`` before the
log and stats pipelines of the new selection start, so no task of the
previous selection can render into the new one.
"""

from __future__ import annotations

import logging

from kubedeck.constants.enums import Panel
from kubedeck.constants.values import KEY_DASHBOARD, KEY_POD
from kubedeck.controllers.base.base_controller import DashboardView
from kubedeck.controllers.cluster.client import ClusterClient
from kubedeck.controllers.logs.controller import LogFollowController
from kubedeck.controllers.pods.controller import PodWatchController, next_container
from kubedeck.controllers.shell.controller import (
    ExecSessionManager,
    SessionTabs,
    ShellSession,
)
from kubedeck.controllers.stats.controller import StatsController
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.models.state.app_settings import AppSettings
from kubedeck.models.state.dashboard_state import DashboardState
from kubedeck.utils.cancellations import CancellationRegistry

logger = logging.getLogger(__name__)


class DashboardController:
    """Wires the pods, logs, stats and shell controllers together.

    Attributes:
        state: Namespace, pod mirror and selection.
        registry: Cancellation registry shared by every controller.
    """

    def __init__(
        self,
        client: ClusterClient,
        view: DashboardView,
        tabs: SessionTabs,
        settings: AppSettings | None = None,
        registry: CancellationRegistry | None = None,
    ) -> None:
        self.client = client
        self.view = view
        self.settings = settings or AppSettings()
        self.registry = registry if registry is not None else CancellationRegistry()
        self.state = DashboardState()

        shared = (client, self.registry, self.state, view, self.settings)
        self.pods = PodWatchController(*shared)
        self.logs = LogFollowController(*shared)
        self.stats = StatsController(*shared)
        self.shells = ExecSessionManager(client, self.registry, tabs, self.settings)

    @property
    def namespace(self) -> str | None:
        return self.state.namespace

    def run(self, namespace: str) -> None:
        """Start mirroring ``namespace``."""
        logger.debug("Starting dashboard for namespace %s", namespace)
        self.state.namespace = namespace
        self.pods.start(namespace)

    def select_pod(self, uid: str) -> bool:
        """Select a pod, cycling through its containers on repeated selection.

        Returns:
            False when the selection did not change.
        """
        pod = self.state.mirror.get(uid)
        if pod is None:
            return False
        selection = self.state.selection
        container = next_container(pod, selection)
        if container is None:
            return False

        self.registry.run(KEY_POD)
        generation = selection.select(pod.uid, container)
        self.pods.render()
        self.view.reset_selection()

        if not pod.is_running_or_terminating:
            selection.container = None
            for panel in (Panel.LOGS, Panel.RESOURCES):
                self.view.set_panel_label(panel)
            return True

        for panel in (Panel.LOGS, Panel.RESOURCES):
            self.view.set_panel_label(panel, container=container)
        self.logs.start(pod, container, generation)
        self.stats.start(pod, container, generation)
        return True

    def open_shell(self, uid: str | None = None) -> ShellSession | None:
        """Open a remote shell into a running pod.

        Uses the selected container when ``uid`` is the selected pod, the
        first container otherwise.
        """
        pod = self.state.mirror.get(uid) if uid is not None else self.state.selected_pod
        if pod is None or not pod.is_running or not pod.containers:
            return None
        container = self._shell_container(pod)
        return self.shells.open(pod, container)

    def reset(self) -> None:
        """Cancel every dashboard task and forget the namespace."""
        self.registry.run(KEY_DASHBOARD)
        self.state.reset()
        self.view.reset_all()

    def refresh(self) -> None:
        """Reset, then mirror the same namespace again."""
        namespace = self.state.namespace
        self.reset()
        if namespace:
            self.run(namespace)

    def switch_namespace(self, namespace: str) -> None:
        self.reset()
        self.run(namespace)

    def shutdown(self) -> None:
        """Release every task, including remote shells."""
        self.shells.close_all()
        self.registry.run(KEY_DASHBOARD)

    def _shell_container(self, pod: PodRecord) -> str:
        selection = self.state.selection
        if selection.pod_uid == pod.uid and selection.container:
            return selection.container
        return pod.containers[0].name


__all__ = [
    "DashboardController",
]
