"""Pods watch synchronizer.

Keeps the :class:`~kubedeck.models.core.pod_mirror.PodMirror` of one
namespace consistent with the API server:

    Listing -> Watching -> (stream ended) -> Listing -> ...

A listing failure is the ``Error`` state: it is logged, shown in the pods
label and not retried until the user refreshes. A watch that ends cleanly
(idle timeout, server-side close) relists immediately; a watch that fails
relists after an exponential backoff.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing

from kubedeck.constants.enums import Panel, PodStatus, SyncState, WatchEventType
from kubedeck.constants.values import KEY_POD, KEY_REFRESH_POD_AGES, KEY_WATCH
from kubedeck.controllers.base.base_controller import BaseController
from kubedeck.controllers.cluster.errors import WatchError
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.models.core.pod_mirror import WatchEvent
from kubedeck.models.state.dashboard_state import SelectionState
from kubedeck.utils.task_pipeline import AsyncOperation, until
from kubedeck.utils.timers import Interval

logger = logging.getLogger(__name__)


def next_container(pod: PodRecord, selection: SelectionState) -> str | None:
    """Container to show when ``pod`` is selected.

    A single-container pod selects its container, unless that exact pod and
    container are already selected. A multi-container pod cycles to the
    container after the currently selected one, wrapping around.

    Returns:
        The container name, or None when the selection would not change.
    """
    containers = pod.containers
    if not containers:
        return None
    if len(containers) == 1:
        name = containers[0].name
        if selection.is_selected(pod.uid, name):
            return None
        return name
    index = pod.container_index(selection.container) if selection.pod_uid == pod.uid else -1
    return containers[(index + 1) % len(containers)].name


class PodWatchController(BaseController):
    """Lists then watches the pods of a namespace, forever."""

    registry_key = KEY_WATCH

    consecutive_failures: int = 0

    def start(self, namespace: str) -> AsyncOperation[None]:
        """Spawn the synchronization loop and register it under ``dashboard.watch``."""
        operation = AsyncOperation.spawn(self.run(namespace), name=f"pods-watch-{namespace}")
        self.registry.add(KEY_WATCH, operation.cancel)
        return operation

    async def run(self, namespace: str) -> None:
        """List and watch ``namespace`` until cancelled or listing fails."""
        self.consecutive_failures = 0
        while True:
            if not await self.list_pods(namespace):
                return
            try:
                await self.watch(namespace)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.consecutive_failures += 1
                logger.error("Error while watching pods in namespace %s: %s", namespace, e)
            else:
                self.consecutive_failures = 0
                logger.debug("Pods watch for namespace %s ended, relisting", namespace)
            finally:
                self.registry.run(KEY_REFRESH_POD_AGES)

            self.state.sync_state = SyncState.TERMINATED
            delay = self.retry_delay(self.consecutive_failures)
            if delay > 0:
                await asyncio.sleep(delay)

    def retry_delay(self, failures: int) -> float:
        """Backoff before relisting after ``failures`` consecutive watch errors."""
        if failures <= 0:
            return 0.0
        base = self.settings.watch_retry_backoff_base
        return min(base * 2 ** (failures - 1), self.settings.watch_retry_backoff_max)

    async def list_pods(self, namespace: str) -> bool:
        """Fetch the full pod set and reset the mirror.

        Returns:
            False when listing failed or was cancelled.
        """
        self.state.sync_state = SyncState.LISTING
        listing = AsyncOperation.spawn(self.client.get_pods(namespace), name="pods-list")
        self.registry.add(KEY_WATCH, listing.cancel)
        try:
            pod_list = await (
                until(listing)
                .spin(lambda frame, _elapsed: self.view.set_panel_label(Panel.PODS, spinner=frame))
                .run()
            )
        except Exception as e:
            self.state.sync_state = SyncState.ERROR
            logger.error("Error while listing pods in namespace %s: %s", namespace, e)
            self.view.set_panel_label(Panel.PODS, status=str(e))
            return False
        finally:
            self.registry.discard(KEY_WATCH, listing.cancel)

        if pod_list is None:
            return False

        self.state.mirror.reset(
            (PodRecord.from_dict(item) for item in pod_list.get("items") or []),
            str(pod_list.get("resourceVersion") or ""),
        )
        self.view.set_panel_label(Panel.PODS)

        selection = self.state.selection
        if selection.pod_uid is not None and selection.pod_uid not in self.state.mirror:
            self._on_selected_deleted()
        self.render()

        ages = Interval(self.settings.pod_age_refresh_interval, self.view.refresh_pod_ages)
        self.registry.add(KEY_REFRESH_POD_AGES, ages.start().cancel)
        return True

    async def watch(self, namespace: str) -> None:
        """Apply watch events from the mirror's bookmark until the stream ends."""
        self.state.sync_state = SyncState.WATCHING
        logger.info("Watching for pods changes in namespace %s ...", namespace)
        stream = await self.client.watch_pods(namespace, self.state.mirror.resource_version)
        async with aclosing(stream):
            async for data in stream:
                self.handle_event(WatchEvent.from_dict(data))

    def handle_event(self, event: WatchEvent) -> None:
        """Apply one event to the mirror and notify the view.

        Raises:
            WatchError: The stream delivered an ``ERROR`` event.
        """
        if event.type is WatchEventType.ERROR:
            raise WatchError.from_status(event.raw)

        mirror = self.state.mirror
        selection = self.state.selection
        previous = mirror.get(event.pod.uid) if event.pod is not None else None
        pod = mirror.apply(event)
        if pod is None:
            return

        if pod.uid == selection.pod_uid:
            if event.type is WatchEventType.MODIFIED:
                became_terminating = pod.is_terminating and not (
                    previous is not None and previous.is_terminating
                )
                if became_terminating and selection.container:
                    for panel in (Panel.LOGS, Panel.RESOURCES):
                        self.view.set_panel_label(
                            panel,
                            container=selection.container,
                            status=PodStatus.TERMINATING.value,
                        )
            elif event.type is WatchEventType.DELETED:
                self._on_selected_deleted()

        self.render()

    def render(self) -> None:
        self.view.render_pods(list(self.state.mirror), self.state.selection.pod_uid)

    def _on_selected_deleted(self) -> None:
        container = self.state.selection.container
        self.registry.run(KEY_POD)
        self.state.selection.clear()
        for panel in (Panel.LOGS, Panel.RESOURCES):
            self.view.set_panel_label(panel, container=container, status=PodStatus.DELETED.value)


__all__ = [
    "PodWatchController",
    "next_container",
]
