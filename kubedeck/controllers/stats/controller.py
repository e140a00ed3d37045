"""Resources usage poller for the selected container.

Fetches the kubelet stats of the container once, then every
``stats_poll_interval`` seconds. Each poll replaces the previous one under
``dashboard.pod.stats.poll``; the whole poller lives under
``dashboard.pod.stats``.
"""

from __future__ import annotations

import logging
from typing import Any

from kubedeck.constants.enums import GraphKind, Panel, PodStatus
from kubedeck.constants.values import (
    KEY_POD_STATS,
    KEY_POD_STATS_POLL,
    MESSAGE_METRICS_UNAUTHORIZED,
    MESSAGE_METRICS_UNAVAILABLE,
    MESSAGE_NETWORK_UNAVAILABLE,
)
from kubedeck.controllers.base.base_controller import BaseController
from kubedeck.controllers.cluster.errors import ApiError
from kubedeck.controllers.stats.parsers.stats_parser import (
    cpu_series,
    memory_series,
    network_series,
)
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.models.metrics.container_stats import ContainerStats
from kubedeck.utils.task_pipeline import AsyncOperation, until
from kubedeck.utils.timers import Interval

logger = logging.getLogger(__name__)


class StatsController(BaseController):
    """Polls and renders memory, CPU and network usage of one container."""

    registry_key = KEY_POD_STATS

    def start(self, pod: PodRecord, container: str, generation: int) -> None:
        """Fetch the first sample set, then schedule the periodic poll."""
        first = self._fetch(pod, container)
        self.registry.add(KEY_POD_STATS, first.cancel)
        driver = (
            until(first)
            .spin(lambda frame, _elapsed: self._label(generation, container, spinner=frame))
            .on_cancel(lambda cancel: self.registry.add(KEY_POD_STATS, cancel))
            .then(lambda response: self._on_first_response(response, pod, container, generation))
            .catch(lambda error: self.on_failure(error, pod, container, generation))
            .start(name=f"stats-{pod.name}-{container}")
        )
        self.registry.add(KEY_POD_STATS, driver.cancel)

    def _on_first_response(
        self, response: dict[str, Any], pod: PodRecord, container: str, generation: int
    ) -> None:
        if not self._is_current(generation):
            return
        current = self.state.mirror.get(pod.uid) or pod
        status = PodStatus.TERMINATING.value if current.is_terminating else None
        self._label(generation, container, status=status)
        self.render(response, pod, container)

        poll = Interval(
            self.settings.stats_poll_interval,
            lambda: self.poll(pod, container, generation),
        )
        self.registry.add(KEY_POD_STATS, poll.start().cancel)

    def poll(self, pod: PodRecord, container: str, generation: int) -> None:
        """Issue one poll, superseding the previous one."""
        if not self._is_current(generation):
            return
        operation = self._fetch(pod, container)
        self.registry.replace(KEY_POD_STATS_POLL, operation.cancel)
        operation.add_done_callback(
            lambda op: self._on_poll_done(op, pod, container, generation)
        )

    def _on_poll_done(
        self,
        operation: AsyncOperation[dict[str, Any]],
        pod: PodRecord,
        container: str,
        generation: int,
    ) -> None:
        if operation.cancelled() or not self._is_current(generation):
            return
        error = operation.task.exception()
        if error is not None:
            self.on_failure(error, pod, container, generation)
            return
        self.render(operation.task.result(), pod, container)

    def render(self, response: dict[str, Any], pod: PodRecord, container: str) -> None:
        """Convert a stats response into the three graphs."""
        stats = ContainerStats.from_dict(response)
        current = self.state.mirror.get(pod.uid) or pod
        info = current.container(container)

        self.view.render_graph(GraphKind.MEMORY, memory_series(stats, info))
        self.view.render_graph(GraphKind.CPU, cpu_series(stats))
        network = network_series(stats)
        if network is None:
            self.view.show_graph_message(GraphKind.NETWORK, MESSAGE_NETWORK_UNAVAILABLE)
        else:
            self.view.render_graph(GraphKind.NETWORK, network)

    def on_failure(
        self, error: BaseException, pod: PodRecord, container: str, generation: int
    ) -> None:
        """Surface a poll failure and stop polling for this selection."""
        if not self._is_current(generation):
            return
        if isinstance(error, ApiError):
            if error.status == 404:
                logger.debug("Pod %s/%s is gone, stats polling stopped", pod.namespace, pod.name)
            elif error.status == 403:
                logger.warning("Resources usage of %s/%s unauthorized: %s", pod.name, container, error)
                self.view.show_graph_message(None, MESSAGE_METRICS_UNAUTHORIZED)
            else:
                logger.warning("Resources usage of %s/%s unavailable: %s", pod.name, container, error)
                self.view.show_graph_message(None, MESSAGE_METRICS_UNAVAILABLE)
        else:
            logger.error(
                "Error while polling resources usage of %s/%s: %s",
                pod.name,
                container,
                error,
                exc_info=error,
            )
        self._label(generation, container)
        self.registry.run(KEY_POD_STATS)

    def _fetch(self, pod: PodRecord, container: str) -> AsyncOperation[dict[str, Any]]:
        return AsyncOperation.spawn(
            self.client.container_stats(
                pod.node_name or "",
                pod.namespace,
                pod.name,
                pod.uid,
                container,
            ),
            name=f"stats-fetch-{pod.name}-{container}",
        )

    def _label(
        self,
        generation: int,
        container: str,
        *,
        status: str | None = None,
        spinner: str | None = None,
    ) -> None:
        if self._is_current(generation):
            self.view.set_panel_label(
                Panel.RESOURCES, container=container, status=status, spinner=spinner
            )


__all__ = [
    "StatsController",
]
