"""Log follow pipeline for the selected container.

Streams the container log with timestamps, batches lines into the log panel
and reconnects when the stream ends, resuming from the last timestamp seen.
Every task it spawns is registered under ``dashboard.pod.logs``.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from contextlib import aclosing
from typing import Any

from kubedeck.constants.enums import Panel, PodStatus
from kubedeck.constants.values import KEY_POD_LOGS
from kubedeck.controllers.base.base_controller import BaseController
from kubedeck.controllers.cluster.client import ByteStream
from kubedeck.controllers.cluster.errors import NotFoundError
from kubedeck.controllers.logs.parsers.log_parser import LogLine, LogParser, should_suppress
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.models.logs.log_cursor import LogCursor
from kubedeck.utils.task_pipeline import AsyncOperation, until
from kubedeck.utils.timers import Debouncer

logger = logging.getLogger(__name__)


class LogFollowController(BaseController):
    """Follows the log of one container for as long as it stays selected."""

    registry_key = KEY_POD_LOGS

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._rendered: deque[str] = deque(maxlen=self.settings.log_buffer_lines)
        self._closing: set[asyncio.Future[Any]] = set()

    def start(self, pod: PodRecord, container: str, generation: int) -> None:
        """Open the log of ``container`` from its beginning."""
        self._rendered = deque(maxlen=self.settings.log_buffer_lines)
        self.connect(pod, container, generation, LogCursor())

    def connect(
        self, pod: PodRecord, container: str, generation: int, cursor: LogCursor
    ) -> None:
        """Open the log stream, starting at ``cursor.last_timestamp`` if set."""
        opening = AsyncOperation.spawn(
            self.client.follow_log(
                pod.namespace,
                pod.name,
                container=container,
                since_time=cursor.last_timestamp,
            ),
            name=f"log-open-{pod.name}-{container}",
        )
        self._track(opening)
        driver = (
            until(opening)
            .spin(lambda frame, _elapsed: self._label(generation, container, spinner=frame))
            .then(lambda stream: self._on_connected(stream, pod, container, generation, cursor))
            .release(self._close_stream)
            .catch(lambda error: self._on_open_failed(error, pod, container, generation))
            .start(name=f"log-follow-{pod.name}-{container}")
        )
        self._track(driver)

    def _on_connected(
        self,
        stream: ByteStream,
        pod: PodRecord,
        container: str,
        generation: int,
        cursor: LogCursor,
    ) -> None:
        if not self._is_current(generation):
            self._close_stream(stream)
            return

        current = self.state.mirror.get(pod.uid) or pod
        status = PodStatus.TERMINATING.value if current.is_terminating else None
        self._label(generation, container, status=status)
        logger.info("Following log for %s/%s/%s ...", pod.namespace, pod.name, container)

        # consume() closes the stream itself unless cancelled before its first step
        def closer() -> None:
            self._close_stream(stream)

        self.registry.add(KEY_POD_LOGS, closer)
        consumer = AsyncOperation.spawn(
            self.consume(stream, pod, container, generation, cursor),
            name=f"log-consume-{pod.name}-{container}",
        )
        self._track(consumer)
        consumer.add_done_callback(lambda _op: self.registry.discard(KEY_POD_LOGS, closer))

    def _on_open_failed(
        self, error: BaseException, pod: PodRecord, container: str, generation: int
    ) -> None:
        if not self._is_current(generation):
            return
        logger.error("Error while opening log of %s/%s/%s: %s", pod.namespace, pod.name, container, error)
        self._label(generation, container, status=str(error))

    async def consume(
        self,
        stream: ByteStream,
        pod: PodRecord,
        container: str,
        generation: int,
        cursor: LogCursor,
    ) -> None:
        """Read the stream until it ends, then reconnect if still relevant."""
        parser = LogParser()
        pending: list[str] = []

        def flush() -> None:
            if pending and self._is_current(generation):
                self.view.append_log_lines(list(pending))
            pending.clear()

        debounce = Debouncer(
            flush,
            self.settings.log_flush_interval,
            max_wait=self.settings.log_flush_max_wait,
        )
        try:
            async with aclosing(stream):
                async for chunk in stream:
                    if not chunk:
                        continue
                    if self._collect(parser.feed(chunk), cursor, pending):
                        debounce()
        except asyncio.CancelledError:
            debounce.cancel()
            raise
        except Exception as e:
            # idle timeouts surface as stream errors
            logger.debug("Log stream of %s/%s ended: %s", pod.name, container, e)

        self._collect(parser.flush(), cursor, pending)
        debounce.cancel()
        flush()

        await self.reconnect(pod, container, generation, cursor)

    async def reconnect(
        self, pod: PodRecord, container: str, generation: int, cursor: LogCursor
    ) -> None:
        """Wait, check the pod is still running, then resume from ``cursor``."""
        await asyncio.sleep(self.settings.log_reconnect_delay)
        if not self._is_current(generation):
            return
        try:
            latest = PodRecord.from_dict(await self.client.get_pod(pod.namespace, pod.name))
        except NotFoundError:
            logger.debug("Pod %s/%s is gone, log follow stopped", pod.namespace, pod.name)
            return
        except Exception as e:
            logger.error("Error while fetching pod %s/%s: %s", pod.namespace, pod.name, e)
            return

        if not self._is_current(generation):
            return
        if latest.uid != pod.uid or not latest.has_running_phase:
            logger.debug("Pod %s/%s is no longer running, log follow stopped", pod.namespace, pod.name)
            return
        self.connect(latest, container, generation, cursor.resume())

    def _collect(self, lines: list[LogLine], cursor: LogCursor, pending: list[str]) -> bool:
        added = False
        for line in lines:
            suppressed = should_suppress(line, cursor.since_prefix, self._rendered)
            cursor.advance(line.timestamp)
            if suppressed:
                continue
            self._rendered.append(line.content)
            pending.append(line.content)
            added = True
        return added

    def _close_stream(self, stream: ByteStream) -> None:
        task = asyncio.ensure_future(stream.aclose())
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    def _track(self, operation: AsyncOperation[Any]) -> None:
        self.registry.add(KEY_POD_LOGS, operation.cancel)
        operation.add_done_callback(lambda op: self.registry.discard(KEY_POD_LOGS, op.cancel))

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
                Panel.LOGS, container=container, status=status, spinner=spinner
            )


__all__ = [
    "LogFollowController",
]
