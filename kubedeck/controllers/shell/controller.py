"""Remote shell sessions.

One session per ``(namespace, pod, container)``. Opening a session that is
already open focuses its tab; if its exec failed, the shell is opened again
in that tab. While a session is open, a dedicated watch on its pod updates
the tab label when the pod starts terminating or is deleted.
Everything a session starts lives under ``terminal.<session id>``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from contextlib import aclosing
from dataclasses import dataclass, field
from typing import Any, Protocol

from kubedeck.constants.enums import PodStatus, WatchEventType
from kubedeck.constants.values import KEY_SEPARATOR, KEY_TERMINAL
from kubedeck.controllers.cluster.client import ClusterClient, ExecChannel
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.models.core.pod_mirror import WatchEvent
from kubedeck.models.state.app_settings import AppSettings
from kubedeck.utils.cancellations import CancellationRegistry
from kubedeck.utils.task_pipeline import AsyncOperation, until

logger = logging.getLogger(__name__)


class SessionTabs(Protocol):
    """Tab container hosting one pane per remote shell."""

    def select(self, session_id: str) -> bool:
        """Focus the tab of ``session_id``; False if there is none."""
        ...

    def add(self, session_id: str, name: str) -> None: ...

    def attach(self, session_id: str, channel: ExecChannel) -> None:
        """Start pumping ``channel`` into the session's pane."""
        ...

    def remove(self, session_id: str) -> None: ...

    def set_label(
        self,
        session_id: str,
        title: str,
        *,
        status: str | None = None,
        spinner: str | None = None,
    ) -> None: ...


def session_id(namespace: str, pod: str, container: str) -> str:
    return f"{namespace}-{pod}-{container}"


@dataclass
class ShellSession:
    """State of one remote shell."""

    id: str
    namespace: str
    pod: str
    container: str
    channel: ExecChannel | None = field(default=None, repr=False)
    status: str | None = None
    failed: bool = False

    @property
    def title(self) -> str:
        return f"{self.namespace}/{self.pod}/{self.container}"

    @property
    def registry_key(self) -> str:
        # pod names may contain dots, which would nest registry keys
        return KEY_SEPARATOR.join((KEY_TERMINAL, self.id.replace(KEY_SEPARATOR, "_")))


class ExecSessionManager:
    """Opens, deduplicates and tears down remote shell sessions."""

    def __init__(
        self,
        client: ClusterClient,
        registry: CancellationRegistry,
        tabs: SessionTabs,
        settings: AppSettings | None = None,
    ) -> None:
        self.client = client
        self.registry = registry
        self.tabs = tabs
        self.settings = settings or AppSettings()
        self._sessions: dict[str, ShellSession] = {}
        self._closing: set[asyncio.Future[Any]] = set()

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __iter__(self) -> Iterator[ShellSession]:
        return iter(list(self._sessions.values()))

    def get(self, session_id: str) -> ShellSession | None:
        return self._sessions.get(session_id)

    def open(self, pod: PodRecord, container: str) -> ShellSession:
        """Open a shell into ``container``, or focus the existing one."""
        sid = session_id(pod.namespace, pod.name, container)
        existing = self._sessions.get(sid)
        if existing is not None:
            self.tabs.select(sid)
            if existing.failed:
                self._retry(existing, pod)
            return existing

        session = ShellSession(id=sid, namespace=pod.namespace, pod=pod.name, container=container)
        self._sessions[sid] = session
        self.tabs.add(sid, container)
        self._connect(session, pod)
        return session

    def _retry(self, session: ShellSession, pod: PodRecord) -> None:
        """Reconnect a session whose exec failed, reusing its tab."""
        logger.debug("Retrying remote shell %s", session.title)
        self.registry.run(session.registry_key)
        session.failed = False
        session.status = None
        self._connect(session, pod)

    def _connect(self, session: ShellSession, pod: PodRecord) -> None:
        sid = session.id
        container = session.container
        opening = AsyncOperation.spawn(
            self.client.exec(
                pod.namespace,
                pod.name,
                container=container,
                command=list(self.settings.shell_command),
            ),
            name=f"exec-{sid}",
        )
        self.registry.add(session.registry_key, opening.cancel)
        driver = (
            until(opening)
            .spin(lambda frame, _elapsed: self._label(session, spinner=frame))
            .then(lambda channel: self._on_opened(session, channel, pod))
            .release(self._close_channel)
            .catch(lambda error: self._on_open_failed(session, error))
            .start(name=f"exec-open-{sid}")
        )
        self.registry.add(session.registry_key, driver.cancel)

    def close_session(self, sid: str) -> None:
        """Tear down a session: its pod watch, its channel and its tab."""
        session = self._sessions.pop(sid, None)
        if session is None:
            return
        logger.debug("Closing remote shell %s", session.title)
        self.registry.run(session.registry_key)
        self.tabs.remove(sid)

    def close_all(self) -> None:
        for session in list(self._sessions.values()):
            self.close_session(session.id)

    def _on_opened(self, session: ShellSession, channel: ExecChannel, pod: PodRecord) -> None:
        if session.id not in self._sessions:
            self._close_channel(channel)
            return
        session.channel = channel
        self.tabs.attach(session.id, channel)
        self._label(session)
        logger.info("Remote shell into %s ...", session.title)

        key = session.registry_key
        self.registry.add(key, lambda: self._close_channel(channel))
        watcher = AsyncOperation.spawn(self.watch_pod(session, pod), name=f"exec-watch-{session.id}")
        self.registry.add(key, watcher.cancel)
        waiter = AsyncOperation.spawn(self._wait_closed(session, channel), name=f"exec-wait-{session.id}")
        self.registry.add(key, waiter.cancel)

    def _on_open_failed(self, session: ShellSession, error: BaseException) -> None:
        logger.error("Error while opening remote shell into %s: %s", session.title, error)
        if session.id in self._sessions:
            session.failed = True
            session.status = str(error)
            self._label(session)

    async def watch_pod(self, session: ShellSession, pod: PodRecord) -> None:
        """Follow the session's pod to flag it terminating or deleted."""
        try:
            stream = await self.client.watch_pod(pod.namespace, pod.name, pod.resource_version)
            async with aclosing(stream):
                async for data in stream:
                    self.handle_pod_event(session, WatchEvent.from_dict(data))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug("Pod watch of remote shell %s ended: %s", session.title, e)

    def handle_pod_event(self, session: ShellSession, event: WatchEvent) -> None:
        if event.pod is None or event.pod.name != session.pod:
            return
        if event.type is WatchEventType.MODIFIED and event.pod.is_terminating:
            session.status = PodStatus.TERMINATING.value
        elif event.type is WatchEventType.DELETED:
            session.status = PodStatus.DELETED.value
        else:
            return
        self._label(session)

    async def _wait_closed(self, session: ShellSession, channel: ExecChannel) -> None:
        code = await channel.wait_closed()
        logger.debug("Remote shell %s exited with code %s", session.title, code)
        self.close_session(session.id)

    def _close_channel(self, channel: ExecChannel) -> None:
        task = asyncio.ensure_future(channel.close())
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    def _label(self, session: ShellSession, *, spinner: str | None = None) -> None:
        if session.id in self._sessions:
            self.tabs.set_label(session.id, session.title, status=session.status, spinner=spinner)


__all__ = [
    "ExecSessionManager",
    "SessionTabs",
    "ShellSession",
    "session_id",
]
