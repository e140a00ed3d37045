"""Interface of the cluster client consumed by the dashboard controllers.

Every call is a coroutine. Awaiting a streaming call opens the stream and
returns an async iterator that must be released with ``aclose()``; wrapping
the coroutine in :class:`~kubedeck.utils.task_pipeline.AsyncOperation`
provides the pending operation and its independent cancel handle.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Any, Protocol


class EventStream(Protocol):
    """Watch stream of ``{"type": ..., "object": {...}}`` events."""

    def __aiter__(self) -> AsyncIterator[dict[str, Any]]: ...

    async def aclose(self) -> None: ...


class ByteStream(Protocol):
    """Raw byte chunks of a followed log."""

    def __aiter__(self) -> AsyncIterator[bytes]: ...

    async def aclose(self) -> None: ...


class ExecChannel(Protocol):
    """Bidirectional byte pipe to a remote process."""

    async def read(self) -> bytes:
        """Return the next output chunk, ``b""`` once the remote side closed."""
        ...

    async def write(self, data: bytes) -> None: ...

    async def close(self) -> None: ...

    async def wait_closed(self) -> int | None:
        """Wait for the remote process to exit and return its exit code."""
        ...


class ClusterClient(Protocol):
    """Read-only access to one cluster, plus remote exec."""

    async def get_pods(self, namespace: str) -> dict[str, Any]:
        """Return ``{"resourceVersion": str, "items": [Pod, ...]}``."""
        ...

    async def get_pod(self, namespace: str, name: str) -> dict[str, Any]: ...

    async def watch_pods(self, namespace: str, resource_version: str) -> EventStream: ...

    async def watch_pod(
        self, namespace: str, name: str, resource_version: str | None = None
    ) -> EventStream: ...

    async def follow_log(
        self,
        namespace: str,
        name: str,
        *,
        container: str,
        since_time: str | None = None,
    ) -> ByteStream: ...

    async def container_stats(
        self, node: str, namespace: str, pod: str, uid: str, container: str
    ) -> dict[str, Any]:
        """Return ``{"stats": [sample, ...], "spec": {...}}``."""
        ...

    async def exec(
        self,
        namespace: str,
        name: str,
        *,
        container: str,
        command: Sequence[str],
    ) -> ExecChannel: ...


__all__ = [
    "ByteStream",
    "ClusterClient",
    "EventStream",
    "ExecChannel",
]
