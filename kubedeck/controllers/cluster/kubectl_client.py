"""Cluster client backed by the ``kubectl`` binary.

One-shot reads run ``kubectl get --raw`` in a worker thread; watches, log
follows and remote shells keep a ``kubectl`` subprocess open and read its
stdout from the event loop.
"""

from __future__ import annotations

import asyncio
import json
import logging
import subprocess
from collections.abc import AsyncIterator, Sequence
from typing import Any
from urllib.parse import quote, urlencode

from kubedeck.constants.defaults import KUBECTL_BINARY_DEFAULT
from kubedeck.constants.limits import STDERR_TAIL_BYTES, STREAM_LINE_LIMIT, STREAM_READ_CHUNK
from kubedeck.constants.timeouts import KUBECTL_COMMAND_TIMEOUT, KUBECTL_CONFIG_TIMEOUT
from kubedeck.controllers.cluster.errors import ClusterClientError, error_from_stderr

logger = logging.getLogger(__name__)


class _ProcessStream:
    """Async iterator over the stdout of a streaming kubectl process."""

    def __init__(self, process: asyncio.subprocess.Process, *, lines: bool) -> None:
        self._process = process
        self._lines = lines
        self._closed = False
        self._stderr = bytearray()
        # read stderr while the process runs so a full pipe never blocks kubectl
        self._stderr_reader: asyncio.Task[None] | None = None
        if process.stderr is not None:
            self._stderr_reader = asyncio.create_task(self._drain_stderr(process.stderr))

    async def _drain_stderr(self, stderr: asyncio.StreamReader) -> None:
        while chunk := await stderr.read(STREAM_READ_CHUNK):
            self._stderr += chunk
            del self._stderr[:-STDERR_TAIL_BYTES]

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Any]:
        stdout = self._process.stdout
        if stdout is None:
            return
        while True:
            if self._lines:
                chunk = await stdout.readline()
            else:
                chunk = await stdout.read(STREAM_READ_CHUNK)
            if not chunk:
                break
            if self._lines:
                text = chunk.strip()
                if not text:
                    continue
                yield json.loads(text)
            else:
                yield chunk
        await self._raise_for_exit()

    async def _raise_for_exit(self) -> None:
        returncode = await self._process.wait()
        if returncode == 0 or self._closed:
            return
        if self._stderr_reader is not None:
            await self._stderr_reader
        raise error_from_stderr(bytes(self._stderr).decode("utf-8", errors="replace"))

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await _terminate(self._process)
        if self._stderr_reader is not None:
            self._stderr_reader.cancel()


class KubectlExecChannel:
    """Remote shell running as ``kubectl exec -i``."""

    def __init__(self, process: asyncio.subprocess.Process) -> None:
        self._process = process

    async def read(self) -> bytes:
        if self._process.stdout is None:
            return b""
        return await self._process.stdout.read(STREAM_READ_CHUNK)

    async def write(self, data: bytes) -> None:
        stdin = self._process.stdin
        if stdin is None or stdin.is_closing():
            return
        stdin.write(data)
        await stdin.drain()

    async def close(self) -> None:
        if self._process.stdin is not None and not self._process.stdin.is_closing():
            self._process.stdin.close()
        await _terminate(self._process)

    async def wait_closed(self) -> int | None:
        return await self._process.wait()


class KubectlClient:
    """:class:`~kubedeck.controllers.cluster.client.ClusterClient` using kubectl."""

    def __init__(
        self,
        context: str | None = None,
        kubectl_binary: str = KUBECTL_BINARY_DEFAULT,
        timeout: int = KUBECTL_COMMAND_TIMEOUT,
    ) -> None:
        self.context = context or None
        self.kubectl_binary = kubectl_binary
        self.timeout = timeout

    @staticmethod
    def resolve_current_namespace(
        context: str | None = None,
        kubectl_binary: str = KUBECTL_BINARY_DEFAULT,
        timeout_seconds: int = KUBECTL_CONFIG_TIMEOUT,
    ) -> str | None:
        """Resolve the namespace of the active (or given) kubectl context."""
        cmd = [kubectl_binary]
        if context:
            cmd.extend(["--context", context])
        cmd.extend(["config", "view", "--minify", "-o", "jsonpath={..namespace}"])
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=max(1, timeout_seconds),
            )
        except (OSError, subprocess.TimeoutExpired):
            return None

        if result.returncode != 0:
            return None
        resolved = (result.stdout or "").strip()
        return resolved or None

    # ------------------------------------------------------------------
    # One-shot reads
    # ------------------------------------------------------------------

    async def get_pods(self, namespace: str) -> dict[str, Any]:
        pod_list = await self._get_json(f"/api/v1/namespaces/{quote(namespace)}/pods")
        return {
            "resourceVersion": str((pod_list.get("metadata") or {}).get("resourceVersion", "")),
            "items": list(pod_list.get("items") or []),
        }

    async def get_pod(self, namespace: str, name: str) -> dict[str, Any]:
        return await self._get_json(
            f"/api/v1/namespaces/{quote(namespace)}/pods/{quote(name)}"
        )

    async def container_stats(
        self, node: str, namespace: str, pod: str, uid: str, container: str
    ) -> dict[str, Any]:
        path = "/".join(
            [
                "/api/v1/nodes",
                quote(node),
                "proxy/stats",
                quote(namespace),
                quote(pod),
                quote(uid),
                quote(container),
            ]
        )
        return await self._get_json(path)

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    async def watch_pods(self, namespace: str, resource_version: str) -> _ProcessStream:
        query = {"watch": "true"}
        if resource_version:
            query["resourceVersion"] = resource_version
        path = f"/api/v1/namespaces/{quote(namespace)}/pods?{urlencode(query)}"
        return _ProcessStream(await self._open(("get", "--raw", path)), lines=True)

    async def watch_pod(
        self, namespace: str, name: str, resource_version: str | None = None
    ) -> _ProcessStream:
        query = {"watch": "true", "fieldSelector": f"metadata.name={name}"}
        if resource_version:
            query["resourceVersion"] = resource_version
        path = f"/api/v1/namespaces/{quote(namespace)}/pods?{urlencode(query)}"
        return _ProcessStream(await self._open(("get", "--raw", path)), lines=True)

    async def follow_log(
        self,
        namespace: str,
        name: str,
        *,
        container: str,
        since_time: str | None = None,
    ) -> _ProcessStream:
        query = {"container": container, "follow": "true", "timestamps": "true"}
        if since_time:
            query["sinceTime"] = since_time
        path = (
            f"/api/v1/namespaces/{quote(namespace)}/pods/{quote(name)}/log"
            f"?{urlencode(query)}"
        )
        return _ProcessStream(await self._open(("get", "--raw", path)), lines=False)

    async def exec(
        self,
        namespace: str,
        name: str,
        *,
        container: str,
        command: Sequence[str],
    ) -> KubectlExecChannel:
        args = ("exec", "-i", "-n", namespace, name, "-c", container, "--", *command)
        process = await self._open(args, interactive=True)
        return KubectlExecChannel(process)

    # ------------------------------------------------------------------
    # Process helpers
    # ------------------------------------------------------------------

    def _command(self, args: Sequence[str]) -> list[str]:
        cmd = [self.kubectl_binary]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        return cmd

    def _run_kubectl_sync(self, args: tuple[str, ...]) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        result = subprocess.run(
            self._command(args), capture_output=True, text=True, timeout=self.timeout
        )
        if result.returncode != 0:
            raise error_from_stderr(result.stderr or "")
        return result.stdout

    async def _get_json(self, path: str) -> dict[str, Any]:
        logger.debug("kubectl get --raw %s", path)
        try:
            output = await asyncio.to_thread(self._run_kubectl_sync, ("get", "--raw", path))
        except subprocess.TimeoutExpired as e:
            raise ClusterClientError(f"kubectl timed out after {self.timeout}s: {path}") from e
        except OSError as e:
            raise ClusterClientError(f"Cannot run {self.kubectl_binary}: {e}") from e
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise ClusterClientError(f"Invalid JSON from {path}: {e}") from e

    async def _open(
        self, args: Sequence[str], *, interactive: bool = False
    ) -> asyncio.subprocess.Process:
        cmd = self._command(args)
        logger.debug("Starting %s", " ".join(cmd))
        try:
            return await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE if interactive else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT if interactive else asyncio.subprocess.PIPE,
                limit=STREAM_LINE_LIMIT,
            )
        except OSError as e:
            raise ClusterClientError(f"Cannot run {self.kubectl_binary}: {e}") from e


async def _terminate(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    try:
        process.terminate()
    except ProcessLookupError:
        return
    await process.wait()


__all__ = [
    "KubectlClient",
    "KubectlExecChannel",
]
