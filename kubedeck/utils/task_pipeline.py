"""Asynchronous task pipeline - the spinner/continuation combinator.

Every streaming and polling call site in the dashboard wraps its pending
operation in a :class:`TaskPipeline`:

    until(opening)
        .spin(lambda frame, elapsed: view.set_label(f"{frame} Logs"))
        .on_cancel(lambda cancel: registry.add("dashboard.pod.logs", cancel))
        .then(on_connected)
        .catch(on_error)
        .start()

Semantics:
- While the wrapped operation is pending, progress callbacks receive a
  rotating spinner frame and the elapsed time in seconds.
- On success the result flows through the ``then`` stages in order. A stage
  may return an :class:`AsyncOperation` or any awaitable, whose result then
  feeds the next stage. A stage only runs if the previous one succeeded.
- If an awaited operation is cancelled by someone else, no further stage and
  no error hook runs; ``on_cancel`` hooks receive that operation's own cancel
  handle so an outer owner can still release it.
- If the pipeline itself is cancelled after an operation already produced its
  result, that result goes to the ``release`` hooks instead of the next stage
  (for example to close a stream nobody will read).
- Failures go to the ``catch`` hooks. Without any hook they propagate to the
  caller of :meth:`TaskPipeline.run`.

The pipeline performs no blocking work; it only suspends while awaiting the
wrapped operations.
"""

from __future__ import annotations

import asyncio
import inspect
import itertools
import logging
from collections.abc import Awaitable, Callable, Generator, Sequence
from typing import Any, Generic, TypeVar

from kubedeck.constants.timeouts import SPINNER_INTERVAL
from kubedeck.constants.values import SPINNER_FRAMES

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProgressCallback = Callable[[str, float], Any]
CancelHook = Callable[[Callable[[], None]], Any]
ErrorHook = Callable[[BaseException], Any]


class AsyncOperation(Generic[T]):
    """A pending asyncio task paired with the handle that cancels it.

    Attributes:
        task: The future tracking the operation.
    """

    __slots__ = ("_on_cancel", "task")

    def __init__(
        self,
        task: asyncio.Future[T],
        on_cancel: Callable[[], Any] | None = None,
    ) -> None:
        self.task = task
        self._on_cancel = on_cancel

    @classmethod
    def spawn(
        cls,
        awaitable: Awaitable[T],
        *,
        name: str | None = None,
        on_cancel: Callable[[], Any] | None = None,
    ) -> AsyncOperation[T]:
        """Schedule ``awaitable`` on the running loop and wrap it.

        Args:
            awaitable: Coroutine or future to run.
            name: Optional task name for debugging.
            on_cancel: Extra release action run when the operation is cancelled
                (for example closing a subprocess).
        """
        task = asyncio.ensure_future(awaitable)
        if name and isinstance(task, asyncio.Task):
            task.set_name(name)
        return cls(task, on_cancel)

    def cancel(self) -> None:
        """Request cancellation. Safe to call more than once."""
        if self._on_cancel is not None:
            release, self._on_cancel = self._on_cancel, None
            release()
        self.task.cancel()

    def done(self) -> bool:
        return self.task.done()

    def cancelled(self) -> bool:
        return self.task.cancelled()

    def add_done_callback(self, callback: Callable[[AsyncOperation[T]], Any]) -> None:
        """Invoke ``callback(self)`` once the operation settles."""
        self.task.add_done_callback(lambda _task: callback(self))

    def __await__(self) -> Generator[Any, None, T]:
        return self.task.__await__()


class _Cancelled(Exception):
    """Internal signal: an awaited operation was cancelled by its owner."""


class TaskPipeline:
    """Wraps one pending operation with progress, success, error and cancel hooks."""

    def __init__(
        self,
        operation: AsyncOperation[Any],
        *,
        interval: float = SPINNER_INTERVAL,
        frames: Sequence[str] = SPINNER_FRAMES,
    ) -> None:
        self._operation = operation
        self._interval = interval
        self._frames = tuple(frames)
        self._progress_hooks: list[ProgressCallback] = []
        self._cancel_hooks: list[CancelHook] = []
        self._stages: list[Callable[[Any], Any]] = []
        self._error_hooks: list[ErrorHook] = []
        self._release_hooks: list[Callable[[Any], Any]] = []

    @property
    def operation(self) -> AsyncOperation[Any]:
        return self._operation

    def spin(self, callback: ProgressCallback) -> TaskPipeline:
        """Call ``callback(frame, elapsed)`` periodically while the operation is pending."""
        self._progress_hooks.append(callback)
        return self

    def on_cancel(self, callback: CancelHook) -> TaskPipeline:
        """Receive the cancel handle of an operation cancelled while pending."""
        self._cancel_hooks.append(callback)
        return self

    def release(self, callback: Callable[[Any], Any]) -> TaskPipeline:
        """Receive a result that arrived after the pipeline was cancelled."""
        self._release_hooks.append(callback)
        return self

    def then(self, callback: Callable[[Any], Any]) -> TaskPipeline:
        """Append a success stage."""
        self._stages.append(callback)
        return self

    def catch(self, callback: ErrorHook) -> TaskPipeline:
        """Handle a failure of the operation or of any stage."""
        self._error_hooks.append(callback)
        return self

    async def run(self) -> Any:
        """Drive the pipeline to completion and return the last stage result.

        Returns:
            The final result, or None when an operation was cancelled or a
            failure was handled by an error hook.

        Raises:
            Exception: The failure, when no error hook is registered.
        """
        try:
            result = await self._settle(self._operation, spin=True)
            for stage in self._stages:
                result = stage(result)
                if isinstance(result, AsyncOperation):
                    result = await self._settle(result)
                elif inspect.isawaitable(result):
                    result = await self._settle(AsyncOperation.spawn(result))
        except _Cancelled:
            return None
        except Exception as error:
            if not self._error_hooks:
                raise
            for hook in self._error_hooks:
                hook(error)
            return None
        return result

    def start(self, *, name: str | None = None) -> AsyncOperation[Any]:
        """Run the pipeline in the background.

        Returns:
            An operation whose cancel handle stops the pipeline and the
            operation it is currently waiting on.
        """
        driver = AsyncOperation.spawn(self.run(), name=name)
        driver.add_done_callback(_log_unhandled_failure)
        return driver

    async def _settle(self, operation: AsyncOperation[Any], *, spin: bool = False) -> Any:
        spinner = self._start_spinner() if spin else None
        try:
            await asyncio.wait((operation.task,))
        except asyncio.CancelledError:
            if operation.done():
                self._release(operation)
            else:
                operation.cancel()
            raise
        finally:
            if spinner is not None:
                spinner.cancel()

        if operation.cancelled():
            for hook in self._cancel_hooks:
                hook(operation.cancel)
            raise _Cancelled
        return operation.task.result()

    def _release(self, operation: AsyncOperation[Any]) -> None:
        if operation.cancelled() or operation.task.exception() is not None:
            return
        result = operation.task.result()
        for hook in self._release_hooks:
            try:
                hook(result)
            except Exception:
                logger.debug("Release hook failed", exc_info=True)

    def _start_spinner(self) -> asyncio.Task[None] | None:
        if not self._progress_hooks or not self._frames:
            return None
        return asyncio.create_task(self._spin())

    async def _spin(self) -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()
        for frame in itertools.cycle(self._frames):
            elapsed = loop.time() - started
            try:
                for hook in self._progress_hooks:
                    hook(frame, elapsed)
            except Exception:
                logger.debug("Progress callback failed, stopping spinner", exc_info=True)
                return
            await asyncio.sleep(self._interval)


def until(
    operation: AsyncOperation[Any] | Awaitable[Any],
    *,
    interval: float = SPINNER_INTERVAL,
) -> TaskPipeline:
    """Build a pipeline around a pending operation or a bare awaitable."""
    if not isinstance(operation, AsyncOperation):
        operation = AsyncOperation.spawn(operation)
    return TaskPipeline(operation, interval=interval)


def _log_unhandled_failure(operation: AsyncOperation[Any]) -> None:
    if operation.cancelled():
        return
    error = operation.task.exception()
    if error is not None:
        logger.error("Background task failed: %s", error, exc_info=error)


__all__ = [
    "AsyncOperation",
    "CancelHook",
    "ErrorHook",
    "ProgressCallback",
    "TaskPipeline",
    "until",
]
