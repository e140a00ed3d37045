"""Event-loop timers used by the controllers.

- Interval: repeating callback (pod ages refresh, stats polling)
- Debouncer: trailing-edge coalescing of bursty triggers (log flushing)

Both schedule on the running asyncio loop with ``call_later`` and expose a
``cancel()`` method suitable for registration in the cancellation registry.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Interval:
    """Invoke ``callback`` every ``interval`` seconds until cancelled."""

    def __init__(
        self,
        interval: float,
        callback: Callable[[], Any],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._interval = interval
        self._callback = callback
        self._loop = loop or asyncio.get_running_loop()
        self._handle: asyncio.TimerHandle | None = None
        self._cancelled = False

    @property
    def active(self) -> bool:
        return self._handle is not None and not self._cancelled

    def start(self) -> Interval:
        """Schedule the first tick and return self."""
        if not self._cancelled and self._handle is None:
            self._handle = self._loop.call_later(self._interval, self._tick)
        return self

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        if self._cancelled:
            return
        self._handle = self._loop.call_later(self._interval, self._tick)
        try:
            self._callback()
        except Exception:
            logger.exception("Interval callback failed")


class Debouncer:
    """Trailing-edge debounce with an optional maximum wait.

    Each call restarts the quiet-period timer; the callback fires once no call
    happened for ``wait`` seconds. With ``max_wait`` set, a continuous burst
    still fires at least every ``max_wait`` seconds.
    """

    def __init__(
        self,
        callback: Callable[[], Any],
        wait: float,
        *,
        max_wait: float | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._callback = callback
        self._wait = wait
        self._max_wait = max_wait
        self._loop = loop or asyncio.get_running_loop()
        self._handle: asyncio.TimerHandle | None = None
        self._burst_started: float | None = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def __call__(self) -> None:
        now = self._loop.time()
        if self._burst_started is None:
            self._burst_started = now
        self._pending = True
        if self._handle is not None:
            self._handle.cancel()
        delay = self._wait
        if self._max_wait is not None:
            remaining = self._burst_started + self._max_wait - now
            delay = max(0.0, min(delay, remaining))
        self._handle = self._loop.call_later(delay, self._fire)

    def cancel(self) -> None:
        """Drop any pending invocation."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._burst_started = None
        self._pending = False

    def flush(self) -> None:
        """Cancel the timer and run the pending invocation now, if any."""
        if self._pending:
            if self._handle is not None:
                self._handle.cancel()
            self._fire()

    def _fire(self) -> None:
        self._handle = None
        self._burst_started = None
        if not self._pending:
            return
        self._pending = False
        self._callback()


__all__ = [
    "Debouncer",
    "Interval",
]
