"""Hierarchical cancellation registry.

Every background task the dashboard starts (streams, polls, timers) registers
a zero-argument cleanup action under a dot-delimited key such as
``dashboard.pod.logs``. Running a key releases everything registered under it
and under every descendant key, so tearing down ``dashboard.pod`` releases the
log and stats pipelines of the current selection in one call.

Usage:
    from kubedeck.utils.cancellations import CancellationRegistry

    registry = CancellationRegistry()
    registry.add("dashboard.pod.logs", task.cancel)
    registry.replace("dashboard.pod.stats.poll", poll.cancel)
    registry.run("dashboard.pod")
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from kubedeck.constants.values import KEY_SEPARATOR

logger = logging.getLogger(__name__)

Cleanup = Callable[[], Any]


class CancellationRegistry:
    """Prefix-indexed mapping from keys to ordered cleanup actions.

    Guarantees:
    - Each registration is invoked at most once: entries are detached from
      the registry before their cleanup runs.
    - A failing cleanup never aborts the sweep of the remaining ones.
    - After ``run(key)`` no entry for ``key`` or its descendants remains.
    """

    def __init__(self, separator: str = KEY_SEPARATOR) -> None:
        self._separator = separator
        self._entries: dict[str, list[Cleanup]] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return sum(len(actions) for actions in self._entries.values())

    def keys(self) -> list[str]:
        """Return the keys that currently hold at least one cleanup."""
        return list(self._entries)

    def add(self, key: str, cleanup: Cleanup) -> None:
        """Append a cleanup action under ``key``."""
        self._entries.setdefault(key, []).append(cleanup)

    def replace(self, key: str, cleanup: Cleanup) -> None:
        """Run and drop the actions stored at exactly ``key``, then store ``cleanup``.

        Descendant keys are left untouched. Used by self-rescheduling polls
        where each new request supersedes the previous one.
        """
        previous = self._entries.pop(key, [])
        self._entries[key] = [cleanup]
        self._invoke(key, previous)

    def discard(self, key: str, cleanup: Cleanup) -> bool:
        """Release a single registration without running it.

        Args:
            key: Key the cleanup was registered under.
            cleanup: The registered action (compared by equality).

        Returns:
            True if the registration was found and removed.
        """
        actions = self._entries.get(key)
        if not actions:
            return False
        try:
            actions.remove(cleanup)
        except ValueError:
            return False
        if not actions:
            del self._entries[key]
        return True

    def run(self, key: str) -> None:
        """Invoke and remove every action at ``key`` and at its descendant keys.

        Actions run in key insertion order, then in registration order within
        each key.
        """
        prefix = key + self._separator
        matching = [
            entry_key
            for entry_key in self._entries
            if entry_key == key or entry_key.startswith(prefix)
        ]
        detached = [(entry_key, self._entries.pop(entry_key)) for entry_key in matching]
        for entry_key, actions in detached:
            self._invoke(entry_key, actions)

    def _invoke(self, key: str, actions: list[Cleanup]) -> None:
        for action in actions:
            try:
                action()
            except Exception:
                logger.debug("Cleanup registered under '%s' failed", key, exc_info=True)


__all__ = [
    "CancellationRegistry",
    "Cleanup",
]
