"""Resume cursor of a followed container log."""

from __future__ import annotations

import re
from dataclasses import dataclass

_SECOND_PRECISION = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


@dataclass
class LogCursor:
    """Last timestamp seen on a log stream.

    The API server resumes ``sinceTime`` at whole-second precision, so after
    a reconnect every line in that second may be replayed. ``since_prefix``
    is the second-precision prefix those replayed lines share.
    """

    last_timestamp: str | None = None
    since_prefix: str | None = None

    def advance(self, timestamp: str) -> None:
        if timestamp:
            self.last_timestamp = timestamp

    def resume(self) -> LogCursor:
        """Cursor for the next connection, resuming from the last timestamp."""
        if not self.last_timestamp:
            return LogCursor()
        return LogCursor(
            last_timestamp=self.last_timestamp,
            since_prefix=second_prefix(self.last_timestamp),
        )


def second_prefix(timestamp: str) -> str:
    """Strip the sub-second part of an RFC3339 timestamp."""
    match = _SECOND_PRECISION.match(timestamp)
    if match:
        return match.group(0)
    return timestamp.split(".", 1)[0]


__all__ = [
    "LogCursor",
    "second_prefix",
]
