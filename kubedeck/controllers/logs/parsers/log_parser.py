"""Parser for timestamped container log chunks."""

from __future__ import annotations

import codecs
import re
from collections.abc import Container
from dataclasses import dataclass

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class LogLine:
    """One log line as emitted with ``timestamps=true``."""

    timestamp: str
    content: str


class LogParser:
    """Splits raw log chunks into :class:`LogLine` items.

    A chunk may end in the middle of a line, or of a multibyte character;
    the remainder is kept and prepended to the next chunk.
    """

    def __init__(self) -> None:
        self._partial = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def feed(self, chunk: bytes | str) -> list[LogLine]:
        """Parse ``chunk`` and return the complete, non-blank lines it closes."""
        text = self._decoder.decode(chunk) if isinstance(chunk, bytes) else chunk
        parts = _LINE_BREAK.split(self._partial + text)
        self._partial = parts.pop()
        return [parse_line(part) for part in parts if part.strip()]

    def flush(self) -> list[LogLine]:
        """Return the trailing line left without a line break, if any."""
        partial = self._partial + self._decoder.decode(b"", final=True)
        self._partial = ""
        return [parse_line(partial)] if partial.strip() else []


def parse_line(line: str) -> LogLine:
    """Split a line at the first space into timestamp and content."""
    timestamp, separator, content = line.partition(" ")
    if not separator:
        return LogLine(timestamp="", content=line)
    return LogLine(timestamp=timestamp, content=content)


def should_suppress(line: LogLine, since_prefix: str | None, rendered: Container[str]) -> bool:
    """Whether ``line`` is a replay of an already rendered line.

    After a reconnect from ``sinceTime`` the server replays the lines of the
    resumed second. A line is dropped only if its timestamp starts with that
    second and its content is already on screen.
    """
    if not since_prefix:
        return False
    return line.timestamp.startswith(since_prefix) and line.content in rendered


__all__ = [
    "LogLine",
    "LogParser",
    "parse_line",
    "should_suppress",
]
