"""Tests for the log chunk parser and the resume cursor."""

from __future__ import annotations

from collections import deque

import pytest

from kubedeck.controllers.logs.parsers.log_parser import (
    LogLine,
    LogParser,
    parse_line,
    should_suppress,
)
from kubedeck.models.logs.log_cursor import LogCursor, second_prefix

T1 = "2024-05-01T10:00:00.100000000Z"
T2 = "2024-05-01T10:00:00.200000000Z"
T3 = "2024-05-01T10:00:01.000000000Z"


@pytest.mark.unit
class TestLogParser:
    """Tests for LogParser."""

    def test_partial_line_is_carried_over(self) -> None:
        """A line split across chunks is emitted once complete."""
        parser = LogParser()

        assert parser.feed(f"{T1} hel".encode()) == []
        assert parser.feed(f"lo\n{T2} world\n".encode()) == [
            LogLine(T1, "hello"),
            LogLine(T2, "world"),
        ]

    def test_any_line_break(self) -> None:
        """CRLF, CR and LF all end a line; blank lines are dropped."""
        parser = LogParser()
        lines = parser.feed(f"{T1} a\r\n\r\n{T2} b\r{T3} c\n".encode())
        assert [line.content for line in lines] == ["a", "b", "c"]

    def test_flush_returns_trailing_line(self) -> None:
        """The unterminated remainder is returned by flush()."""
        parser = LogParser()
        parser.feed(f"{T1} tail".encode())

        assert parser.flush() == [LogLine(T1, "tail")]
        assert parser.flush() == []

    def test_invalid_utf8_is_replaced(self) -> None:
        """Undecodable bytes never break the stream."""
        lines = LogParser().feed(b"ts caf\xff\n")
        assert lines == [LogLine("ts", "caf\ufffd")]

    def test_character_split_across_chunks(self) -> None:
        """A multibyte character cut by the read size is decoded whole."""
        data = f"{T1} héllo\n".encode()
        cut = data.index("é".encode()) + 1
        parser = LogParser()

        assert parser.feed(data[:cut]) == []
        assert parser.feed(data[cut:]) == [LogLine(T1, "héllo")]

    def test_truncated_character_at_flush(self) -> None:
        """An incomplete character left at the end of the stream is replaced."""
        parser = LogParser()
        parser.feed(f"{T1} caf".encode() + "é".encode()[:1])

        assert parser.flush() == [LogLine(T1, "caf�")]

    def test_parse_line_without_timestamp(self) -> None:
        """A line without a space is all content."""
        assert parse_line("standalone") == LogLine("", "standalone")
        assert parse_line(f"{T1} with  spaces") == LogLine(T1, "with  spaces")


@pytest.mark.unit
class TestShouldSuppress:
    """Tests for should_suppress."""

    def test_replayed_line_in_resumed_second(self) -> None:
        """Same second and already rendered: dropped."""
        rendered = deque(["hello"])
        assert should_suppress(LogLine(T2, "hello"), "2024-05-01T10:00:00", rendered) is True

    def test_new_content_in_resumed_second(self) -> None:
        """Same second but new content: kept."""
        rendered = deque(["hello"])
        assert should_suppress(LogLine(T2, "other"), "2024-05-01T10:00:00", rendered) is False

    def test_later_second(self) -> None:
        """Lines after the resumed second are always kept."""
        rendered = deque(["hello"])
        assert should_suppress(LogLine(T3, "hello"), "2024-05-01T10:00:00", rendered) is False

    def test_first_connection(self) -> None:
        """Without a resume prefix nothing is suppressed."""
        assert should_suppress(LogLine(T1, "hello"), None, ["hello"]) is False


@pytest.mark.unit
class TestLogCursor:
    """Tests for LogCursor."""

    def test_advance_ignores_empty_timestamps(self) -> None:
        """Lines without timestamps keep the previous position."""
        cursor = LogCursor()
        cursor.advance(T1)
        cursor.advance("")
        assert cursor.last_timestamp == T1

    def test_resume(self) -> None:
        """The next connection starts at the last timestamp."""
        cursor = LogCursor()
        cursor.advance(T2)

        resumed = cursor.resume()

        assert resumed.last_timestamp == T2
        assert resumed.since_prefix == "2024-05-01T10:00:00"

    def test_resume_without_position(self) -> None:
        """Nothing seen yet: start from the beginning."""
        assert LogCursor().resume() == LogCursor()

    def test_second_prefix_fallback(self) -> None:
        """Non-RFC3339 values are cut at the fraction."""
        assert second_prefix("10:00:00.5") == "10:00:00"
