"""Tests for display formatting helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kubedeck.utils.formatting import (
    format_age,
    format_bytes,
    format_clock,
    format_millicores,
    parse_timestamp,
)

START = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.mark.unit
class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_nanosecond_precision_is_truncated(self) -> None:
        """Kubelet timestamps carry nanoseconds."""
        parsed = parse_timestamp("2024-05-01T10:00:00.123456789Z")
        assert parsed == datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)

    def test_short_fraction_is_padded(self) -> None:
        """Milliseconds are read as milliseconds."""
        parsed = parse_timestamp("2024-05-01T10:00:00.5Z")
        assert parsed is not None
        assert parsed.microsecond == 500000

    def test_whole_seconds(self) -> None:
        """Plain RFC3339 timestamps are timezone aware."""
        assert parse_timestamp("2024-05-01T10:00:00Z") == START

    @pytest.mark.parametrize("value", [None, "", "yesterday"])
    def test_invalid_values(self, value: str | None) -> None:
        """Empty or invalid values give None."""
        assert parse_timestamp(value) is None


@pytest.mark.unit
class TestFormatAge:
    """Tests for format_age."""

    @pytest.mark.parametrize(
        ("elapsed", "expected"),
        [
            (timedelta(seconds=45), "45s"),
            (timedelta(minutes=3, seconds=12), "3m12s"),
            (timedelta(minutes=3), "3m"),
            (timedelta(hours=2, minutes=5, seconds=9), "2h5m"),
            (timedelta(hours=2), "2h"),
            (timedelta(days=4, hours=3, minutes=1), "4d3h"),
            (timedelta(days=4), "4d"),
        ],
    )
    def test_compact_durations(self, elapsed: timedelta, expected: str) -> None:
        """Two most significant units, dropping a zero remainder."""
        assert format_age(START, START + elapsed) == expected

    def test_future_start_clamps_to_zero(self) -> None:
        """Clock skew never produces a negative age."""
        assert format_age(START, START - timedelta(seconds=30)) == "0s"

    def test_missing_start(self) -> None:
        """Pods without a start time show no age."""
        assert format_age(None) == ""


@pytest.mark.unit
class TestQuantities:
    """Tests for byte, millicore and clock formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (512, "512B"),
            (1536, "1.5KiB"),
            (3 * 1024**2, "3.0MiB"),
            (2 * 1024**3, "2.0GiB"),
        ],
    )
    def test_format_bytes(self, value: float, expected: str) -> None:
        """Binary units with one decimal."""
        assert format_bytes(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(250, "250m"), (0, "0m"), (1500, "1.50")],
    )
    def test_format_millicores(self, value: float, expected: str) -> None:
        """Millicores below one core, cores above."""
        assert format_millicores(value) == expected

    def test_format_clock(self) -> None:
        """Axis labels are local HH:MM:SS."""
        label = format_clock(START)
        assert label == START.astimezone().strftime("%H:%M:%S")
        assert format_clock(None) == ""
