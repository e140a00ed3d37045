"""Display formatting helpers for durations, quantities and timestamps."""

from __future__ import annotations

import re
from datetime import datetime, timezone

_FRACTION_PATTERN = re.compile(r"\.(\d+)")

_BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC3339 timestamp as emitted by the Kubernetes API.

    Sub-second precision beyond microseconds (kubelet emits nanoseconds) is
    truncated so ``datetime.fromisoformat`` accepts it.

    Args:
        value: Timestamp such as ``2024-05-01T10:00:00.123456789Z``.

    Returns:
        Timezone-aware datetime, or None when the value is empty or invalid.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_PATTERN.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_age(start: datetime | None, now: datetime | None = None) -> str:
    """Format the elapsed time since ``start`` the way kubectl does.

    Examples: ``45s``, ``3m12s``, ``2h5m``, ``4d3h``. Start times in the
    future (clock skew) clamp to ``0s``.
    """
    if start is None:
        return ""
    now = now or datetime.now(timezone.utc)
    seconds = max(0, int((now - start).total_seconds()))

    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    if days:
        return f"{days}d{hours}h" if hours else f"{days}d"
    if hours:
        return f"{hours}h{minutes}m" if minutes else f"{hours}h"
    if minutes:
        return f"{minutes}m{seconds}s" if seconds else f"{minutes}m"
    return f"{seconds}s"


def format_clock(moment: datetime | None) -> str:
    """Render a timestamp as a local ``HH:MM:SS`` axis label."""
    if moment is None:
        return ""
    return moment.astimezone().strftime("%H:%M:%S")


def format_bytes(value: float) -> str:
    """Format a byte count with binary units."""
    size = float(value)
    for unit in _BYTE_UNITS[:-1]:
        if abs(size) < 1024:
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}{_BYTE_UNITS[-1]}"


def format_millicores(value: float) -> str:
    """Format a millicore rate (``250m``, ``1.50``)."""
    if value >= 1000:
        return f"{value / 1000:.2f}"
    return f"{value:.0f}m"


__all__ = [
    "format_age",
    "format_bytes",
    "format_clock",
    "format_millicores",
    "parse_timestamp",
]
