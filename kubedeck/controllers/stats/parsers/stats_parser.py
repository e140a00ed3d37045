"""Conversion of container stats responses into graph series."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from kubedeck.models.core.pod_info import ContainerInfo
from kubedeck.models.metrics.container_stats import ContainerStats, GraphSeries
from kubedeck.utils.formatting import format_clock

# Series colours, shared with the graph legend.
STYLE_USAGE = "blue"
STYLE_CACHE = "yellow"
STYLE_LIMIT = "red"
STYLE_USER = "cyan"
STYLE_TOTAL = "blue"
STYLE_RX = "green"
STYLE_TX = "cyan"


def cpu_rates(counters: Sequence[float], seconds: Sequence[float]) -> list[float]:
    """Turn cumulative CPU nanosecond counters into millicore rates.

    For each i > 0: ``(counter[i] - counter[i-1]) / 1e6 / (t[i] - t[i-1])``.
    A non-positive sampling period yields 0.0.

    Args:
        counters: Cumulative CPU time in nanoseconds, one per sample.
        seconds: Sample times in seconds, same length as ``counters``.

    Returns:
        One rate per consecutive pair, so one fewer point than the input.
    """
    rates: list[float] = []
    for i in range(1, min(len(counters), len(seconds))):
        period = seconds[i] - seconds[i - 1]
        if period <= 0:
            rates.append(0.0)
            continue
        rates.append((counters[i] - counters[i - 1]) / 1e6 / period)
    return rates


def memory_series(stats: ContainerStats, container: ContainerInfo | None) -> list[GraphSeries]:
    """Usage and cache series, plus a limit line if the container declares one."""
    x = _labels(stats)
    series = [
        GraphSeries(
            title="usage",
            x=x,
            y=tuple(s.memory_usage for s in stats.samples),
            style=STYLE_USAGE,
        ),
        GraphSeries(
            title="cache",
            x=x,
            y=tuple(s.memory_cache for s in stats.samples),
            style=STYLE_CACHE,
        ),
    ]
    if container is not None and container.has_memory_limit:
        limit = stats.spec.memory_limit or container.memory_limit_bytes
        series.append(
            GraphSeries(title="limit", x=x, y=(limit,) * len(x), style=STYLE_LIMIT)
        )
    return series


def cpu_series(stats: ContainerStats) -> list[GraphSeries]:
    """User and total rates, plus the quota as a limit line when set."""
    x = _labels(stats)[1:]
    seconds = [_epoch(s.timestamp) for s in stats.samples]
    series = [
        GraphSeries(
            title="user",
            x=x,
            y=tuple(cpu_rates([s.cpu_user for s in stats.samples], seconds)),
            style=STYLE_USER,
        ),
        GraphSeries(
            title="total",
            x=x,
            y=tuple(cpu_rates([s.cpu_total for s in stats.samples], seconds)),
            style=STYLE_TOTAL,
        ),
    ]
    spec = stats.spec
    if spec.cpu_quota and spec.cpu_period:
        limit = spec.cpu_quota / spec.cpu_period * 1000
        series.append(
            GraphSeries(title="limit", x=x, y=(limit,) * len(x), style=STYLE_LIMIT)
        )
    return series


def network_series(stats: ContainerStats) -> list[GraphSeries] | None:
    """Received and transmitted bytes, or None when the backend has no network stats."""
    if not stats.spec.has_network:
        return None
    x = _labels(stats)
    return [
        GraphSeries(
            title="rx",
            x=x,
            y=tuple(s.network_rx or 0.0 for s in stats.samples),
            style=STYLE_RX,
        ),
        GraphSeries(
            title="tx",
            x=x,
            y=tuple(s.network_tx or 0.0 for s in stats.samples),
            style=STYLE_TX,
        ),
    ]


def _labels(stats: ContainerStats) -> tuple[str, ...]:
    return tuple(format_clock(s.timestamp) for s in stats.samples)


def _epoch(moment: datetime | None) -> float:
    return moment.timestamp() if moment is not None else 0.0


__all__ = [
    "STYLE_CACHE",
    "STYLE_LIMIT",
    "STYLE_RX",
    "STYLE_TOTAL",
    "STYLE_TX",
    "STYLE_USAGE",
    "STYLE_USER",
    "cpu_rates",
    "cpu_series",
    "memory_series",
    "network_series",
]
