"""Container resource usage models (kubelet cAdvisor stats shape)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from kubedeck.utils.formatting import parse_timestamp


class MetricSample(BaseModel):
    """One polled snapshot of a container's counters."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime | None = None
    memory_usage: float = 0.0
    memory_cache: float = 0.0
    cpu_user: float = 0.0
    cpu_total: float = 0.0
    network_rx: float | None = None
    network_tx: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetricSample:
        memory = data.get("memory") or {}
        cpu_usage = (data.get("cpu") or {}).get("usage") or {}
        network = data.get("network") or {}
        return cls(
            timestamp=parse_timestamp(data.get("timestamp")),
            memory_usage=float(memory.get("usage") or 0),
            memory_cache=float(memory.get("cache") or 0),
            cpu_user=float(cpu_usage.get("user") or 0),
            cpu_total=float(cpu_usage.get("total") or 0),
            network_rx=_optional_float(network.get("rx_bytes")),
            network_tx=_optional_float(network.get("tx_bytes")),
        )


class StatsSpec(BaseModel):
    """Capabilities and limits reported alongside the samples."""

    model_config = ConfigDict(frozen=True)

    memory_limit: float | None = None
    cpu_quota: float | None = None
    cpu_period: float | None = None
    has_network: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StatsSpec:
        memory = data.get("memory") or {}
        cpu = data.get("cpu") or {}
        return cls(
            memory_limit=_optional_float(memory.get("limit")),
            cpu_quota=_optional_float(cpu.get("quota")),
            cpu_period=_optional_float(cpu.get("period")),
            has_network=bool(data.get("has_network")),
        )


class ContainerStats(BaseModel):
    """Response of one stats poll: ordered samples plus the spec block."""

    model_config = ConfigDict(frozen=True)

    samples: tuple[MetricSample, ...] = ()
    spec: StatsSpec = StatsSpec()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContainerStats:
        return cls(
            samples=tuple(MetricSample.from_dict(s) for s in data.get("stats") or []),
            spec=StatsSpec.from_dict(data.get("spec") or {}),
        )


class GraphSeries(BaseModel):
    """One named line of a graph, ready for rendering."""

    model_config = ConfigDict(frozen=True)

    title: str
    x: tuple[str, ...]
    y: tuple[float, ...]
    style: str = "white"


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


__all__ = [
    "ContainerStats",
    "GraphSeries",
    "MetricSample",
    "StatsSpec",
]
