"""Resource usage models."""

from kubedeck.models.metrics.container_stats import (
    ContainerStats,
    GraphSeries,
    MetricSample,
    StatsSpec,
)

__all__ = [
    "ContainerStats",
    "GraphSeries",
    "MetricSample",
    "StatsSpec",
]
