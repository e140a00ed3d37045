"""Stats response parsers."""

from kubedeck.controllers.stats.parsers.stats_parser import (
    cpu_rates,
    cpu_series,
    memory_series,
    network_series,
)

__all__ = [
    "cpu_rates",
    "cpu_series",
    "memory_series",
    "network_series",
]
