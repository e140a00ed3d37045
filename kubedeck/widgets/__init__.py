"""Custom widgets for KubeDeck TUI."""

from kubedeck.widgets.graph_panel import MetricsGraph, render_sparkline

__all__ = [
    "MetricsGraph",
    "render_sparkline",
]
