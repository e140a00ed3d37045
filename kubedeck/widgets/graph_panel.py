"""Sparkline graph widget for the resources panel."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from rich.console import Group
from rich.text import Text
from textual.widgets import Static

from kubedeck.models.metrics.container_stats import GraphSeries

SPARK = " ▁▂▃▄▅▆▇█"

_SPARK_WIDTH_DEFAULT = 60
_LEGEND_WIDTH = 18


def render_sparkline(values: Sequence[float], max_value: float, width: int) -> str:
    """Render the most recent ``width`` values relative to ``max_value``."""
    if width < 1 or not values:
        return ""
    recent = list(values)[-width:]
    if max_value <= 0:
        return SPARK[0] * len(recent)
    chars: list[str] = []
    for value in recent:
        idx = int(min(max(value, 0.0) / max_value, 1.0) * (len(SPARK) - 1))
        chars.append(SPARK[max(0, min(idx, len(SPARK) - 1))])
    return "".join(chars)


class MetricsGraph(Static):
    """One graph: a sparkline per series on a shared scale, or a notice."""

    DEFAULT_CSS = """
    MetricsGraph {
        height: auto;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        formatter: Callable[[float], str] = str,
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__("", id=id, classes=classes)
        self._formatter = formatter
        self.series: tuple[GraphSeries, ...] = ()
        self.message: str | None = None

    def set_series(self, series: Sequence[GraphSeries]) -> None:
        self.series = tuple(series)
        self.message = None
        self.update(self._render_series())

    def show_message(self, message: str) -> None:
        self.series = ()
        self.message = message
        self.update(Text(message, style="dim italic"))

    def clear(self) -> None:
        self.series = ()
        self.message = None
        self.update("")

    def _render_series(self) -> Group | str:
        if not self.series:
            return ""
        width = max(1, (self.size.width or _SPARK_WIDTH_DEFAULT + _LEGEND_WIDTH) - _LEGEND_WIDTH - 2)
        max_value = max((max(s.y) for s in self.series if s.y), default=0.0)
        lines: list[Text] = []
        for series in self.series:
            last = self._formatter(series.y[-1]) if series.y else "-"
            legend = Text(f"{series.title:<6}{last:>10} ", style=series.style)
            legend.append(render_sparkline(series.y, max_value, width), style=series.style)
            lines.append(legend)
        x = self.series[0].x
        if x:
            axis = Text(" " * _LEGEND_WIDTH, style="dim")
            axis.append(x[0])
            if len(x) > 1:
                axis.append(" … ")
                axis.append(x[-1])
            lines.append(axis)
        return Group(*lines)


__all__ = [
    "SPARK",
    "MetricsGraph",
    "render_sparkline",
]
