"""Resources usage poller."""

from kubedeck.controllers.stats.controller import StatsController

__all__ = ["StatsController"]
