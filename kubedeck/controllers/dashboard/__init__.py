"""Dashboard controller."""

from kubedeck.controllers.dashboard.controller import DashboardController

__all__ = ["DashboardController"]
