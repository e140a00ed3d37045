"""Base controller classes."""

from kubedeck.controllers.base.base_controller import (
    AsyncControllerMixin,
    BaseController,
    DashboardView,
)

__all__ = [
    "AsyncControllerMixin",
    "BaseController",
    "DashboardView",
]
