"""Application and dashboard state models."""

from kubedeck.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)
from kubedeck.models.state.config_manager import ConfigManager
from kubedeck.models.state.dashboard_state import DashboardState, SelectionState

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "DashboardState",
    "SelectionState",
]
