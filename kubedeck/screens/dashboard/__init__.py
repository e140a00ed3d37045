"""Dashboard screen module exports."""

from kubedeck.screens.dashboard.config import (
    GRAPH_TABS,
    GRAPH_TITLES,
    TAB_CPU,
    TAB_LOGS,
    TAB_MEMORY,
    TAB_NETWORK,
)
from kubedeck.screens.dashboard.presenter import DashboardPresenter
from kubedeck.screens.dashboard.dashboard_screen import DashboardScreen
from kubedeck.screens.dashboard.namespace_prompt import NamespacePromptScreen

__all__ = [
    "GRAPH_TABS",
    "GRAPH_TITLES",
    "TAB_CPU",
    "TAB_LOGS",
    "TAB_MEMORY",
    "TAB_NETWORK",
    "DashboardPresenter",
    "DashboardScreen",
    "NamespacePromptScreen",
]
