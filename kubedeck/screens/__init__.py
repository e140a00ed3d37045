"""KubeDeck TUI Screens.

Domain Structure:
    - dashboard/ - Pods table, resources graphs, log tail and namespace prompt
    - shell/     - Remote shell tab panes

Note: Keybindings live in the keyboard/ package
(``kubedeck.keyboard.navigation``).
"""

from __future__ import annotations

from kubedeck.screens.dashboard import (
    DashboardPresenter,
    DashboardScreen,
    NamespacePromptScreen,
)
from kubedeck.screens.shell import ShellPane, ShellTabs

__all__ = [
    "DashboardPresenter",
    "DashboardScreen",
    "NamespacePromptScreen",
    "ShellPane",
    "ShellTabs",
]
