"""Keyboard bindings for KubeDeck TUI.

- app.py: App-level Binding objects
- navigation.py: Screen-specific binding tuples
"""

from kubedeck.keyboard.app import APP_BINDINGS
from kubedeck.keyboard.navigation import (
    DASHBOARD_SCREEN_BINDINGS,
    NAMESPACE_PROMPT_BINDINGS,
)

__all__ = [
    "APP_BINDINGS",
    "DASHBOARD_SCREEN_BINDINGS",
    "NAMESPACE_PROMPT_BINDINGS",
]
