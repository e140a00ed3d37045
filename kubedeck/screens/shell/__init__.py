"""Remote shell screen module exports."""

from kubedeck.screens.shell.shell_pane import ShellPane, pane_id
from kubedeck.screens.shell.shell_tabs import ShellTabs

__all__ = [
    "ShellPane",
    "ShellTabs",
    "pane_id",
]
