"""Screen-specific keyboard bindings."""

from typing import Annotated

# ============================================================================
# Dashboard Screen Bindings
# ============================================================================

DASHBOARD_SCREEN_BINDINGS: list[
    Annotated[tuple[str, str, str], "key, action, description"]
] = [
    ("s", "open_shell", "Shell"),
    ("l", "show_logs", "Logs"),
    ("1", "switch_graph_1", "Memory"),
    ("2", "switch_graph_2", "CPU"),
    ("3", "switch_graph_3", "Net"),
]

# ============================================================================
# Modal Bindings
# ============================================================================

NAMESPACE_PROMPT_BINDINGS: list[
    Annotated[tuple[str, str, str], "key, action, description"]
] = [
    ("escape", "cancel", "Cancel"),
]

__all__ = [
    "DASHBOARD_SCREEN_BINDINGS",
    "NAMESPACE_PROMPT_BINDINGS",
]
