"""Dashboard screen configuration - widget IDs, tab IDs and column definitions."""

from __future__ import annotations

from kubedeck.constants.enums import GraphKind

# =============================================================================
# Widget IDs
# =============================================================================

PODS_PANEL_ID = "pods-panel"
PODS_TABLE_ID = "pods-table"
RESOURCES_TABS_ID = "resources-tabs"
SESSIONS_TABS_ID = "sessions-tabs"
LOG_ID = "pod-log"

# =============================================================================
# Tab IDs
# =============================================================================

TAB_LOGS = "tab-logs"
TAB_MEMORY = "tab-memory"
TAB_CPU = "tab-cpu"
TAB_NETWORK = "tab-network"

GRAPH_TABS: dict[GraphKind, str] = {
    GraphKind.MEMORY: TAB_MEMORY,
    GraphKind.CPU: TAB_CPU,
    GraphKind.NETWORK: TAB_NETWORK,
}

GRAPH_TITLES: dict[GraphKind, str] = {
    GraphKind.MEMORY: "Memory",
    GraphKind.CPU: "CPU",
    GraphKind.NETWORK: "Net",
}

GRAPH_IDS: dict[GraphKind, str] = {
    GraphKind.MEMORY: "graph-memory",
    GraphKind.CPU: "graph-cpu",
    GraphKind.NETWORK: "graph-network",
}

# =============================================================================
# Table Column Definitions: list[tuple[str, int]] = [(name, width), ...]
# =============================================================================

POD_TABLE_COLUMNS: list[tuple[str, int]] = [
    ("Name", 48),
    ("Status", 20),
    ("Age", 10),
]

# =============================================================================
# Shell tabs
# =============================================================================

SHELL_PANE_PREFIX = "shell-"
