"""All enum definitions for the TUI.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Status Enums
# =============================================================================


class PodStatus(Enum):
    """Status tags shown next to the selected container in panel labels."""

    RUNNING = "RUNNING"
    TERMINATING = "TERMINATING"
    DELETED = "DELETED"


class WatchEventType(Enum):
    """Event types delivered by a Kubernetes watch stream."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    BOOKMARK = "BOOKMARK"
    ERROR = "ERROR"


# =============================================================================
# Controller State Enums
# =============================================================================


class SyncState(Enum):
    """Pods watch synchronizer states."""

    IDLE = "idle"
    LISTING = "listing"
    WATCHING = "watching"
    TERMINATED = "terminated"
    ERROR = "error"


# =============================================================================
# UI Enums
# =============================================================================


class Panel(Enum):
    """Dashboard panels that carry a label."""

    PODS = "pods"
    RESOURCES = "resources"
    LOGS = "logs"


class GraphKind(Enum):
    """Resource graphs shown in the resources panel."""

    MEMORY = "memory"
    CPU = "cpu"
    NETWORK = "network"


class ThemeMode(Enum):
    """Theme mode values."""

    DARK = "dark"
    LIGHT = "light"


__all__ = [
    "GraphKind",
    "Panel",
    "PodStatus",
    "SyncState",
    "ThemeMode",
    "WatchEventType",
]
