"""Constants module for KubeDeck TUI.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (registry keys, titles, messages)
- timeouts.py: Timer, polling and backoff values (seconds)
- limits.py: Buffer sizes and validation ranges
- defaults.py: Default values for settings

Note: Keyboard bindings are defined in kubedeck.keyboard module.
"""

from kubedeck.constants.defaults import (
    NAMESPACE_DEFAULT,
    THEME_DEFAULT,
)
from kubedeck.constants.enums import (
    GraphKind,
    Panel,
    PodStatus,
    SyncState,
    ThemeMode,
    WatchEventType,
)
from kubedeck.constants.limits import LOG_BUFFER_LINES_DEFAULT
from kubedeck.constants.timeouts import (
    LOG_FLUSH_INTERVAL,
    LOG_RECONNECT_DELAY,
    POD_AGE_REFRESH_INTERVAL,
    STATS_POLL_INTERVAL,
)
from kubedeck.constants.values import (
    APP_TITLE,
    KEY_DASHBOARD,
    KEY_POD,
    KEY_POD_LOGS,
    KEY_POD_STATS,
    KEY_POD_STATS_POLL,
    KEY_REFRESH_POD_AGES,
    KEY_TERMINAL,
    KEY_WATCH,
)

__all__ = [
    # Application
    "APP_TITLE",
    # Enums
    "GraphKind",
    # Registry keys
    "KEY_DASHBOARD",
    "KEY_POD",
    "KEY_POD_LOGS",
    "KEY_POD_STATS",
    "KEY_POD_STATS_POLL",
    "KEY_REFRESH_POD_AGES",
    "KEY_TERMINAL",
    "KEY_WATCH",
    "LOG_BUFFER_LINES_DEFAULT",
    # Timeouts
    "LOG_FLUSH_INTERVAL",
    "LOG_RECONNECT_DELAY",
    # Defaults
    "NAMESPACE_DEFAULT",
    "POD_AGE_REFRESH_INTERVAL",
    "STATS_POLL_INTERVAL",
    "THEME_DEFAULT",
    "Panel",
    "PodStatus",
    "SyncState",
    "ThemeMode",
    "WatchEventType",
]
