"""Scalar constants for the TUI.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "KubeDeck"

# ============================================================================
# Cancellation registry keys
# ============================================================================

KEY_SEPARATOR: Final = "."
KEY_DASHBOARD: Final = "dashboard"
KEY_WATCH: Final = "dashboard.watch"
KEY_REFRESH_POD_AGES: Final = "dashboard.refreshPodAges"
KEY_POD: Final = "dashboard.pod"
KEY_POD_LOGS: Final = "dashboard.pod.logs"
KEY_POD_STATS: Final = "dashboard.pod.stats"
KEY_POD_STATS_POLL: Final = "dashboard.pod.stats.poll"
KEY_TERMINAL: Final = "terminal"

# ============================================================================
# Panel titles
# ============================================================================

TITLE_PODS: Final = "Pods"
TITLE_RESOURCES: Final = "Resources"
TITLE_LOGS: Final = "Logs"

# ============================================================================
# Graph messages
# ============================================================================

MESSAGE_METRICS_UNAUTHORIZED: Final = "Resources usage metrics unauthorized"
MESSAGE_METRICS_UNAVAILABLE: Final = "Resources usage metrics unavailable"
MESSAGE_NETWORK_UNAVAILABLE: Final = "Network usage unavailable"

# ============================================================================
# Spinner
# ============================================================================

SPINNER_FRAMES: Final = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

__all__ = [
    "APP_TITLE",
    "KEY_DASHBOARD",
    "KEY_POD",
    "KEY_POD_LOGS",
    "KEY_POD_STATS",
    "KEY_POD_STATS_POLL",
    "KEY_REFRESH_POD_AGES",
    "KEY_SEPARATOR",
    "KEY_TERMINAL",
    "KEY_WATCH",
    "MESSAGE_METRICS_UNAUTHORIZED",
    "MESSAGE_METRICS_UNAVAILABLE",
    "MESSAGE_NETWORK_UNAVAILABLE",
    "SPINNER_FRAMES",
    "TITLE_LOGS",
    "TITLE_PODS",
    "TITLE_RESOURCES",
]
