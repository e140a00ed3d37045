"""Timeout and interval constants for the TUI.

All timer, polling and backoff values (seconds) used by the streaming
and polling controllers.
"""

from typing import Final

# ============================================================================
# Refresh and polling cadences
# ============================================================================

POD_AGE_REFRESH_INTERVAL: Final = 1.0
STATS_POLL_INTERVAL: Final = 10.0
SPINNER_INTERVAL: Final = 0.1

# ============================================================================
# Log follow pipeline
# ============================================================================

LOG_FLUSH_INTERVAL: Final = 0.1
LOG_FLUSH_MAX_WAIT: Final = 0.5
LOG_RECONNECT_DELAY: Final = 1.0

# ============================================================================
# Pods watch restart backoff
# ============================================================================

WATCH_RETRY_BACKOFF_BASE: Final = 1.0
WATCH_RETRY_BACKOFF_MAX: Final = 30.0

# ============================================================================
# kubectl process timeouts
# ============================================================================

KUBECTL_COMMAND_TIMEOUT: Final = 45
KUBECTL_CONFIG_TIMEOUT: Final = 8

__all__ = [
    "KUBECTL_COMMAND_TIMEOUT",
    "KUBECTL_CONFIG_TIMEOUT",
    "LOG_FLUSH_INTERVAL",
    "LOG_FLUSH_MAX_WAIT",
    "LOG_RECONNECT_DELAY",
    "POD_AGE_REFRESH_INTERVAL",
    "SPINNER_INTERVAL",
    "STATS_POLL_INTERVAL",
    "WATCH_RETRY_BACKOFF_BASE",
    "WATCH_RETRY_BACKOFF_MAX",
]
