"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# UI defaults
# ============================================================================

THEME_DEFAULT: Final = "textual-dark"
NAMESPACE_DEFAULT: Final = "default"

# ============================================================================
# Cluster access defaults
# ============================================================================

KUBECTL_BINARY_DEFAULT: Final = "kubectl"
SHELL_COMMAND_DEFAULT: Final = ("/bin/sh", "-c", "TERM=dumb sh")

# ============================================================================
# Logging defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "INFO"
LOG_FILE_DEFAULT: Final = "~/.cache/kubedeck/kubedeck.log"

__all__ = [
    "KUBECTL_BINARY_DEFAULT",
    "LOG_FILE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "NAMESPACE_DEFAULT",
    "SHELL_COMMAND_DEFAULT",
    "THEME_DEFAULT",
]
