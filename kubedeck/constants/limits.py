"""Limit constants for the TUI.

Buffer sizes and validation ranges.
"""

from typing import Final

# ============================================================================
# Display limits
# ============================================================================

LOG_BUFFER_LINES_DEFAULT: Final = 1000
LOG_BUFFER_LINES_MIN: Final = 100
SHELL_OUTPUT_MAX_LINES: Final = 5000

# ============================================================================
# Stream limits
# ============================================================================

# Single pod objects can exceed asyncio's default 64 KiB line limit.
STREAM_LINE_LIMIT: Final = 16 * 1024 * 1024
STREAM_READ_CHUNK: Final = 64 * 1024
# Only the end of kubectl's stderr is kept for error messages.
STDERR_TAIL_BYTES: Final = 16 * 1024

__all__ = [
    "LOG_BUFFER_LINES_DEFAULT",
    "LOG_BUFFER_LINES_MIN",
    "SHELL_OUTPUT_MAX_LINES",
    "STDERR_TAIL_BYTES",
    "STREAM_LINE_LIMIT",
    "STREAM_READ_CHUNK",
]
