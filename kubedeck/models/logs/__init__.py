"""Log follow models."""

from kubedeck.models.logs.log_cursor import LogCursor, second_prefix

__all__ = [
    "LogCursor",
    "second_prefix",
]
