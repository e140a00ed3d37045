"""Remote shell sessions."""

from kubedeck.controllers.shell.controller import (
    ExecSessionManager,
    SessionTabs,
    ShellSession,
    session_id,
)

__all__ = [
    "ExecSessionManager",
    "SessionTabs",
    "ShellSession",
    "session_id",
]
