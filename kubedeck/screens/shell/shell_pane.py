"""Tab pane hosting one remote shell session."""

from __future__ import annotations

import logging
import re
from contextlib import suppress

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.widgets import Input, Log, TabPane

from kubedeck.constants.limits import SHELL_OUTPUT_MAX_LINES
from kubedeck.controllers.cluster.client import ExecChannel
from kubedeck.screens.dashboard.config import SHELL_PANE_PREFIX

logger = logging.getLogger(__name__)

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def pane_id(session_id: str) -> str:
    """Widget id of the pane for ``session_id`` (ids only allow ``[A-Za-z0-9_-]``)."""
    return SHELL_PANE_PREFIX + _UNSAFE_ID_CHARS.sub("_", session_id)


class ShellPane(TabPane):
    """Output log plus a command input wired to an exec channel."""

    BINDINGS = [("ctrl+d", "close_channel", "Close shell")]

    def __init__(self, session_id: str, title: str) -> None:
        super().__init__(title, id=pane_id(session_id))
        self.session_id = session_id
        self.channel: ExecChannel | None = None
        self._label = title

    def compose(self) -> ComposeResult:
        yield Log(max_lines=SHELL_OUTPUT_MAX_LINES, classes="shell-output")
        yield Input(placeholder="Command", classes="shell-input")

    def on_mount(self) -> None:
        self._apply_label()

    def set_label(self, label: str) -> None:
        self._label = label
        self._apply_label()

    def attach(self, channel: ExecChannel) -> None:
        """Start copying the channel output into the log."""
        self.channel = channel
        self.run_worker(self._pump(channel), group="shell-pump", exclusive=True)
        with suppress(NoMatches):
            self.query_one(Input).focus()

    async def _pump(self, channel: ExecChannel) -> None:
        while True:
            chunk = await channel.read()
            if not chunk:
                break
            with suppress(NoMatches):
                self.query_one(Log).write(chunk.decode("utf-8", errors="replace"))

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if self.channel is None:
            return
        await self.channel.write((event.value + "\n").encode("utf-8"))
        event.input.value = ""

    async def action_close_channel(self) -> None:
        if self.channel is not None:
            await self.channel.close()

    def _apply_label(self) -> None:
        with suppress(NoMatches):
            self.query_one(Log).border_title = self._label


__all__ = [
    "ShellPane",
    "pane_id",
]
