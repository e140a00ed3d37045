"""Modal asking for the namespace to switch to."""

from __future__ import annotations

from contextlib import suppress

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from kubedeck.keyboard import NAMESPACE_PROMPT_BINDINGS


class NamespacePromptScreen(ModalScreen[str | None]):
    """Dismisses with the entered namespace, or None when cancelled."""

    BINDINGS = NAMESPACE_PROMPT_BINDINGS

    def __init__(self, current: str | None = None) -> None:
        super().__init__(classes="namespace-prompt-screen")
        self._current = current or ""

    def compose(self) -> ComposeResult:
        with Vertical(classes="namespace-prompt-shell"):
            yield Static("Namespace", classes="namespace-prompt-title", markup=False)
            yield Input(
                value=self._current,
                placeholder="namespace",
                id="namespace-prompt-input",
            )

    def on_mount(self) -> None:
        with suppress(NoMatches):
            self.query_one("#namespace-prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value.strip() or None)

    def action_cancel(self) -> None:
        self.dismiss(None)


__all__ = [
    "NamespacePromptScreen",
]
