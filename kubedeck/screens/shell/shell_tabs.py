"""Session tabs adapter between the exec session manager and a TabbedContent."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import suppress

from textual.css.query import NoMatches
from textual.widgets import TabbedContent

from kubedeck.controllers.cluster.client import ExecChannel
from kubedeck.screens.dashboard.presenter import DashboardPresenter
from kubedeck.screens.shell.shell_pane import ShellPane


class ShellTabs:
    """Hosts one :class:`ShellPane` per session inside a ``TabbedContent``.

    Args:
        tabs: Returns the tabbed container (looked up lazily so the adapter
            can be built before the screen is composed).
        presenter: Formats tab labels.
        defer: Schedules a callable after the next refresh, used to focus a
            pane once it is mounted.
    """

    def __init__(
        self,
        tabs: Callable[[], TabbedContent],
        presenter: DashboardPresenter,
        defer: Callable[..., object] | None = None,
    ) -> None:
        self._tabs = tabs
        self._presenter = presenter
        self._defer = defer
        self.panes: dict[str, ShellPane] = {}

    def select(self, session_id: str) -> bool:
        pane = self.panes.get(session_id)
        if pane is None or pane.id is None:
            return False
        self._activate(pane.id)
        return True

    def add(self, session_id: str, name: str) -> None:
        pane = ShellPane(session_id, name)
        self.panes[session_id] = pane
        with suppress(NoMatches):
            self._tabs().add_pane(pane)
        if pane.id is None:
            return
        if self._defer is not None:
            self._defer(self._activate, pane.id)
        else:
            self._activate(pane.id)

    def attach(self, session_id: str, channel: ExecChannel) -> None:
        pane = self.panes.get(session_id)
        if pane is not None:
            pane.attach(channel)

    def remove(self, session_id: str) -> None:
        pane = self.panes.pop(session_id, None)
        if pane is None or pane.id is None:
            return
        with suppress(NoMatches):
            self._tabs().remove_pane(pane.id)

    def set_label(
        self,
        session_id: str,
        title: str,
        *,
        status: str | None = None,
        spinner: str | None = None,
    ) -> None:
        pane = self.panes.get(session_id)
        if pane is not None:
            pane.set_label(self._presenter.shell_label(title, status=status, spinner=spinner))

    def _activate(self, pane_id: str) -> None:
        # the pane may already be gone when a deferred activation runs
        with suppress(NoMatches, ValueError):
            self._tabs().active = pane_id


__all__ = [
    "ShellTabs",
]
