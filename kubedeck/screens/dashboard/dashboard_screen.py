"""Dashboard screen: pods table, resources graphs, log tail and shell tabs.

The screen is the rendering surface of :class:`DashboardController`: it
implements the dashboard view protocol and hands shell sessions to a
:class:`ShellTabs` adapter. All controller callbacks run on the app's event
loop, so widget updates happen directly.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import suppress

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Log, TabbedContent, TabPane
from textual.widgets.data_table import CellDoesNotExist, RowDoesNotExist

from kubedeck.constants.enums import GraphKind, Panel
from kubedeck.constants.values import TITLE_LOGS
from kubedeck.controllers.cluster.client import ClusterClient
from kubedeck.controllers.dashboard.controller import DashboardController
from kubedeck.keyboard import DASHBOARD_SCREEN_BINDINGS
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.models.metrics.container_stats import GraphSeries
from kubedeck.models.state.app_settings import AppSettings
from kubedeck.screens.dashboard.config import (
    GRAPH_IDS,
    GRAPH_TABS,
    GRAPH_TITLES,
    LOG_ID,
    POD_TABLE_COLUMNS,
    PODS_PANEL_ID,
    PODS_TABLE_ID,
    RESOURCES_TABS_ID,
    SESSIONS_TABS_ID,
    TAB_LOGS,
)
from kubedeck.screens.dashboard.presenter import DashboardPresenter
from kubedeck.screens.shell.shell_tabs import ShellTabs
from kubedeck.utils.formatting import format_bytes, format_millicores
from kubedeck.widgets import MetricsGraph

logger = logging.getLogger(__name__)

_GRAPH_FORMATTERS = {
    GraphKind.MEMORY: format_bytes,
    GraphKind.CPU: format_millicores,
    GraphKind.NETWORK: format_bytes,
}


class DashboardScreen(Screen[None]):
    """Single-namespace dashboard."""

    BINDINGS = DASHBOARD_SCREEN_BINDINGS

    def __init__(
        self,
        namespace: str,
        client: ClusterClient,
        settings: AppSettings | None = None,
    ) -> None:
        super().__init__()
        self.namespace = namespace
        self.settings = settings or AppSettings()
        self.presenter = DashboardPresenter()
        self.shell_tabs = ShellTabs(self._sessions_tabs, self.presenter, self.call_after_refresh)
        self.controller = DashboardController(
            client, view=self, tabs=self.shell_tabs, settings=self.settings
        )
        self._pods: list[PodRecord] = []
        self._selected_uid: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="dashboard-top"):
            with Vertical(id=PODS_PANEL_ID):
                yield DataTable(id=PODS_TABLE_ID, cursor_type="row")
            with TabbedContent(id=RESOURCES_TABS_ID):
                for kind in GraphKind:
                    with TabPane(GRAPH_TITLES[kind], id=GRAPH_TABS[kind]):
                        yield MetricsGraph(_GRAPH_FORMATTERS[kind], id=GRAPH_IDS[kind])
        with TabbedContent(id=SESSIONS_TABS_ID):
            with TabPane(TITLE_LOGS, id=TAB_LOGS):
                yield Log(id=LOG_ID, max_lines=self.settings.log_buffer_lines)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(f"#{PODS_TABLE_ID}", DataTable)
        for name, width in POD_TABLE_COLUMNS:
            table.add_column(name, key=name.lower(), width=width)
        self.sub_title = self.namespace
        self.reset_all()
        self.controller.run(self.namespace)
        table.focus()

    def on_unmount(self) -> None:
        self.controller.shutdown()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    @on(DataTable.RowSelected, f"#{PODS_TABLE_ID}")
    def _on_pod_selected(self, event: DataTable.RowSelected) -> None:
        if event.row_key.value is not None:
            self.controller.select_pod(event.row_key.value)

    def action_open_shell(self) -> None:
        uid = self._highlighted_uid()
        if uid is None:
            return
        if self.controller.open_shell(uid) is None:
            self.notify("Remote shell requires a running pod", severity="warning")

    def action_show_logs(self) -> None:
        self._activate_tab(SESSIONS_TABS_ID, TAB_LOGS)

    def action_switch_graph_1(self) -> None:
        self._activate_tab(RESOURCES_TABS_ID, GRAPH_TABS[GraphKind.MEMORY])

    def action_switch_graph_2(self) -> None:
        self._activate_tab(RESOURCES_TABS_ID, GRAPH_TABS[GraphKind.CPU])

    def action_switch_graph_3(self) -> None:
        self._activate_tab(RESOURCES_TABS_ID, GRAPH_TABS[GraphKind.NETWORK])

    def action_refresh(self) -> None:
        self.controller.refresh()

    def switch_namespace(self, namespace: str) -> None:
        self.namespace = namespace
        self.sub_title = namespace
        self.controller.switch_namespace(namespace)

    # ------------------------------------------------------------------
    # Dashboard view
    # ------------------------------------------------------------------

    def render_pods(self, pods: Sequence[PodRecord], selected_uid: str | None) -> None:
        self._pods = list(pods)
        self._selected_uid = selected_uid
        self._render_table()

    def refresh_pod_ages(self) -> None:
        self._render_table()

    def set_panel_label(
        self,
        panel: Panel,
        *,
        container: str | None = None,
        status: str | None = None,
        spinner: str | None = None,
    ) -> None:
        if panel is Panel.PODS:
            label = self.presenter.pods_label(
                self.controller.namespace, status=status, spinner=spinner
            )
            target = f"#{PODS_PANEL_ID}"
        elif panel is Panel.RESOURCES:
            label = self.presenter.panel_label(
                panel, container=container, status=status, spinner=spinner
            )
            target = f"#{RESOURCES_TABS_ID}"
        else:
            label = self.presenter.panel_label(
                panel, container=container, status=status, spinner=spinner
            )
            target = f"#{LOG_ID}"
        with suppress(NoMatches):
            self.query_one(target).border_title = label

    def append_log_lines(self, lines: Sequence[str]) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{LOG_ID}", Log).write_lines(lines)

    def render_graph(self, kind: GraphKind, series: Sequence[GraphSeries]) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{GRAPH_IDS[kind]}", MetricsGraph).set_series(series)

    def show_graph_message(self, kind: GraphKind | None, message: str) -> None:
        kinds = list(GraphKind) if kind is None else [kind]
        for graph_kind in kinds:
            with suppress(NoMatches):
                self.query_one(f"#{GRAPH_IDS[graph_kind]}", MetricsGraph).show_message(message)

    def reset_selection(self) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{LOG_ID}", Log).clear()
        for kind in GraphKind:
            with suppress(NoMatches):
                self.query_one(f"#{GRAPH_IDS[kind]}", MetricsGraph).clear()
        self.set_panel_label(Panel.LOGS)
        self.set_panel_label(Panel.RESOURCES)

    def reset_all(self) -> None:
        self._pods = []
        self._selected_uid = None
        with suppress(NoMatches):
            self.query_one(f"#{PODS_TABLE_ID}", DataTable).clear()
        self.set_panel_label(Panel.PODS)
        self.reset_selection()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _sessions_tabs(self) -> TabbedContent:
        return self.query_one(f"#{SESSIONS_TABS_ID}", TabbedContent)

    def _render_table(self) -> None:
        try:
            table = self.query_one(f"#{PODS_TABLE_ID}", DataTable)
        except NoMatches:
            return
        highlighted = self._highlighted_uid()
        table.clear()
        for uid, row in self.presenter.pod_rows(self._pods, self._selected_uid):
            table.add_row(*row, key=uid)
        if highlighted is not None:
            with suppress(RowDoesNotExist):
                table.move_cursor(row=table.get_row_index(highlighted), animate=False)

    def _highlighted_uid(self) -> str | None:
        try:
            table = self.query_one(f"#{PODS_TABLE_ID}", DataTable)
        except NoMatches:
            return None
        if table.row_count == 0:
            return None
        try:
            row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        except CellDoesNotExist:
            return None
        return row_key.value

    def _activate_tab(self, tabs_id: str, tab_id: str) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{tabs_id}", TabbedContent).active = tab_id


__all__ = [
    "DashboardScreen",
]
