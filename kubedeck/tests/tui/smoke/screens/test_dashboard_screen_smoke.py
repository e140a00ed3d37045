"""Smoke tests driving the dashboard through a headless app."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from textual.widgets import DataTable, Input, Log

from kubedeck.app import KubeDeckApp
from kubedeck.screens import (
    DashboardPresenter,
    DashboardScreen,
    NamespacePromptScreen,
    ShellPane,
    ShellTabs,
)
from kubedeck.screens.dashboard.config import LOG_ID, PODS_TABLE_ID
from kubedeck.screens.shell import pane_id
from kubedeck.tests.tui.fakes import FakeClusterClient, FakeStream, make_pod, pod_list

T1 = "2024-05-01T10:00:00.100000000Z"


async def settle(pilot, predicate, attempts: int = 40) -> None:
    """Let the app process messages until ``predicate()`` holds."""
    for _ in range(attempts):
        if predicate():
            return
        await pilot.pause(0.05)
    raise AssertionError("condition not met")


@pytest.mark.smoke
class TestDashboardScreen:
    """Headless runs of the dashboard."""

    @pytest.mark.asyncio
    async def test_pods_are_listed(self, app: KubeDeckApp, client: FakeClusterClient) -> None:
        client.pod_lists = [pod_list(make_pod("web-1", uid="u1"), make_pod("web-2", uid="u2"))]

        async with app.run_test() as pilot:
            assert isinstance(app.screen, DashboardScreen)
            table = app.screen.query_one(f"#{PODS_TABLE_ID}", DataTable)
            await settle(pilot, lambda: table.row_count == 2)

            assert client.watch_calls == [("default", "5")]

    @pytest.mark.asyncio
    async def test_selecting_pod_tails_log(self, app: KubeDeckApp, client: FakeClusterClient) -> None:
        client.pod_lists = [pod_list(make_pod("web-1", uid="u1"))]
        client.log_streams = [FakeStream([f"{T1} hello from web-1\n".encode()])]

        async with app.run_test() as pilot:
            screen = app.screen
            table = screen.query_one(f"#{PODS_TABLE_ID}", DataTable)
            await settle(pilot, lambda: table.row_count == 1)

            table.focus()
            await pilot.press("enter")
            log = screen.query_one(f"#{LOG_ID}", Log)
            await settle(pilot, lambda: "hello from web-1" in log.lines)

            assert screen.controller.state.selection.pod_uid == "u1"

    @pytest.mark.asyncio
    async def test_namespace_prompt_cancel(self, app: KubeDeckApp, client: FakeClusterClient) -> None:
        async with app.run_test() as pilot:
            await pilot.press("n")
            await pilot.pause()
            assert isinstance(app.screen, NamespacePromptScreen)

            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, DashboardScreen)
            assert app.namespace == "default"

    @pytest.mark.asyncio
    async def test_namespace_switch(self, app: KubeDeckApp, client: FakeClusterClient) -> None:
        async with app.run_test() as pilot:
            await settle(pilot, lambda: len(client.watch_calls) == 1)
            await pilot.press("n")
            await settle(pilot, lambda: isinstance(app.screen, NamespacePromptScreen))
            app.screen.query_one(Input).value = "team-a"
            await pilot.press("enter")
            await settle(pilot, lambda: len(client.watch_calls) == 2)

            assert app.namespace == "team-a"
            assert client.watch_calls[-1][0] == "team-a"
            assert client.opened_streams[0].closed is True

    @pytest.mark.asyncio
    async def test_shell_opens_tab(self, app: KubeDeckApp, client: FakeClusterClient) -> None:
        client.pod_lists = [pod_list(make_pod("web-1", uid="u1"))]

        async with app.run_test() as pilot:
            screen = app.screen
            table = screen.query_one(f"#{PODS_TABLE_ID}", DataTable)
            await settle(pilot, lambda: table.row_count == 1)

            table.focus()
            await pilot.press("s")
            await settle(pilot, lambda: bool(client.opened_channels))
            await settle(pilot, lambda: bool(screen.query(ShellPane)))

            assert screen.shell_tabs.panes["default-web-1-app"].channel is client.opened_channels[0]

    @pytest.mark.asyncio
    async def test_settings_saved_on_exit(self, app: KubeDeckApp, tmp_path: Path) -> None:
        async with app.run_test():
            pass
        assert (tmp_path / "settings.yaml").is_file()


@pytest.mark.smoke
class TestShellTabs:
    """ShellTabs against a mocked TabbedContent."""

    @pytest.mark.asyncio
    async def test_add_select_remove(self, app: KubeDeckApp) -> None:
        async with app.run_test():
            container = MagicMock()
            tabs = ShellTabs(lambda: container, DashboardPresenter())

            tabs.add("default-web.v2-app", "app")

            pane = container.add_pane.call_args.args[0]
            assert isinstance(pane, ShellPane)
            assert pane.id == pane_id("default-web.v2-app") == "shell-default-web_v2-app"
            assert container.active == "shell-default-web_v2-app"

            assert tabs.select("default-web.v2-app") is True
            assert tabs.select("unknown") is False

            tabs.remove("default-web.v2-app")
            container.remove_pane.assert_called_once_with("shell-default-web_v2-app")
            assert tabs.panes == {}
