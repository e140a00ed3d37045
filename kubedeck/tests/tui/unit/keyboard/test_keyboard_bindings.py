"""Tests for keyboard binding tables."""

from __future__ import annotations

import pytest

from kubedeck.keyboard import APP_BINDINGS, DASHBOARD_SCREEN_BINDINGS, NAMESPACE_PROMPT_BINDINGS
from kubedeck.screens.dashboard.dashboard_screen import DashboardScreen
from kubedeck.screens.dashboard.namespace_prompt import NamespacePromptScreen


@pytest.mark.unit
class TestBindings:
    """Every binding points at an action that exists."""

    def test_app_bindings(self) -> None:
        from kubedeck.app import KubeDeckApp

        for binding in APP_BINDINGS:
            assert hasattr(KubeDeckApp, f"action_{binding.action}"), binding.action

    def test_ctrl_c_quits_with_priority(self) -> None:
        ctrl_c = next(b for b in APP_BINDINGS if b.key == "ctrl+c")
        assert ctrl_c.action == "quit"
        assert ctrl_c.priority is True

    def test_dashboard_bindings(self) -> None:
        for _key, action, _description in DASHBOARD_SCREEN_BINDINGS:
            assert hasattr(DashboardScreen, f"action_{action}"), action

    def test_graph_keys(self) -> None:
        keys = {key: action for key, action, _ in DASHBOARD_SCREEN_BINDINGS}
        assert keys["1"] == "switch_graph_1"
        assert keys["3"] == "switch_graph_3"

    def test_prompt_bindings(self) -> None:
        for _key, action, _description in NAMESPACE_PROMPT_BINDINGS:
            assert hasattr(NamespacePromptScreen, f"action_{action}"), action

    def test_no_duplicate_keys(self) -> None:
        app_keys = [b.key for b in APP_BINDINGS]
        screen_keys = [key for key, _, _ in DASHBOARD_SCREEN_BINDINGS]
        assert len(set(app_keys)) == len(app_keys)
        assert not set(app_keys) & set(screen_keys)
