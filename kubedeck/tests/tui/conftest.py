"""Shared fixtures for the KubeDeck TUI tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from kubedeck.app import KubeDeckApp
from kubedeck.models.state.app_settings import AppSettings
from kubedeck.models.state.dashboard_state import DashboardState
from kubedeck.tests.tui.fakes import (
    FAST_SETTINGS,
    FakeClusterClient,
    RecordingTabs,
    RecordingView,
)
from kubedeck.utils.cancellations import CancellationRegistry


@pytest.fixture
def client() -> FakeClusterClient:
    return FakeClusterClient()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def tabs() -> RecordingTabs:
    return RecordingTabs()


@pytest.fixture
def registry() -> CancellationRegistry:
    return CancellationRegistry()


@pytest.fixture
def state() -> DashboardState:
    state = DashboardState()
    state.namespace = "default"
    return state


@pytest.fixture
def settings() -> AppSettings:
    return FAST_SETTINGS.model_copy()


@pytest.fixture
def app(tmp_path: Path, client: FakeClusterClient) -> KubeDeckApp:
    """App wired to the fake cluster client; settings are saved under tmp_path."""
    return KubeDeckApp(
        namespace="default",
        config_path=tmp_path / "settings.yaml",
        client=client,
        settings=FAST_SETTINGS.model_copy(),
    )
