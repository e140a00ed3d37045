"""Tests for the resources usage poller."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from kubedeck.constants.enums import GraphKind, Panel
from kubedeck.constants.values import (
    KEY_POD,
    KEY_POD_STATS_POLL,
    MESSAGE_METRICS_UNAUTHORIZED,
    MESSAGE_METRICS_UNAVAILABLE,
    MESSAGE_NETWORK_UNAVAILABLE,
)
from kubedeck.controllers.cluster.errors import ApiError, ForbiddenError, NotFoundError
from kubedeck.controllers.stats.controller import StatsController
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.models.state.app_settings import AppSettings
from kubedeck.models.state.dashboard_state import DashboardState
from kubedeck.tests.tui.fakes import FakeClusterClient, RecordingView, make_pod, wait_for
from kubedeck.utils.cancellations import CancellationRegistry


def stats_response(*, has_network: bool = True) -> dict[str, Any]:
    return {
        "spec": {"has_network": has_network},
        "stats": [
            {
                "timestamp": f"2024-05-01T10:00:0{i}Z",
                "memory": {"usage": 1024 * (i + 1)},
                "cpu": {"usage": {"user": i * 1e8, "total": i * 2e8}},
                "network": {"rx_bytes": 10 * i, "tx_bytes": 5 * i},
            }
            for i in range(2)
        ],
    }


@pytest.fixture
def controller(
    client: FakeClusterClient,
    registry: CancellationRegistry,
    state: DashboardState,
    view: RecordingView,
    settings: AppSettings,
) -> StatsController:
    return StatsController(client, registry, state, view, settings)


@pytest.fixture
def pod(state: DashboardState) -> PodRecord:
    record = PodRecord.from_dict(make_pod("web-1", uid="u1", memory_limit="64Mi"))
    state.mirror.reset([record], "1")
    return record


@pytest.mark.unit
class TestStatsController:
    """Tests for StatsController."""

    @pytest.mark.asyncio
    async def test_first_response_renders_graphs(
        self,
        controller: StatsController,
        client: FakeClusterClient,
        registry: CancellationRegistry,
        state: DashboardState,
        view: RecordingView,
        pod: PodRecord,
    ) -> None:
        """Memory, CPU and network graphs are drawn from the first response."""
        client.stats = [stats_response()]
        generation = state.selection.select("u1", "app")

        controller.start(pod, "app", generation)
        await wait_for(lambda: len(view.graphs) == 3)

        assert [kind for kind, _ in view.graphs] == [
            GraphKind.MEMORY,
            GraphKind.CPU,
            GraphKind.NETWORK,
        ]
        assert client.stats_calls[0] == ("node-1", "default", "web-1", "u1", "app")
        assert ("app", None) in view.settled_labels(Panel.RESOURCES)
        registry.run(KEY_POD)

    @pytest.mark.asyncio
    async def test_network_unavailable_message(
        self,
        controller: StatsController,
        client: FakeClusterClient,
        registry: CancellationRegistry,
        state: DashboardState,
        view: RecordingView,
        pod: PodRecord,
    ) -> None:
        """Backends without network stats get a notice instead of a graph."""
        client.stats = [stats_response(has_network=False)]
        generation = state.selection.select("u1", "app")

        controller.start(pod, "app", generation)
        await wait_for(lambda: bool(view.messages))

        assert view.messages == [(GraphKind.NETWORK, MESSAGE_NETWORK_UNAVAILABLE)]
        assert [kind for kind, _ in view.graphs] == [GraphKind.MEMORY, GraphKind.CPU]
        registry.run(KEY_POD)

    @pytest.mark.asyncio
    async def test_polling_replaces_previous_request(
        self,
        controller: StatsController,
        client: FakeClusterClient,
        registry: CancellationRegistry,
        state: DashboardState,
        pod: PodRecord,
    ) -> None:
        """Each poll is registered under the poll key."""
        client.stats = [stats_response()]
        generation = state.selection.select("u1", "app")

        controller.start(pod, "app", generation)
        await wait_for(lambda: len(client.stats_calls) >= 2)

        assert KEY_POD_STATS_POLL in registry
        registry.run(KEY_POD)
        assert registry.keys() == []

    @pytest.mark.asyncio
    async def test_forbidden_stops_polling(
        self,
        controller: StatsController,
        client: FakeClusterClient,
        registry: CancellationRegistry,
        state: DashboardState,
        view: RecordingView,
        pod: PodRecord,
    ) -> None:
        """403 on the first request shows the unauthorized notice and gives up."""
        client.stats = [ForbiddenError(403, "Forbidden", "nodes/proxy is forbidden")]
        generation = state.selection.select("u1", "app")

        controller.start(pod, "app", generation)
        await wait_for(lambda: bool(view.messages))
        await asyncio.sleep(0.15)

        assert view.messages == [(None, MESSAGE_METRICS_UNAUTHORIZED)]
        assert len(client.stats_calls) == 1
        assert registry.keys() == []

    @pytest.mark.asyncio
    async def test_poll_failure_stops_polling(
        self,
        controller: StatsController,
        client: FakeClusterClient,
        registry: CancellationRegistry,
        state: DashboardState,
        view: RecordingView,
        pod: PodRecord,
    ) -> None:
        """A failing poll shows the unavailable notice and cancels the interval."""
        client.stats = [stats_response(), ApiError(500, "InternalError", "boom")]
        generation = state.selection.select("u1", "app")

        controller.start(pod, "app", generation)
        await wait_for(lambda: bool(view.messages))
        await asyncio.sleep(0.15)

        assert view.messages == [(None, MESSAGE_METRICS_UNAVAILABLE)]
        assert len(client.stats_calls) == 2
        assert registry.keys() == []

    @pytest.mark.asyncio
    async def test_pod_gone_is_silent(
        self,
        controller: StatsController,
        client: FakeClusterClient,
        registry: CancellationRegistry,
        state: DashboardState,
        view: RecordingView,
        pod: PodRecord,
    ) -> None:
        """404 means the pod went away; the deletion label says enough."""
        client.stats = [NotFoundError(404, "NotFound", "pod not found")]
        generation = state.selection.select("u1", "app")

        controller.start(pod, "app", generation)
        await wait_for(lambda: len(client.stats_calls) == 1)
        await asyncio.sleep(0.05)

        assert view.messages == []
        assert registry.keys() == []

    @pytest.mark.asyncio
    async def test_stale_response_is_ignored(
        self,
        controller: StatsController,
        client: FakeClusterClient,
        registry: CancellationRegistry,
        state: DashboardState,
        view: RecordingView,
        pod: PodRecord,
    ) -> None:
        """A response for a previous selection draws nothing and schedules no poll."""
        client.stats = [stats_response()]
        generation = state.selection.select("u1", "app")

        controller.start(pod, "app", generation)
        state.selection.select("u1", "sidecar")
        await wait_for(lambda: len(client.stats_calls) == 1)
        await asyncio.sleep(0.15)

        assert view.graphs == []
        assert len(client.stats_calls) == 1
        assert KEY_POD_STATS_POLL not in registry
        registry.run(KEY_POD)
