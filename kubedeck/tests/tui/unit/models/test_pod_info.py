"""Tests for the PodRecord and ContainerInfo models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kubedeck.models.core.pod_info import ContainerInfo, PodRecord
from kubedeck.tests.tui.fakes import make_pod


@pytest.mark.unit
class TestPodRecordFromDict:
    """Tests for PodRecord.from_dict."""

    def test_identity_and_placement(self) -> None:
        """Metadata and spec fields are mapped."""
        pod = PodRecord.from_dict(make_pod("web-1", uid="u1", resource_version="7"))

        assert pod.name == "web-1"
        assert pod.namespace == "default"
        assert pod.uid == "u1"
        assert pod.resource_version == "7"
        assert pod.node_name == "node-1"
        assert [c.name for c in pod.containers] == ["app"]

    def test_start_time_preferred_over_creation(self) -> None:
        """Age counts from the start time when the pod has one."""
        pod = PodRecord.from_dict(make_pod())
        assert pod.started_at == datetime(2024, 5, 1, 10, 0, 5, tzinfo=timezone.utc)

    def test_empty_object(self) -> None:
        """Missing sections fall back to defaults."""
        pod = PodRecord.from_dict({})
        assert pod.phase == "Unknown"
        assert pod.containers == ()
        assert pod.started_at is None


@pytest.mark.unit
class TestPodRecordStatus:
    """Tests for the status column and running predicates."""

    def test_terminating_wins(self) -> None:
        """A deletion timestamp shows Terminating regardless of phase."""
        pod = PodRecord.from_dict(
            make_pod(deletion_timestamp="2024-05-01T11:00:00Z", reason="Evicted")
        )
        assert pod.status == "Terminating"
        assert pod.is_terminating is True
        assert pod.is_running is False
        assert pod.is_running_or_terminating is True
        assert pod.has_running_phase is True

    def test_pod_reason(self) -> None:
        """The pod reason comes before container reasons."""
        pod = PodRecord.from_dict(
            make_pod(phase="Failed", reason="Evicted", waiting_reason="CrashLoopBackOff")
        )
        assert pod.status == "Evicted"

    def test_container_reason(self) -> None:
        """A waiting container reason replaces the phase."""
        pod = PodRecord.from_dict(make_pod(waiting_reason="CrashLoopBackOff"))
        assert pod.status == "CrashLoopBackOff"

    def test_phase(self) -> None:
        """Without reasons the phase is shown."""
        pod = PodRecord.from_dict(make_pod(phase="Pending"))
        assert pod.status == "Pending"
        assert pod.is_running is False
        assert pod.is_running_or_terminating is False


@pytest.mark.unit
class TestContainers:
    """Tests for container lookup and limits."""

    def test_container_lookup(self) -> None:
        """Containers are found by name and index."""
        pod = PodRecord.from_dict(make_pod(containers=("app", "sidecar")))

        assert pod.container("sidecar") == pod.containers[1]
        assert pod.container("missing") is None
        assert pod.container_index("sidecar") == 1
        assert pod.container_index(None) == -1

    def test_memory_limit(self) -> None:
        """Declared limits are kept as quantity and in bytes."""
        container = ContainerInfo.from_dict(
            {"name": "app", "resources": {"limits": {"memory": "256Mi", "cpu": "500m"}}}
        )

        assert container.has_memory_limit is True
        assert container.memory_limit == "256Mi"
        assert container.memory_limit_bytes == 256 * 1024**2

    def test_no_limits(self) -> None:
        """Containers without limits report none."""
        container = ContainerInfo.from_dict({"name": "app"})
        assert container.has_memory_limit is False
        assert container.memory_limit_bytes == 0.0
