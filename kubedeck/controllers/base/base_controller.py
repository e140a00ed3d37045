"""Base controller shared by the dashboard's streaming controllers.

Controllers run on the Textual event loop. They never touch widgets
directly; they drive a :class:`DashboardView` and register every background
task they start in the shared cancellation registry.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, ClassVar, Protocol

from kubedeck.constants.enums import GraphKind, Panel
from kubedeck.models.state.app_settings import AppSettings

if TYPE_CHECKING:
    from kubedeck.controllers.cluster.client import ClusterClient
    from kubedeck.models.core.pod_info import PodRecord
    from kubedeck.models.metrics.container_stats import GraphSeries
    from kubedeck.models.state.dashboard_state import DashboardState
    from kubedeck.utils.cancellations import CancellationRegistry

logger = logging.getLogger(__name__)


class DashboardView(Protocol):
    """Rendering surface driven by the dashboard controllers."""

    def render_pods(self, pods: Sequence[PodRecord], selected_uid: str | None) -> None:
        """Redraw the pods table."""
        ...

    def refresh_pod_ages(self) -> None:
        """Recompute the age column without refetching."""
        ...

    def set_panel_label(
        self,
        panel: Panel,
        *,
        container: str | None = None,
        status: str | None = None,
        spinner: str | None = None,
    ) -> None:
        """Update a panel border label (title, container, status, spinner)."""
        ...

    def append_log_lines(self, lines: Sequence[str]) -> None: ...

    def render_graph(self, kind: GraphKind, series: Sequence[GraphSeries]) -> None: ...

    def show_graph_message(self, kind: GraphKind | None, message: str) -> None:
        """Replace one graph (or all of them when ``kind`` is None) by a notice."""
        ...

    def reset_selection(self) -> None:
        """Clear the log and resources panels."""
        ...

    def reset_all(self) -> None:
        """Clear every panel, including the pods table."""
        ...


class AsyncControllerMixin:
    """Mixin giving controllers the stale-callback guard.

    Callbacks of a background operation capture the selection generation it
    was started for and bail out once the selection moved on.
    """

    state: DashboardState

    def _is_current(self, generation: int) -> bool:
        return self.state.selection.is_current(generation)


class BaseController(AsyncControllerMixin, ABC):
    """Base class wiring a controller to the client, registry, state and view.

    Subclasses declare the registry key owning their background work in
    ``registry_key``; :meth:`stop` releases it.
    """

    registry_key: ClassVar[str]

    def __init__(
        self,
        client: ClusterClient,
        registry: CancellationRegistry,
        state: DashboardState,
        view: DashboardView,
        settings: AppSettings | None = None,
    ) -> None:
        self.client = client
        self.registry = registry
        self.state = state
        self.view = view
        self.settings = settings or AppSettings()

    @abstractmethod
    def start(self, *args, **kwargs) -> None:
        """Start the controller's background work."""
        ...

    def stop(self) -> None:
        """Cancel everything registered under :attr:`registry_key`."""
        self.registry.run(self.registry_key)
