"""Controllers module for KubeDeck TUI.

This module provides the streaming and polling controllers that keep the
dashboard in sync with one namespace of a Kubernetes cluster.
"""

from __future__ import annotations

# Base classes
from kubedeck.controllers.base import (
    AsyncControllerMixin,
    BaseController,
    DashboardView,
)

# Cluster access
from kubedeck.controllers.cluster import (
    ApiError,
    ClusterClient,
    KubectlClient,
)

# Dashboard domain
from kubedeck.controllers.dashboard.controller import DashboardController
from kubedeck.controllers.logs.controller import LogFollowController
from kubedeck.controllers.pods.controller import PodWatchController
from kubedeck.controllers.shell.controller import ExecSessionManager
from kubedeck.controllers.stats.controller import StatsController

__all__ = [
    "ApiError",
    # Base
    "AsyncControllerMixin",
    "BaseController",
    "ClusterClient",
    # Domain Controllers
    "DashboardController",
    "DashboardView",
    "ExecSessionManager",
    "KubectlClient",
    "LogFollowController",
    "PodWatchController",
    "StatsController",
]
