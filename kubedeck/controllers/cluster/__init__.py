"""Cluster access: client interface, errors and the kubectl implementation."""

from kubedeck.controllers.cluster.client import (
    ByteStream,
    ClusterClient,
    EventStream,
    ExecChannel,
)
from kubedeck.controllers.cluster.errors import (
    ApiError,
    ClusterClientError,
    ForbiddenError,
    NotFoundError,
    WatchError,
)
from kubedeck.controllers.cluster.kubectl_client import KubectlClient

__all__ = [
    "ApiError",
    "ByteStream",
    "ClusterClient",
    "ClusterClientError",
    "EventStream",
    "ExecChannel",
    "ForbiddenError",
    "KubectlClient",
    "NotFoundError",
    "WatchError",
]
