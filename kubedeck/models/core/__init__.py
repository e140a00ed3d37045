"""Core cluster models."""

from kubedeck.models.core.pod_info import ContainerInfo, PodRecord
from kubedeck.models.core.pod_mirror import PodMirror, WatchEvent

__all__ = [
    "ContainerInfo",
    "PodMirror",
    "PodRecord",
    "WatchEvent",
]
