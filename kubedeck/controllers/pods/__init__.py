"""Pods watch synchronizer."""

from kubedeck.controllers.pods.controller import PodWatchController, next_container

__all__ = [
    "PodWatchController",
    "next_container",
]
