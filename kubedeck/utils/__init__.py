"""Utility functions and classes for KubeDeck TUI."""

from kubedeck.utils.cancellations import (
    CancellationRegistry,
)
from kubedeck.utils.task_pipeline import (
    AsyncOperation,
    TaskPipeline,
    until,
)
from kubedeck.utils.timers import (
    Debouncer,
    Interval,
)

__all__ = [
    # Async
    "AsyncOperation",
    # Cancellation
    "CancellationRegistry",
    # Timers
    "Debouncer",
    "Interval",
    "TaskPipeline",
    "until",
]
