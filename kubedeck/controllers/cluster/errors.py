"""Failures raised by the cluster client."""

from __future__ import annotations

import re
from typing import Any

# kubectl prints API failures as "Error from server (Reason): message".
_SERVER_ERROR_PATTERN = re.compile(r"Error from server \((\w+)\)(?::\s*(.*))?", re.DOTALL)

_REASON_STATUS: dict[str, int] = {
    "BadRequest": 400,
    "Unauthorized": 401,
    "Forbidden": 403,
    "NotFound": 404,
    "MethodNotAllowed": 405,
    "AlreadyExists": 409,
    "Conflict": 409,
    "Gone": 410,
    "Expired": 410,
    "Invalid": 422,
    "TooManyRequests": 429,
    "InternalError": 500,
    "ServiceUnavailable": 503,
    "Timeout": 504,
}


class ClusterClientError(Exception):
    """Base exception for failures talking to the cluster."""


class ApiError(ClusterClientError):
    """The API server answered with an HTTP error status.

    Attributes:
        status: HTTP status code.
        reason: Kubernetes ``Status.reason`` (e.g. ``NotFound``).
        message: Human-readable message from the server.
    """

    def __init__(self, status: int, reason: str = "", message: str = "") -> None:
        self.status = status
        self.reason = reason
        self.message = message
        super().__init__(f"{status} {reason}: {message}" if reason else f"{status}: {message}")


class NotFoundError(ApiError):
    """404: the resource does not exist (anymore)."""


class ForbiddenError(ApiError):
    """403: the current credentials are not allowed to access the resource."""


class WatchError(ApiError):
    """A watch stream delivered an ``ERROR`` event (e.g. 410 Gone)."""

    @classmethod
    def from_status(cls, status: dict[str, Any]) -> WatchError:
        return cls(
            int(status.get("code") or 500),
            str(status.get("reason") or ""),
            str(status.get("message") or ""),
        )


def api_error(status: int, reason: str = "", message: str = "") -> ApiError:
    """Build the most specific :class:`ApiError` for ``status``."""
    if status == 404:
        return NotFoundError(status, reason, message)
    if status == 403:
        return ForbiddenError(status, reason, message)
    return ApiError(status, reason, message)


def error_from_stderr(stderr: str) -> ClusterClientError:
    """Map kubectl stderr output to an exception.

    ``Error from server (Reason)`` lines become an :class:`ApiError` with the
    matching status; anything else (connection refused, missing binary
    configuration, ...) is a plain :class:`ClusterClientError`.
    """
    text = (stderr or "").strip()
    match = _SERVER_ERROR_PATTERN.search(text)
    if match:
        reason = match.group(1)
        message = (match.group(2) or "").strip()
        status = _REASON_STATUS.get(reason, 500)
        return api_error(status, reason, message)
    return ClusterClientError(text or "kubectl command failed")


__all__ = [
    "ApiError",
    "ClusterClientError",
    "ForbiddenError",
    "NotFoundError",
    "WatchError",
    "api_error",
    "error_from_stderr",
]
