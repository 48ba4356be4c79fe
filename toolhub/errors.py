"""Error taxonomy shared by the tools and the HTTP layer.

Each error knows its HTTP status and renders to the `{error, details?}`
envelope; the exception handlers in `toolhub.main` do the rest.
"""
from __future__ import annotations

from typing import Any

__all__ = [
    "ToolError",
    "ServiceOfflineError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "InternalError",
]


class ToolError(Exception):
    """Base class for errors that map to a JSON error response."""

    status_code: int = 500

    def __init__(self, message: str, *, details: Any = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ServiceOfflineError(ToolError):
    status_code = 503


class UpstreamError(ToolError):
    """The completion provider answered with an error or an unusable body."""

    status_code = 502


class UpstreamTimeoutError(UpstreamError):
    status_code = 504


class InternalError(ToolError):
    status_code = 500
