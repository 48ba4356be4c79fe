from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CheckResult:
    """Outcome of exercising one tool."""

    tool: str
    ok: bool
    status_code: int | None = None
    elapsed_ms: float = 0.0
    error: str | None = None
    skipped: bool = False


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., health never ready)."""


class StatusError(SmokeError):
    """Raised when /api/status can't be read after retries."""
