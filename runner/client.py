from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import Any

import httpx

from runner.types import CheckResult, SmokeError, StatusError
from toolhub.domain.uuids import is_v4
from toolhub.logging_conf import get_logger

logger = get_logger("runner.client")

SAMPLE_TEXT = "Cat cat CAT, café café! 123 dog."
EXPECTED_COUNTS = {"cat": 3, "café": 2, "dog": 1}


async def wait_for_health(base_url: str, timeout_s: float = 20.0) -> None:
    """Ping /health until it reports healthy or raise after a timeout."""
    deadline = time.monotonic() + timeout_s
    async with httpx.AsyncClient(base_url=base_url, timeout=5.0) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/health")
                if r.status_code == 200 and r.json().get("status") == "healthy":
                    logger.info("health.ok", extra={"event": "health_ok"})
                    return
            except httpx.HTTPError:
                pass
            await asyncio.sleep(0.25)
    raise SmokeError("Health check did not pass within timeout")


async def fetch_status(base_url: str, *, retries: int = 3) -> dict[str, str]:
    """Return `{tool: "online"|"offline"}` from /api/status, with basic retry."""
    last_err: Exception | None = None
    for attempt in range(retries):
        try:
            async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
                r = await client.get("/api/status")
                r.raise_for_status()
                return {tool: info["status"] for tool, info in r.json().items()}
        except (httpx.HTTPError, KeyError, ValueError) as e:  # pragma: no cover - network flakiness
            last_err = e
            logger.warning(
                "status.retry",
                extra={"event": "status_retry", "attempt": attempt + 1, "error": str(e)},
            )
    raise StatusError(str(last_err) if last_err else "status fetch failed")


def _check_word_count(data: dict[str, Any]) -> str | None:
    if data.get("word_counts") != EXPECTED_COUNTS:
        return f"unexpected word_counts: {data.get('word_counts')}"
    if data.get("total_words") != sum(EXPECTED_COUNTS.values()):
        return f"unexpected total_words: {data.get('total_words')}"
    return None


def _check_uuids(data: dict[str, Any]) -> str | None:
    got = data.get("uuids") or []
    if len(got) != 3:
        return f"expected 3 uuids, got {len(got)}"
    bad = [u for u in got if not is_v4(u) or "-" in u]
    return f"malformed uuids: {bad}" if bad else None


def _check_ai(data: dict[str, Any]) -> str | None:
    text = (data.get("ai_response") or {}).get("text")
    return None if isinstance(text, str) and text else "empty ai_response.text"


async def _exercise(
    client: httpx.AsyncClient,
    tool: str,
    payload: dict[str, Any],
    check: Callable[[dict[str, Any]], str | None],
) -> CheckResult:
    start = time.perf_counter()
    try:
        r = await client.post(f"/api/{tool}", json=payload)
    except httpx.HTTPError as e:
        return CheckResult(tool=tool, ok=False, error=f"{type(e).__name__}: {e}")
    elapsed_ms = round((time.perf_counter() - start) * 1000.0, 2)

    if r.status_code != 200:
        return CheckResult(
            tool=tool, ok=False, status_code=r.status_code, elapsed_ms=elapsed_ms, error=r.text
        )
    error = check(r.json())
    return CheckResult(
        tool=tool, ok=error is None, status_code=200, elapsed_ms=elapsed_ms, error=error
    )


async def exercise_tools(
    base_url: str, status: dict[str, str], *, prompt: str, timeout_s: float = 60.0
) -> list[CheckResult]:
    """Call every online tool concurrently; offline tools are reported as skipped."""
    plan = {
        "word-count": ({"text": SAMPLE_TEXT}, _check_word_count),
        "generate-uuid": ({"count": 3, "format": "raw"}, _check_uuids),
        "ai-tool": ({"prompt": prompt}, _check_ai),
    }
    results: list[CheckResult] = []
    async with httpx.AsyncClient(base_url=base_url, timeout=timeout_s) as client:
        tasks = []
        for tool, (payload, check) in plan.items():
            if status.get(tool) != "online":
                results.append(CheckResult(tool=tool, ok=True, skipped=True))
                continue
            tasks.append(_exercise(client, tool, payload, check))
        results.extend(await asyncio.gather(*tasks))

    for res in results:
        logger.info(
            "tool.checked",
            extra={
                "event": "tool_checked",
                "tool": res.tool,
                "ok": res.ok,
                "skipped": res.skipped,
                "status_code": res.status_code,
                "elapsed_ms": res.elapsed_ms,
            },
        )
    return results
