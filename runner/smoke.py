#!/usr/bin/env python3
"""Smoke runner for a live server.

Steps:
- wait for /health
- read /api/status
- call every online tool with a fixed payload and check the response shape
- emit a compact JSON summary and exit 0 only if every online tool passed
"""
from __future__ import annotations

import asyncio
import sys

from runner.cli import parse_args
from runner.client import exercise_tools, fetch_status, wait_for_health
from runner.types import CheckResult
from toolhub.logging_conf import get_logger, setup_logging

setup_logging()
logger = get_logger("runner")


def summarize(status: dict[str, str], results: list[CheckResult]) -> tuple[dict, int]:
    """Compute summary dict and an exit code from the per-tool results."""
    passed = [r.tool for r in results if r.ok and not r.skipped]
    failed = [
        {"tool": r.tool, "status_code": r.status_code, "error": r.error}
        for r in results
        if not r.ok
    ]
    summary = {
        "component": "runner",
        "event": "summary",
        "status": status,
        "passed": passed,
        "skipped": [r.tool for r in results if r.skipped],
        "failures": failed,
        "timings_ms": {r.tool: r.elapsed_ms for r in results if not r.skipped},
    }
    exit_code = 0 if (passed and not failed) else 1
    return summary, exit_code


async def run_smoke(
    *, base_url: str, prompt: str, health_timeout_s: float = 20.0, timeout_s: float = 60.0
) -> int:
    await wait_for_health(base_url, health_timeout_s)
    status = await fetch_status(base_url)
    results = await exercise_tools(base_url, status, prompt=prompt, timeout_s=timeout_s)
    summary, exit_code = summarize(status, results)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    code = asyncio.run(
        run_smoke(
            base_url=args.base_url,
            prompt=args.prompt,
            health_timeout_s=args.health_timeout,
            timeout_s=args.timeout,
        )
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
