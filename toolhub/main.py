"""FastAPI app factory: health, tool status, tool routes and the demo page."""
from __future__ import annotations

import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from toolhub import __version__
from toolhub.api import router as api_router
from toolhub.api.models import HealthResponse
from toolhub.config import Settings, load_settings
from toolhub.domain.status import ToolStatus
from toolhub.errors import ToolError
from toolhub.logging_conf import get_logger, setup_logging
from toolhub.service.ai_proxy import AiProxy

logger = get_logger("app")

STATIC_DIR = Path(__file__).resolve().parent / "static"


def _validation_issues(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors to one `{field, message, type}` entry per problem."""
    issues = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        issues.append(
            {
                "field": ".".join(loc) or "body",
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
        )
    return issues


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        issues = _validation_issues(exc)
        logger.info(
            "request.invalid",
            extra={"event": "request_invalid", "path": request.url.path, "issues": len(issues)},
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request", "details": issues})

    @app.exception_handler(StarletteHTTPException)
    async def _on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        content: dict[str, Any] = {"error": exc.detail if isinstance(exc.detail, str) else "HTTP error"}
        if not isinstance(exc.detail, str):
            content["details"] = exc.detail
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(ToolError)
    async def _on_tool_error(request: Request, exc: ToolError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(Exception)
    async def _on_unexpected(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc) or type(exc).__name__},
        )


def create_app(
    settings: Settings | None = None,
    *,
    tool_status: ToolStatus | None = None,
    ai_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the application.

    `settings` defaults to the environment (raising ConfigError on bad
    values). `tool_status` overrides the status derived from settings and
    `ai_client` replaces the outbound HTTP client; both exist for tests.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="toolhub", version=__version__)
    app.state.settings = settings
    app.state.tool_status = tool_status or ToolStatus.from_settings(settings)
    app.state.ai_proxy = AiProxy(settings, client=ai_client)
    app.state.started_at = time.monotonic()

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "startup",
            extra={"event": "startup", "tools": app.state.tool_status.as_dict()},
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        await app.state.ai_proxy.aclose()
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """Log start/end of every request under a shared X-Request-ID."""
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "method": request.method,
                    "path": request.url.path,
                    "request_id": request_id,
                },
            )
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    _install_error_handlers(app)

    @app.get("/health", response_model=HealthResponse, summary="Liveness check")
    async def health() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(UTC).isoformat(timespec="milliseconds"),
            uptime=round(time.monotonic() - app.state.started_at, 3),
        )

    app.include_router(api_router)

    # Mounted last so it never shadows the API routes.
    if STATIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")

    return app


# ASGI entrypoint for uvicorn: `uvicorn toolhub.main:app --port 3000`
app = create_app()
