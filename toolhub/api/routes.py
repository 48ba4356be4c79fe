from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Depends, Request

from ..domain import uuids, words
from ..domain.status import ToolId, ToolStatus
from ..errors import ServiceOfflineError
from ..logging_conf import get_logger
from ..service.ai_proxy import AiProxy
from .models import (
    AiToolRequest,
    AiToolResponse,
    ErrorResponse,
    GenerateUuidRequest,
    GenerateUuidResponse,
    ToolStateModel,
    WordCountRequest,
    WordCountResponse,
)

router = APIRouter(prefix="/api")
logger = get_logger("api")

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid request body"},
    503: {"model": ErrorResponse, "description": "Tool offline"},
}


def get_tool_status(request: Request) -> ToolStatus:
    return request.app.state.tool_status


def get_ai_proxy(request: Request) -> AiProxy:
    return request.app.state.ai_proxy


def require_online(tool: ToolId) -> Callable[[Request], None]:
    """Dependency that rejects the request with 503 while `tool` is offline.

    Runs before body validation, so an offline tool never touches the input.
    """

    def _check(request: Request) -> None:
        if not get_tool_status(request).is_online(tool):
            logger.info("tool.offline", extra={"event": "tool_offline", "tool": tool.value})
            raise ServiceOfflineError(f"Service '{tool.value}' is temporarily unavailable")

    return _check


@router.get(
    "/status",
    response_model=dict[str, ToolStateModel],
    summary="Online/offline state of every tool",
)
async def tool_status(status: ToolStatus = Depends(get_tool_status)) -> dict[str, dict[str, str]]:
    return status.as_dict()


@router.post(
    "/word-count",
    response_model=WordCountResponse,
    responses=_ERRORS,
    dependencies=[Depends(require_online(ToolId.word_count))],
    summary="Count word frequencies",
)
async def word_count(req: WordCountRequest) -> WordCountResponse:
    """Tokenize the text into Unicode letter runs and tally each word."""
    result = words.analyze_text(req.text)
    logger.info(
        "word_count.done",
        extra={
            "event": "word_count",
            "unique_words": len(result.word_counts),
            "total_words": result.total_words,
        },
    )
    return WordCountResponse(word_counts=result.word_counts, total_words=result.total_words)


@router.post(
    "/generate-uuid",
    response_model=GenerateUuidResponse,
    responses=_ERRORS,
    dependencies=[Depends(require_online(ToolId.generate_uuid))],
    summary="Generate random v4 UUIDs",
)
async def generate_uuid(req: GenerateUuidRequest | None = None) -> GenerateUuidResponse:
    req = req or GenerateUuidRequest()
    out = uuids.generate_uuids(req.count, req.format)
    logger.info(
        "uuid.generate",
        extra={"event": "uuid_generate", "count": req.count, "format": req.format.value},
    )
    return GenerateUuidResponse(uuids=out)


@router.post(
    "/ai-tool",
    response_model=AiToolResponse,
    responses={
        **_ERRORS,
        502: {"model": ErrorResponse, "description": "Provider error"},
        504: {"model": ErrorResponse, "description": "Provider timeout"},
    },
    dependencies=[Depends(require_online(ToolId.ai_tool))],
    summary="Ask the configured AI provider",
)
async def ai_tool(req: AiToolRequest, proxy: AiProxy = Depends(get_ai_proxy)) -> AiToolResponse:
    """Forward the prompt and return the provider's answer as plain text."""
    answer = await proxy.complete(req.prompt)
    return AiToolResponse(ai_response=answer.to_dict())
