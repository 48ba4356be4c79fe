from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass
from typing import Any

import httpx

from ..config import Settings
from ..errors import InternalError, ServiceOfflineError, UpstreamError, UpstreamTimeoutError
from ..logging_conf import get_logger

__all__ = ["AiAnswer", "AiProxy", "extract_text"]

logger = get_logger("service.ai_proxy")


@dataclass(frozen=True)
class AiAnswer:
    """Plain-text answer extracted from the provider's message envelope."""

    text: str
    model: str | None = None
    stop_reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def extract_text(body: Any) -> str:
    """Join the text of every `{"type": "text"}` content block.

    Raises:
        ValueError: if the body has no text content blocks.
    """
    if not isinstance(body, dict) or not isinstance(body.get("content"), list):
        raise ValueError("response has no content list")
    parts = [
        block["text"]
        for block in body["content"]
        if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str)
    ]
    if not parts:
        raise ValueError("response has no text content")
    return "".join(parts)


def _body_of(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class AiProxy:
    """Forward a single prompt to the configured completion endpoint.

    One request per call, bounded by `settings.ai_timeout_s`, no retries.
    Pass `client` to reuse a shared (or mocked) httpx.AsyncClient; otherwise
    the proxy creates one on first use and closes it in aclose().
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def enabled(self) -> bool:
        return self.settings.ai_enabled

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.settings.ai_model,
            "max_tokens": self.settings.ai_max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self.settings.ai_api_key,
            "anthropic-version": self.settings.ai_api_version,
        }

    async def complete(self, prompt: str) -> AiAnswer:
        """Send `prompt` as the only user message and return the answer text."""
        if not self.enabled:
            raise ServiceOfflineError("AI service unavailable: no API key configured")

        url = str(self.settings.ai_api_url)
        try:
            # Wall-clock bound on the whole exchange, body included.
            async with asyncio.timeout(self.settings.ai_timeout_s):
                response = await self._get_client().post(
                    url,
                    json=self._request_body(prompt),
                    headers=self._headers(),
                    timeout=self.settings.ai_timeout_s,
                )
        except (httpx.TimeoutException, TimeoutError) as e:
            logger.warning("ai.timeout", extra={"event": "ai_timeout", "timeout_s": self.settings.ai_timeout_s})
            raise UpstreamTimeoutError(
                f"AI provider did not answer within {self.settings.ai_timeout_s}s",
                details=str(e) or type(e).__name__,
            ) from e
        except httpx.HTTPError as e:
            logger.exception("ai.transport_error", extra={"event": "ai_transport_error"})
            raise InternalError("Internal server error", details=str(e) or type(e).__name__) from e

        body = _body_of(response)
        if not response.is_success:
            logger.warning(
                "ai.upstream_error",
                extra={"event": "ai_upstream_error", "status_code": response.status_code},
            )
            # 4xx/5xx keep the provider status; anything else maps to 502.
            forwarded = response.status_code if response.status_code >= 400 else None
            raise UpstreamError(
                f"AI provider error: {response.reason_phrase or response.status_code}",
                details=body,
                status_code=forwarded,
            )

        try:
            text = extract_text(body)
        except ValueError as e:
            logger.warning("ai.malformed_response", extra={"event": "ai_malformed_response"})
            raise UpstreamError(f"AI provider returned a malformed response: {e}", details=body) from e

        logger.info("ai.complete", extra={"event": "ai_complete", "chars": len(text)})
        return AiAnswer(
            text=text,
            model=body.get("model") if isinstance(body.get("model"), str) else None,
            stop_reason=body.get("stop_reason") if isinstance(body.get("stop_reason"), str) else None,
        )
