from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from toolhub.config import Settings
from toolhub.domain.status import ToolStatus
from toolhub.main import create_app

AI_URL = "https://ai.example.test/v1/messages"


class UpstreamRecorder:
    """Stand-in for the completion provider; records every request it receives."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.respond = respond or (lambda request: httpx.Response(200, json=message_body("hello")))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def message_body(text: str, **extra) -> dict:
    body = {
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "model": "claude-test",
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
    }
    body.update(extra)
    return body


@pytest.fixture
def settings() -> Settings:
    return Settings(ai_api_url=AI_URL, ai_api_key="test-key", ai_model="claude-test")


@pytest.fixture
def upstream() -> UpstreamRecorder:
    return UpstreamRecorder()


@pytest.fixture
def make_client(settings: Settings, upstream: UpstreamRecorder):
    def _make(
        *, settings: Settings = settings, tool_status: ToolStatus | None = None
    ) -> TestClient:
        app = create_app(settings, tool_status=tool_status, ai_client=upstream.client())
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
