from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..domain.uuids import MAX_UUID_COUNT, UuidFormat
from ..domain.words import MAX_TEXT_CHARS


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty or whitespace only")
    return value


class WordCountRequest(BaseModel):
    """Text to tokenize and count."""
    text: str = Field(..., max_length=MAX_TEXT_CHARS)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class WordCountResponse(BaseModel):
    word_counts: dict[str, int]
    total_words: int


class GenerateUuidRequest(BaseModel):
    """How many UUIDs to generate and how to render them."""
    count: int = Field(1, ge=1, le=MAX_UUID_COUNT, strict=True)
    format: UuidFormat = UuidFormat.formatted


class GenerateUuidResponse(BaseModel):
    uuids: list[str]


class AiToolRequest(BaseModel):
    prompt: str

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class AiAnswerModel(BaseModel):
    text: str
    model: Optional[str] = None
    stop_reason: Optional[str] = None


class AiToolResponse(BaseModel):
    ai_response: AiAnswerModel


class ToolStateModel(BaseModel):
    status: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    uptime: float


class ErrorResponse(BaseModel):
    """Envelope returned for every non-2xx response."""
    error: str
    details: Any = None
