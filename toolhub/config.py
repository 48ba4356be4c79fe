"""Process configuration read from environment variables.

Settings are validated once at startup; a bad value aborts the process
instead of surfacing later as a broken request. A missing API key is not
an error: the AI tool simply starts offline.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationError, field_validator

__all__ = ["ConfigError", "Settings", "ENV_VARS", "load_settings"]

DEFAULT_AI_API_URL = "https://api.anthropic.com/v1/messages"


class ConfigError(ValueError):
    """Raised when the environment holds an invalid setting."""


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, validate_default=True)

    host: str = "0.0.0.0"
    port: int = Field(3000, ge=1, le=65535)
    ai_api_url: HttpUrl = DEFAULT_AI_API_URL  # type: ignore[assignment]
    ai_api_key: str = ""
    ai_model: str = Field("claude-3-opus-20240229", min_length=1)
    ai_api_version: str = Field("2023-06-01", min_length=1)
    ai_max_tokens: int = Field(1024, ge=1)
    ai_timeout_s: float = Field(30.0, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def ai_enabled(self) -> bool:
        return bool(self.ai_api_key.strip())


# Environment variable -> Settings field
ENV_VARS: dict[str, str] = {
    "HOST": "host",
    "PORT": "port",
    "CLAUDE_API_URL": "ai_api_url",
    "CLAUDE_API_KEY": "ai_api_key",
    "CLAUDE_MODEL": "ai_model",
    "CLAUDE_API_VERSION": "ai_api_version",
    "CLAUDE_MAX_TOKENS": "ai_max_tokens",
    "AI_TIMEOUT_SECONDS": "ai_timeout_s",
    "LOG_LEVEL": "log_level",
}


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from `env` (defaults to os.environ).

    Unset or empty variables fall back to the field default.

    Raises:
        ConfigError: listing every invalid variable.
    """
    env = os.environ if env is None else env
    raw = {field: env[var] for var, field in ENV_VARS.items() if env.get(var, "") != ""}
    try:
        return Settings(**raw)
    except ValidationError as e:
        by_field = {field: var for var, field in ENV_VARS.items()}
        problems = [
            f"{by_field.get(str(err['loc'][0]), err['loc'][0])}: {err['msg']}" for err in e.errors()
        ]
        raise ConfigError("invalid configuration: " + "; ".join(problems)) from e
