"""Application configuration schema.

Loaded from the bundled defaults.toml and overridden from the
environment by fitbot.settings.load_settings().
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatConfig(BaseModel):
    """Client-side chat settings."""

    url: str = Field(default="", description="Streaming chat endpoint URL")
    greeting: str = Field(description="Assistant message that opens every session")
    timeout: float = Field(default=120.0, gt=0, description="Socket timeout in seconds")
    chunk_size: int = Field(default=4096, gt=0, description="Max bytes per read")
    max_line_retries: int | None = Field(
        default=3,
        ge=0,
        description="Push-backs allowed per malformed line; None = unbounded",
    )


class ModelSettings(BaseModel):
    """Server-side completion model used by the chat endpoint."""

    model: str = Field(description="LiteLLM model identifier")
    api_key_env: str = Field(description="Environment variable holding the API key")
    api_base: str = Field(default="", description="Custom API base URL (empty = provider default)")
    timeout: int = Field(default=120, gt=0)
    system_prompt: str = Field(description="System prompt prepended to every chat")


class ApiSettings(BaseModel):
    cors_origins: list[str] = Field(default_factory=list)


class FitbotSettings(BaseModel):
    """Top-level configuration."""

    chat: ChatConfig
    model: ModelSettings
    api: ApiSettings = Field(default_factory=ApiSettings)
