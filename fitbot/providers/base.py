"""Abstract interface for chat completion providers.

The chat endpoint only ever talks to a ChatProvider; swapping the
backing model service never touches the HTTP layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from fitbot.schemas.chat import ChatMessage
from fitbot.schemas.config import ModelSettings


class ChatProvider(ABC):
    """A model that can stream a reply to a conversation."""

    def __init__(self, config: ModelSettings) -> None:
        self._config = config

    @property
    def model_id(self) -> str:
        """LiteLLM model identifier used for routing."""
        return self._config.model

    @property
    def system_prompt(self) -> str:
        return self._config.system_prompt

    @property
    def config(self) -> ModelSettings:
        return self._config

    @abstractmethod
    async def open_stream(self, messages: list[ChatMessage]) -> AsyncIterator[str]:
        """Start a completion and return an iterator of text deltas.

        Awaiting this call establishes the upstream stream, so failures
        to connect surface here rather than mid-iteration.

        Raises:
            TimeoutError: If the call exceeds the timeout after all retries.
            RuntimeError: If the call fails after all retries.
        """
