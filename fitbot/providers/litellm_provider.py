"""LiteLLM adapter implementing the ChatProvider interface.

Routes streaming completion requests to any LLM provider via LiteLLM's
unified API, with timeouts and retry with exponential backoff.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterator

import litellm

# Suppress LiteLLM's "Give Feedback / Get Help" and "Provider List" banners
litellm.suppress_debug_info = True

from fitbot.providers.base import ChatProvider
from fitbot.schemas.chat import ChatMessage, ChatRole
from fitbot.schemas.config import ModelSettings

logger = logging.getLogger(__name__)

# Max retries for transient failures
_MAX_RETRIES = 3
_BASE_BACKOFF = 1.0  # seconds


def _short_error_reason(error: Exception) -> str:
    """Extract a short, user-friendly reason from a LiteLLM error."""
    error_str = str(error).lower()
    if "rate" in error_str or "429" in error_str:
        return "rate limit"
    if "overloaded" in error_str or "529" in error_str:
        return "overloaded"
    if "timeout" in error_str or isinstance(error, TimeoutError):
        return "timeout"
    if "503" in error_str or "unavailable" in error_str:
        return "service unavailable"
    if "500" in error_str or "internal" in error_str:
        return "server error"
    if "connection" in error_str:
        return "connection error"
    return str(error)[:80]


class LiteLLMChatProvider(ChatProvider):
    """Streams FitBot replies through litellm.acompletion()."""

    def __init__(self, config: ModelSettings) -> None:
        super().__init__(config)
        self._api_key = os.environ.get(config.api_key_env, "")

    async def open_stream(self, messages: list[ChatMessage]) -> AsyncIterator[str]:
        """Prepend the system prompt, start streaming, return the deltas."""
        full_messages = [
            {"role": str(ChatRole.SYSTEM), "content": self.system_prompt},
            *(m.to_wire() for m in messages if m.role != ChatRole.SYSTEM),
        ]
        kwargs = self._build_completion_kwargs(full_messages)
        response = await self._call_streaming_with_retry(kwargs)
        return self._iter_deltas(response)

    async def _iter_deltas(self, response) -> AsyncIterator[str]:
        async for chunk in response:
            delta = ""
            if chunk.choices and chunk.choices[0].delta:
                delta = chunk.choices[0].delta.content or ""
            if delta:
                yield delta

    def _build_completion_kwargs(self, messages: list[dict[str, str]]) -> dict:
        """Build the kwargs dict for litellm.acompletion."""
        kwargs: dict = {
            "model": self._config.model,
            "messages": messages,
            "timeout": float(self._config.timeout),
            "stream": True,
        }

        if self._api_key:
            kwargs["api_key"] = self._api_key

        if self._config.api_base:
            kwargs["api_base"] = self._config.api_base

        return kwargs

    async def _call_streaming_with_retry(self, kwargs: dict):
        """Call litellm.acompletion with stream=True and retry on failure.

        Retries on transient errors (rate limits, server errors, timeouts).
        Non-retryable errors (auth, invalid request) are raised immediately.
        """
        last_error: Exception | None = None

        for attempt in range(_MAX_RETRIES):
            try:
                return await litellm.acompletion(**kwargs)
            except TimeoutError:
                last_error = TimeoutError(
                    f"Streaming call timed out after {kwargs.get('timeout')}s "
                    f"(attempt {attempt + 1}/{_MAX_RETRIES})"
                )
            except litellm.AuthenticationError:
                raise RuntimeError(
                    f"Authentication failed for {self._config.model}. "
                    f"Check that {self._config.api_key_env} is set correctly."
                ) from None
            except litellm.BadRequestError as e:
                raise RuntimeError(
                    f"Bad request to {self._config.model}: {e}"
                ) from e
            except (
                litellm.RateLimitError,
                litellm.ServiceUnavailableError,
                litellm.InternalServerError,
                litellm.APIConnectionError,
            ) as e:
                last_error = e

            if attempt < _MAX_RETRIES - 1:
                backoff = _BASE_BACKOFF * (2**attempt)
                logger.warning(
                    "Streaming retry %d/%d for %s (%s, backoff: %.1fs)",
                    attempt + 1, _MAX_RETRIES, self._config.model,
                    _short_error_reason(last_error), backoff,
                )
                await asyncio.sleep(backoff)

        if isinstance(last_error, TimeoutError):
            raise last_error
        raise RuntimeError(
            f"Streaming call to {self._config.model} failed after "
            f"{_MAX_RETRIES} retries: {last_error}"
        ) from last_error
