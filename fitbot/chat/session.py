"""Client-side chat session.

Owns the message list and the in-flight flag that a chat widget would
otherwise keep as global UI state. Each send() opens one streaming
request, grows the trailing assistant message as deltas arrive, and
rolls that message back if the transport fails.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from fitbot.errors import TransportError
from fitbot.schemas.chat import ChatMessage, ChatRole
from fitbot.streaming.decoder import DEFAULT_MAX_LINE_RETRIES, aiter_events

logger = logging.getLogger(__name__)

DEFAULT_GREETING = (
    "Hi! I'm FitBot, your AI fitness coach. Ask me anything about workouts, "
    "nutrition, or health! 💪"
)

# Shown to the user whenever a request fails
ERROR_NOTICE = "Failed to get response from AI"

UpdateCallback = Callable[[ChatMessage], Any]
ErrorCallback = Callable[[TransportError], Any]


class ByteStreamTransport(Protocol):
    """Anything that can stream a conversation as raw bytes."""

    def stream(self, messages: list[ChatMessage]) -> Any: ...


async def _call(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if asyncio.iscoroutine(result):
        await result


class ChatSession:
    """One conversation with the assistant.

    Usage:
        session = ChatSession(ChatTransport(url, key), on_update=render)
        reply = await session.send("How many rest days do I need?")

    Args:
        transport: Streams the conversation, e.g. ChatTransport.
        greeting: Assistant message the conversation opens with.
        max_line_retries: Passed through to the event-stream decoder.
        on_update: Called with the assistant message after every delta.
        on_error: Called once with the TransportError of a failed send.
    """

    def __init__(
        self,
        transport: ByteStreamTransport,
        *,
        greeting: str = DEFAULT_GREETING,
        max_line_retries: int | None = DEFAULT_MAX_LINE_RETRIES,
        on_update: UpdateCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._transport = transport
        self._greeting = greeting
        self._max_line_retries = max_line_retries
        self._on_update = on_update
        self._on_error = on_error
        self._messages: list[ChatMessage] = []
        self._loading = False
        self.reset()

    @property
    def messages(self) -> list[ChatMessage]:
        """Snapshot of the conversation, oldest first."""
        return list(self._messages)

    @property
    def loading(self) -> bool:
        """True while a reply is streaming; send() is refused meanwhile."""
        return self._loading

    def reset(self) -> None:
        """Drop the conversation and start again from the greeting."""
        self._messages = [ChatMessage(role=ChatRole.ASSISTANT, content=self._greeting)]

    async def send(self, text: str) -> ChatMessage | None:
        """Send a user message and stream the reply into the conversation.

        Returns the completed assistant message, or None when the input
        was blank, another reply was in flight, or the request failed.
        """
        if not text.strip() or self._loading:
            return None

        self._messages.append(ChatMessage(role=ChatRole.USER, content=text))
        self._loading = True
        reply: ChatMessage | None = None

        try:
            chunks = self._transport.stream(list(self._messages))
            reply = ChatMessage(role=ChatRole.ASSISTANT, content="")
            self._messages.append(reply)

            async for event in aiter_events(
                chunks, max_line_retries=self._max_line_retries,
            ):
                if event.is_delta:
                    reply.content += event.text
                    await _call(self._on_update, reply)
        except TransportError as exc:
            logger.warning("Chat request failed: %s", exc)
            self._rollback(reply)
            await _call(self._on_error, exc)
            return None
        finally:
            self._loading = False

        return reply

    def _rollback(self, reply: ChatMessage | None) -> None:
        """Remove the in-progress assistant message, if it was appended."""
        if reply is None:
            return
        for index in range(len(self._messages) - 1, -1, -1):
            if self._messages[index] is reply:
                del self._messages[index]
                return
