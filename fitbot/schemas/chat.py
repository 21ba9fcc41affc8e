"""Chat message schemas shared by the client session and the chat endpoint."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class ChatRole(StrEnum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """One entry of the conversation.

    Assistant messages are mutated in place while a reply streams in,
    so the model is not frozen.
    """

    role: ChatRole = Field(description="Who wrote the message")
    content: str = Field(default="", description="Message text")

    def to_wire(self) -> dict[str, str]:
        """Render as an OpenAI-style ``{"role", "content"}`` dict."""
        return {"role": str(self.role), "content": self.content}


class ChatRequest(BaseModel):
    """Body of a chat completion request: the full conversation so far."""

    messages: list[ChatMessage] = Field(
        min_length=1, description="Conversation history, oldest first"
    )
