"""Streaming schemas for incremental chat replies.

StreamEvent is the unit emitted by the event-stream decoder. Only
CONTENT_DELTA and STREAM_END matter to a display sink; COMMENT and
MALFORMED exist so callers can observe what the decoder skipped.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class StreamEventType(StrEnum):
    """Kinds of decoded stream events."""

    CONTENT_DELTA = "content_delta"
    STREAM_END = "stream_end"
    COMMENT = "comment"
    MALFORMED = "malformed"


class StreamEvent(BaseModel):
    """A single decoded logical unit of the event stream."""

    type: StreamEventType = Field(description="Event kind")
    text: str = Field(
        default="",
        description="Delta text, comment body, or the dropped raw line",
    )

    @classmethod
    def content_delta(cls, text: str) -> StreamEvent:
        return cls(type=StreamEventType.CONTENT_DELTA, text=text)

    @classmethod
    def stream_end(cls) -> StreamEvent:
        return cls(type=StreamEventType.STREAM_END)

    @classmethod
    def comment(cls, text: str) -> StreamEvent:
        return cls(type=StreamEventType.COMMENT, text=text)

    @classmethod
    def malformed(cls, line: str) -> StreamEvent:
        return cls(type=StreamEventType.MALFORMED, text=line)

    @property
    def is_delta(self) -> bool:
        return self.type == StreamEventType.CONTENT_DELTA

    @property
    def is_end(self) -> bool:
        return self.type == StreamEventType.STREAM_END
