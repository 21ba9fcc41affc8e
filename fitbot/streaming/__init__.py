"""Streaming chat replies: byte transport and event-stream decoding."""

from fitbot.streaming.decoder import (
    EventStreamDecoder,
    aiter_events,
    extract_delta_content,
    iter_events,
)
from fitbot.streaming.transport import ChatTransport

__all__ = [
    "ChatTransport",
    "EventStreamDecoder",
    "aiter_events",
    "extract_delta_content",
    "iter_events",
]
