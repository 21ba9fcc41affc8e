"""Incremental decoder for ``data:``-framed chat completion streams.

Turns arbitrarily chunked bytes from the chat endpoint into StreamEvent
values. Fragment boundaries carry no meaning: a fragment may end in the
middle of a line or in the middle of a multi-byte UTF-8 character.

Framing, one event per line:
    : keep-alive             comment, ignored
    data: {"choices": ...}   completion chunk
    data: [DONE]             end of stream

A data line whose payload is not valid JSON is assumed to be only
partially received. It is pushed back to the front of the buffer and
extraction stops until the next fragment arrives. A push-back bound
keeps a genuinely corrupt line from stalling the stream forever.
"""

from __future__ import annotations

import codecs
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from fitbot.schemas.streaming import StreamEvent

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"
DEFAULT_MAX_LINE_RETRIES = 3


class _Delta(BaseModel):
    content: str | None = None


class _Choice(BaseModel):
    delta: _Delta | None = None


class _CompletionChunk(BaseModel):
    choices: list[Any] = Field(default_factory=list)


def extract_delta_content(payload: Any) -> str | None:
    """Pull ``choices[0].delta.content`` out of a parsed payload.

    Fails soft: any payload of the wrong shape yields None.
    """
    try:
        chunk = _CompletionChunk.model_validate(payload)
        if not chunk.choices:
            return None
        choice = _Choice.model_validate(chunk.choices[0])
    except ValidationError:
        return None
    if choice.delta is None:
        return None
    return choice.delta.content or None


class EventStreamDecoder:
    """Stateful decoder for one streamed reply.

    Create one per request. Call feed() with every fragment in arrival
    order and finish() once the transport is exhausted. After a
    ``[DONE]`` line the decoder is done and ignores further input.

    Args:
        max_line_retries: How many times the same unparseable line may be
            pushed back before it is dropped as MALFORMED. None keeps
            pushing back indefinitely.
        emit_comments: Surface ``:`` lines as COMMENT events instead of
            skipping them silently.
    """

    def __init__(
        self,
        *,
        max_line_retries: int | None = DEFAULT_MAX_LINE_RETRIES,
        emit_comments: bool = False,
    ) -> None:
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._done = False
        self._max_line_retries = max_line_retries
        self._emit_comments = emit_comments
        self._held_line: str | None = None
        self._held_count = 0

    @property
    def done(self) -> bool:
        """True once the end sentinel has been seen."""
        return self._done

    @property
    def pending(self) -> str:
        """Buffered text not yet turned into events."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[StreamEvent]:
        """Append a fragment and return the events it completes."""
        if self._done:
            return []
        self._buffer += self._text.decode(chunk)
        return self._drain()

    def finish(self) -> list[StreamEvent]:
        """Signal end of input.

        A trailing partial line is discarded. A line still held after a
        push-back is reported as MALFORMED.
        """
        if self._done:
            return []
        self._buffer += self._text.decode(b"", final=True)
        events: list[StreamEvent] = []
        if self._held_line is not None:
            events.append(StreamEvent.malformed(self._held_line))
            self._held_line = None
        if self._buffer:
            logger.debug(
                "Stream ended without [DONE]; discarding %d buffered chars",
                len(self._buffer),
            )
        self._buffer = ""
        return events

    # ── Internals ────────────────────────────────────────────────

    def _drain(self) -> list[StreamEvent]:
        events: list[StreamEvent] = []

        while True:
            newline = self._buffer.find("\n")
            if newline == -1:
                break

            line = self._buffer[:newline]
            self._buffer = self._buffer[newline + 1:]
            if line.endswith("\r"):
                line = line[:-1]

            if line.startswith(":"):
                if self._emit_comments:
                    events.append(StreamEvent.comment(line[1:].strip()))
                continue
            if not line.strip():
                continue
            if not line.startswith(DATA_PREFIX):
                continue

            payload = line[len(DATA_PREFIX):].strip()
            if payload == DONE_SENTINEL:
                self._done = True
                self._held_line = None
                self._buffer = ""
                events.append(StreamEvent.stream_end())
                break

            try:
                parsed = json.loads(payload)
            except ValueError:
                if self._hold(line):
                    self._buffer = line + "\n" + self._buffer
                    break
                logger.debug("Dropping malformed stream line: %.80s", line)
                events.append(StreamEvent.malformed(line))
                continue

            self._held_line = None
            content = extract_delta_content(parsed)
            if content:
                events.append(StreamEvent.content_delta(content))

        return events

    def _hold(self, line: str) -> bool:
        """Record a failed parse of ``line``; True if it should be pushed back."""
        if line == self._held_line:
            self._held_count += 1
        else:
            self._held_line = line
            self._held_count = 1

        if self._max_line_retries is not None and self._held_count > self._max_line_retries:
            self._held_line = None
            self._held_count = 0
            return False

        logger.debug(
            "Unparseable stream line held for next fragment (attempt %d)",
            self._held_count,
        )
        return True


def iter_events(
    chunks: Iterable[bytes],
    *,
    max_line_retries: int | None = DEFAULT_MAX_LINE_RETRIES,
    emit_comments: bool = False,
) -> Iterator[StreamEvent]:
    """Lazily decode a synchronous sequence of fragments.

    Stops pulling fragments as soon as the end sentinel is decoded.
    """
    decoder = EventStreamDecoder(
        max_line_retries=max_line_retries, emit_comments=emit_comments,
    )
    try:
        for chunk in chunks:
            yield from decoder.feed(chunk)
            if decoder.done:
                return
        yield from decoder.finish()
    finally:
        close = getattr(chunks, "close", None)
        if close is not None:
            close()


async def aiter_events(
    chunks: AsyncIterable[bytes],
    *,
    max_line_retries: int | None = DEFAULT_MAX_LINE_RETRIES,
    emit_comments: bool = False,
) -> AsyncIterator[StreamEvent]:
    """Lazily decode an asynchronous sequence of fragments.

    The source is closed (``aclose``) when decoding stops, whether at the
    end sentinel, at end of input, or because the consumer went away.
    """
    decoder = EventStreamDecoder(
        max_line_retries=max_line_retries, emit_comments=emit_comments,
    )
    try:
        async for chunk in chunks:
            for event in decoder.feed(chunk):
                yield event
            if decoder.done:
                return
        for event in decoder.finish():
            yield event
    finally:
        aclose = getattr(chunks, "aclose", None)
        if aclose is not None:
            await aclose()
