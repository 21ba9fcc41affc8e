"""Server-side encoding of chat replies as ``data:`` frames.

Produces exactly the framing fitbot.streaming.decoder consumes: one
OpenAI-style completion chunk per delta, then ``data: [DONE]``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

DONE_FRAME = "data: [DONE]\n\n"


def delta_frame(text: str) -> str:
    """Encode one text delta as a completion-chunk frame."""
    payload = {"choices": [{"index": 0, "delta": {"content": text}}]}
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


async def encode_sse(deltas: AsyncIterator[str]) -> AsyncIterator[str]:
    """Frame every non-empty delta and finish with the end sentinel.

    If the upstream fails mid-reply the stream stops without
    ``[DONE]``, which clients treat as an incomplete reply.
    """
    try:
        async for text in deltas:
            if text:
                yield delta_frame(text)
    except Exception:
        logger.exception("Upstream completion failed mid-stream")
        return
    yield DONE_FRAME
