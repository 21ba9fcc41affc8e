"""Streaming HTTP transport for the chat endpoint.

Opens a POST request carrying the conversation and hands back the
response body as raw byte fragments. Uses only stdlib urllib; blocking
calls run in the default executor so the event loop keeps turning
while a slow model is generating.
"""

from __future__ import annotations

import asyncio
import http.client
import json
import logging
import urllib.error
import urllib.request
from collections.abc import AsyncIterator, Sequence

from fitbot.errors import TransportError
from fitbot.schemas.chat import ChatMessage

logger = logging.getLogger(__name__)

_DEFAULT_CHUNK_SIZE = 4096
_DEFAULT_TIMEOUT = 120.0


class ChatTransport:
    """Bearer-authenticated streaming POST to a chat completion endpoint."""

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        timeout: float = _DEFAULT_TIMEOUT,
        chunk_size: int = _DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._timeout = timeout
        self._chunk_size = chunk_size

    @property
    def url(self) -> str:
        return self._url

    def build_request(self, messages: Sequence[ChatMessage]) -> urllib.request.Request:
        """Build the POST request for a conversation."""
        body = json.dumps({
            "messages": [m.to_wire() for m in messages],
        }).encode("utf-8")

        return urllib.request.Request(
            self._url,
            data=body,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
            method="POST",
        )

    async def stream(self, messages: Sequence[ChatMessage]) -> AsyncIterator[bytes]:
        """POST the conversation and yield body fragments as they arrive.

        Raises:
            TransportError: On an invalid URL, a non-2xx status, a
                connection or protocol failure, or a read failure mid-stream.
        """
        try:
            req = self.build_request(messages)
        except ValueError as e:
            raise TransportError(f"Invalid chat endpoint URL: {self._url!r}") from e
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(None, self._open, req)
        try:
            while True:
                chunk = await loop.run_in_executor(None, self._read, response)
                if not chunk:
                    break
                yield chunk
        finally:
            response.close()

    def _open(self, req: urllib.request.Request) -> http.client.HTTPResponse:
        """Synchronous connect (runs in executor)."""
        try:
            response = urllib.request.urlopen(req, timeout=self._timeout)
        except urllib.error.HTTPError as e:
            e.close()
            raise TransportError(
                f"Chat endpoint returned HTTP {e.code}", status_code=e.code,
            ) from e
        except (urllib.error.URLError, OSError, http.client.HTTPException) as e:
            reason = getattr(e, "reason", e)
            raise TransportError(f"Could not reach chat endpoint: {reason}") from e
        except ValueError as e:
            raise TransportError(f"Invalid chat endpoint URL: {self._url!r}") from e

        status = getattr(response, "status", 200)
        if not 200 <= status < 300:
            response.close()
            raise TransportError(
                f"Chat endpoint returned HTTP {status}", status_code=status,
            )
        logger.debug("Chat stream opened (%s, HTTP %d)", self._url, status)
        return response

    def _read(self, response: http.client.HTTPResponse) -> bytes:
        """Read whatever is available, up to chunk_size (runs in executor)."""
        try:
            return response.read1(self._chunk_size)
        except (OSError, http.client.HTTPException) as e:
            raise TransportError(f"Chat stream aborted: {e}") from e
