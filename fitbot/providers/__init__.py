"""FitBot provider layer.

All model calls made by the chat endpoint go through a ChatProvider;
LiteLLMChatProvider is the production implementation.
"""

from fitbot.providers.base import ChatProvider
from fitbot.providers.litellm_provider import LiteLLMChatProvider
from fitbot.providers.sse import DONE_FRAME, delta_frame, encode_sse

__all__ = [
    "DONE_FRAME",
    "ChatProvider",
    "LiteLLMChatProvider",
    "delta_frame",
    "encode_sse",
]
