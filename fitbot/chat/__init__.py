"""Client chat session."""

from fitbot.chat.session import DEFAULT_GREETING, ERROR_NOTICE, ChatSession

__all__ = ["DEFAULT_GREETING", "ERROR_NOTICE", "ChatSession"]
