"""Exception hierarchy for FitBot."""

from __future__ import annotations


class FitbotError(Exception):
    """Base exception for all application-specific errors."""


class TransportError(FitbotError):
    """Raised when the chat endpoint answers non-2xx or the stream breaks.

    This is the only streaming failure that escapes the decoder. It is
    terminal for the request: callers never retry partial content.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidPlanInput(FitbotError, ValueError):
    """Raised when plan form values cannot produce a plan."""


class PersistenceError(FitbotError):
    """Raised when the hosted database or storage rejects a call."""


class UploadRejected(FitbotError):
    """Raised when a medical record fails type or size validation."""
