"""Error taxonomy shared by the AI scopes."""

from __future__ import annotations

PARSE_ERROR_MESSAGE = "Could not understand the AI response"


class AIError(Exception):
    """Base class for every failure raised by the AI layer."""


class ServiceError(AIError):
    """The provider call failed (network, auth, quota, timeout).

    The message is safe to show to the user as-is.
    """

    def __init__(self, message: str, *, provider: str = "") -> None:
        super().__init__(message)
        self.provider = provider


class ParseError(AIError):
    """The provider answered but the content is not usable JSON.

    ``raw_text`` is kept for diagnostics only and never appears in ``str()``.
    """

    def __init__(self, raw_text: str, message: str = PARSE_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class ExtractionInProgressError(AIError):
    """A second extraction was submitted while one is still running."""


class SessionDisposedError(AIError):
    """The form session was torn down; its extraction result is discarded."""
