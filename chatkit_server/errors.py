"""Exceptions raised by the Chatkit server SDK."""

from __future__ import annotations


class ChatkitError(Exception):
    """Base exception for all SDK errors."""

    pass


class ConfigurationError(ChatkitError):
    """Instance locator, key or token lifetime is malformed. Not recoverable."""

    pass


class ValidationError(ChatkitError):
    """
    A required operation argument is missing or empty.

    Raised before any network work; the caller must fix the input.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"You must provide {field}")


class TransportError(ChatkitError):
    """Network failure while talking to the Chatkit API. Never retried here."""

    def __init__(self, message: str, url: str) -> None:
        self.url = url
        super().__init__(f"{message} ({url})")


class MalformedResponseError(ChatkitError):
    """Upstream returned a body the SDK cannot interpret."""

    pass


class TokenVerificationError(ChatkitError):
    """Raised when a token fails verification. Do not log the token."""

    pass
