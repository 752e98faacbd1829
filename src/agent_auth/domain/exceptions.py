from __future__ import annotations

from typing import Any, Optional


class AuthenticationError(Exception):
    """Raised when no usable access token could be obtained."""
    pass


class ConfigurationError(AuthenticationError):
    """Raised when the runtime is missing settings required for network calls."""
    pass


class ChallengeRequestError(AuthenticationError):
    """Raised when the identity service does not issue a usable challenge."""
    pass


class TokenExchangeError(AuthenticationError):
    """Raised when a signed challenge cannot be exchanged for tokens."""
    pass


class RefreshError(AuthenticationError):
    """Raised internally when a refresh token is rejected."""
    pass


class TransportError(Exception):
    """Raised by transports when a request never produced a response."""
    pass


class ApiError(Exception):
    """Raised when an authenticated API call returns a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        reason: str = "",
        body: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body
