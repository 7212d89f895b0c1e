"""Typed exceptions for the OpenX API client."""

from typing import Any


class OpenXError(Exception):
    """Base exception for all OpenX client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(OpenXError):
    """Network failure or non-success response unrelated to the handshake."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code  # None when no response was received
        self.response_body = response_body
        super().__init__(message)


class OpenXAuthError(OpenXError):
    """Error raised while acquiring OAuth credentials."""

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        self.stage = stage  # e.g., "request_token", "login", "access_token"
        super().__init__(message)


class HandshakeError(OpenXAuthError):
    """Malformed, incomplete or rejected request-token / access-token response."""

    def __init__(
        self,
        message: str,
        *,
        stage: str,
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, stage=stage)


class AuthenticationError(OpenXAuthError):
    """Login rejected by the remote service.

    Raised separately from transport failures so callers can ask for new
    credentials instead of retrying.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, stage="login")


class PreconditionError(OpenXAuthError):
    """Handshake step invoked out of order (e.g., access token before login)."""


class UnsupportedMethodError(OpenXError, ValueError):
    """HTTP verb outside the supported passthrough set."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unsupported HTTP method: {method!r}")
