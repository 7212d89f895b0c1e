"""OAuth credential models."""

from enum import StrEnum

from pydantic import BaseModel, Field

AUTH_COOKIE_NAME = "openx3_access_token"


class AuthState(StrEnum):
    """Progress of the OAuth handshake."""

    FRESH = "fresh"
    REQUEST_TOKEN_OBTAINED = "request_token_obtained"
    LOGGED_IN = "logged_in"
    ACCESS_TOKEN_OBTAINED = "access_token_obtained"


class RequestToken(BaseModel):
    """OAuth request token (first step of the handshake)."""

    token: str = Field(description="Request token value")
    token_secret: str = Field(description="Request token secret")


class Verifier(BaseModel):
    """Result of the login step (second step of the handshake)."""

    token: str = Field(description="Request token returned by login (may be rotated)")
    verifier: str = Field(description="OAuth verifier proving the login")


class AccessToken(BaseModel):
    """OAuth access token (final step of the handshake)."""

    token: str = Field(description="Access token value")

    @property
    def cookie(self) -> str:
        """Cookie string carrying this token."""
        return f"{AUTH_COOKIE_NAME}={self.token}"
