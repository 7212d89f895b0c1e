"""Pydantic models for OpenX authentication."""

from openx_client.models.auth import (
    AUTH_COOKIE_NAME,
    AccessToken,
    AuthState,
    RequestToken,
    Verifier,
)

__all__ = [
    "AUTH_COOKIE_NAME",
    "AccessToken",
    "AuthState",
    "RequestToken",
    "Verifier",
]
