"""OAuth 1.0a handshake for the OpenX API."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, urlencode

import httpx

from openx_client.auth.signer import OAuthSigner
from openx_client.auth.tokens import TokenStore
from openx_client.exceptions import (
    AuthenticationError,
    HandshakeError,
    PreconditionError,
    TransportError,
)
from openx_client.models.auth import AccessToken, AuthState, RequestToken, Verifier

if TYPE_CHECKING:
    from openx_client.config import OpenXConfig

logger = logging.getLogger(__name__)

# The login endpoint prepends a fixed 4-byte marker to its URL-encoded payload
LOGIN_RESPONSE_PREFIX_LENGTH = 4


class OpenXAuth:
    """OAuth 1.0a authentication handler for the OpenX API.

    Drives the handshake:
    1. Get request token (signed with consumer credentials only)
    2. Log in with email/password to obtain a verifier
    3. Exchange request token + verifier for an access token

    Results are cached in a TokenStore and reused until a refresh is
    requested. All steps and cache updates are serialized by one lock,
    so coroutines sharing a client perform at most one handshake.
    """

    def __init__(
        self,
        config: OpenXConfig,
        *,
        token_store: TokenStore | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.endpoints = config.endpoints
        self.signer = OAuthSigner(config.consumer_key, config.consumer_secret, config.realm)
        self.tokens = token_store or TokenStore()
        self._http_client = http_client
        self._lock = asyncio.Lock()

    def set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    @property
    def state(self) -> AuthState:
        """Current position in the handshake."""
        if self.tokens.access_token is not None:
            return AuthState.ACCESS_TOKEN_OBTAINED
        if self.tokens.verifier is not None:
            return AuthState.LOGGED_IN
        if self.tokens.request_token is not None:
            return AuthState.REQUEST_TOKEN_OBTAINED
        return AuthState.FRESH

    @property
    def is_authenticated(self) -> bool:
        """Check if we have an access token."""
        return self.tokens.access_token is not None

    @property
    def access_token(self) -> AccessToken | None:
        """Get current access token if authenticated."""
        return self.tokens.access_token

    def set_access_token(self, token: AccessToken) -> None:
        """Set access token (e.g., loaded from storage)."""
        self.tokens.set_access_token(token)

    @property
    def authorization_url(self) -> str | None:
        """Browser login URL for the current request token, if any."""
        request_token = self.tokens.request_token
        if request_token is None:
            return None
        query = urlencode({"oauth_token": request_token.token})
        return f"{self.endpoints.authorize_url}?{query}"

    def reset(self) -> None:
        """Drop all cached credentials, returning to the fresh state."""
        self.tokens.clear()

    async def get_request_token(self, *, refresh: bool = False) -> RequestToken:
        """Step 1: Get a request token to start the handshake.

        Args:
            refresh: Fetch a new token even if one is cached. A refresh
                discards any verifier bound to the previous token.
        """
        async with self._lock:
            return await self._ensure_request_token(refresh=refresh)

    async def login(self, email: str, password: str) -> Verifier:
        """Step 2: Log in with user credentials to obtain a verifier.

        Acquires a request token first if none is cached.

        Raises:
            AuthenticationError: The service rejected the credentials
            TransportError: The login request could not be completed
        """
        async with self._lock:
            request_token = await self._ensure_request_token()

            logger.debug("Logging in to %s", self.endpoints.login_url)
            response = await self._post(
                self.endpoints.login_url,
                data={
                    "email": email,
                    "password": password,
                    "oauth_token": request_token.token,
                },
            )

            if not response.is_success:
                raise AuthenticationError(
                    f"Login rejected: {response.status_code}",
                    status_code=response.status_code,
                )

            body = response.content
            if len(body) <= LOGIN_RESPONSE_PREFIX_LENGTH:
                raise AuthenticationError(
                    "Empty login response",
                    status_code=response.status_code,
                )

            payload = body[LOGIN_RESPONSE_PREFIX_LENGTH:].decode(response.encoding or "utf-8")
            data = parse_qs(payload)
            token = data.get("oauth_token", [""])[0]
            verifier = data.get("oauth_verifier", [""])[0]

            if not token or not verifier:
                raise AuthenticationError(
                    "Login response is missing oauth_token or oauth_verifier",
                    status_code=response.status_code,
                )

            # Login may rotate the token; the secret stays with it
            self.tokens.set_request_token(
                RequestToken(token=token, token_secret=request_token.token_secret)
            )
            self.tokens.set_verifier(verifier)
            logger.info("OAuth state: %s", self.state)

            return Verifier(token=token, verifier=verifier)

    async def get_access_token(self, *, refresh: bool = False) -> AccessToken:
        """Step 3: Exchange the request token and verifier for an access token.

        Args:
            refresh: Exchange again even if an access token is cached

        Raises:
            PreconditionError: login() has not completed yet
        """
        async with self._lock:
            cached = self.tokens.get_access_token(refresh=refresh)
            if cached is not None:
                return cached

            request_token = self.tokens.request_token
            verifier = self.tokens.verifier
            if request_token is None or verifier is None:
                raise PreconditionError(
                    "No request token and verifier available. Call login() first.",
                    stage="access_token",
                )

            url = self.endpoints.access_token_url
            logger.debug("Exchanging verifier for access token at %s", url)
            headers = self.signer.sign(
                "POST",
                url,
                token=request_token.token,
                token_secret=request_token.token_secret,
                verifier=verifier,
            )
            response = await self._send("POST", url, headers=headers)

            if not response.is_success:
                raise HandshakeError(
                    f"Failed to get access token: {response.status_code} {response.text}",
                    stage="access_token",
                    status_code=response.status_code,
                )

            data = parse_qs(response.text)
            token = data.get("oauth_token", [""])[0]

            if not token:
                raise HandshakeError(
                    "Invalid access token response",
                    stage="access_token",
                    status_code=response.status_code,
                )

            access_token = AccessToken(token=token)
            self.tokens.set_access_token(access_token)
            logger.info("OAuth state: %s", self.state)

            return access_token

    async def get_auth_cookie(self) -> str:
        """Return the ``openx3_access_token=<token>`` cookie string.

        Completes the access token exchange first if needed.
        """
        token = self.tokens.get_access_token() or await self.get_access_token()
        return token.cookie

    async def _ensure_request_token(self, *, refresh: bool = False) -> RequestToken:
        """Return the cached request token or fetch one. Caller holds the lock."""
        cached = self.tokens.get_request_token(refresh=refresh)
        if cached is not None:
            return cached

        url = self.endpoints.request_token_url
        logger.debug("Requesting request token from %s", url)
        response = await self._post(url, data={"oauth_callback": self.endpoints.callback_url})

        if not response.is_success:
            raise HandshakeError(
                f"Failed to get request token: {response.status_code} {response.text}",
                stage="request_token",
                status_code=response.status_code,
            )

        data = parse_qs(response.text)
        token = data.get("oauth_token", [""])[0]
        token_secret = data.get("oauth_token_secret", [""])[0]

        if not token or not token_secret:
            raise HandshakeError(
                "Invalid request token response",
                stage="request_token",
                status_code=response.status_code,
            )

        request_token = RequestToken(token=token, token_secret=token_secret)
        self.tokens.set_request_token(request_token)
        # A verifier belongs to the token it was issued for
        self.tokens.set_verifier(None)
        logger.info("OAuth state: %s", self.state)

        return request_token

    async def _post(self, url: str, *, data: dict[str, str]) -> httpx.Response:
        """Send a form POST signed with consumer credentials only."""
        headers = self.signer.sign("POST", url, params=data)
        return await self._send("POST", url, headers=headers, data=data)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        data: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a handshake request, wrapping network failures."""
        try:
            if self._http_client is not None:
                return await self._http_client.request(method, url, headers=headers, data=data)

            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                return await client.request(method, url, headers=headers, data=data)
        except httpx.TimeoutException as e:
            raise TransportError(f"Timed out calling {url}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
