"""Authenticated HTTP passthrough to OpenX API resources."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import httpx

from openx_client.exceptions import TransportError, UnsupportedMethodError
from openx_client.models.auth import AUTH_COOKIE_NAME

if TYPE_CHECKING:
    from collections.abc import Mapping

    from openx_client.auth import OpenXAuth
    from openx_client.config import OpenXConfig

logger = logging.getLogger(__name__)


class HttpMethod(StrEnum):
    """HTTP verbs accepted by the passthrough."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, method: str) -> HttpMethod:
        """Validate a verb (case-insensitive)."""
        if not isinstance(method, str):
            raise UnsupportedMethodError(repr(method))
        try:
            return cls(method.upper())
        except ValueError:
            raise UnsupportedMethodError(method) from None


def decode_body(response: httpx.Response) -> Any:
    """Deserialize a response body.

    Returns parsed JSON for JSON content types, the text otherwise,
    and None for empty bodies.
    """
    if not response.content:
        return None
    content_type = response.headers.get("Content-Type", "")
    if "json" in content_type:
        return response.json()
    return response.text


def merge_cookie_header(auth_cookie: str, caller_cookie: str | None) -> str:
    """Combine the auth cookie with caller-supplied cookies.

    The auth cookie always comes first and any caller value for the
    same cookie name is dropped.
    """
    if not caller_cookie:
        return auth_cookie

    prefix = f"{AUTH_COOKIE_NAME}="
    kept = [
        part.strip()
        for part in caller_cookie.split(";")
        if part.strip() and not part.strip().startswith(prefix)
    ]
    return "; ".join([auth_cookie, *kept])


class AuthenticatedTransport:
    """Sends API requests carrying the OpenX access token cookie.

    The first request completes the handshake lazily (the flow must
    have logged in already). Methods outside HttpMethod are rejected
    before any network activity.
    """

    def __init__(
        self,
        config: OpenXConfig,
        auth: OpenXAuth,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.auth = auth
        self._http_client = http_client

    def set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    def resolve_url(self, url: str) -> str:
        """Join relative paths onto the API base URL."""
        if urlsplit(url).scheme:
            return url
        return self.config.api_base_url + url.lstrip("/")

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        content: str | bytes | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Make an authenticated API request.

        Args:
            method: HTTP method (one of HttpMethod, any case)
            url: Absolute URL or path relative to the API base URL
            params: Query parameters
            headers: Extra headers; a ``Cookie`` header is merged after
                the auth cookie
            json: JSON request body
            data: Form request body
            content: Raw request body, sent as ``application/json`` unless
                a ``Content-Type`` header is given
            timeout: Per-request timeout in seconds

        Returns:
            The httpx response

        Raises:
            UnsupportedMethodError: Unknown HTTP method
            TransportError: Network failure or error status (>= 400)
        """
        verb = HttpMethod.parse(method)
        full_url = self.resolve_url(url)

        request_headers = httpx.Headers({"Accept": "application/json"})
        if headers:
            request_headers.update(headers)
        # Raw bodies are JSON unless the caller says otherwise
        if content is not None and "Content-Type" not in request_headers:
            request_headers["Content-Type"] = "application/json"
        auth_cookie = await self.auth.get_auth_cookie()
        request_headers["Cookie"] = merge_cookie_header(auth_cookie, request_headers.get("Cookie"))

        logger.debug("Request: %s %s", verb, full_url)
        logger.debug("Params: %s", params)

        kwargs: dict[str, Any] = {
            "params": params,
            "headers": request_headers,
            "json": json,
            "data": data,
            "content": content,
        }
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            if self._http_client is not None:
                # Use shared connection pool
                response = await self._http_client.request(verb.value, full_url, **kwargs)
            else:
                # Fallback: create per-request client (no pooling)
                async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                    response = await client.request(verb.value, full_url, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"Timed out calling {full_url}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {full_url} failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Raise TransportError for error statuses."""
        if response.is_error:
            try:
                body = decode_body(response)
            except ValueError:
                body = response.text
            raise TransportError(
                f"API error: {response.status_code}",
                status_code=response.status_code,
                response_body=body,
            )
        return response

    async def request_json(self, method: str, url: str, **options: Any) -> Any:
        """Make a request and return the decoded body."""
        response = await self.request(method, url, **options)
        return decode_body(response)

    async def get(self, url: str, **options: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request(HttpMethod.GET, url, **options)

    async def post(self, url: str, **options: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request(HttpMethod.POST, url, **options)

    async def put(self, url: str, **options: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request(HttpMethod.PUT, url, **options)

    async def delete(self, url: str, **options: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request(HttpMethod.DELETE, url, **options)

    async def head(self, url: str, **options: Any) -> httpx.Response:
        """Make a HEAD request."""
        return await self.request(HttpMethod.HEAD, url, **options)

    async def options(self, url: str, **options: Any) -> httpx.Response:
        """Make an OPTIONS request."""
        return await self.request(HttpMethod.OPTIONS, url, **options)

    async def patch(self, url: str, **options: Any) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request(HttpMethod.PATCH, url, **options)
