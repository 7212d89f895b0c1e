"""Main OpenX client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from openx_client.auth import OpenXAuth, TokenStore
from openx_client.config import OpenXConfig
from openx_client.models.auth import AccessToken, Verifier
from openx_client.transport import AuthenticatedTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType


class OpenXClient:
    """OpenX API client.

    Authenticates with OAuth 1.0a plus an email/password login, then
    forwards HTTP calls to the API with the access token cookie.

    Usage (context manager - recommended for connection pooling):
        async with OpenXClient.create(key, secret, realm, "https://host/ox/4.0") as client:
            await client.login("user@example.com", "password")
            response = await client.get("account")
            accounts = response.json()

    Usage (external HTTP client - shared across integrations):
        http_client = httpx.AsyncClient(timeout=30.0)
        client = OpenXClient(config, http_client=http_client)
        # Client uses shared pool, doesn't close it

    Usage (no pooling - creates connection per request):
        client = OpenXClient(config)
        await client.login(email, password)
        response = await client.get("account")  # Per-request connection
    """

    def __init__(
        self,
        config: OpenXConfig,
        *,
        token_store: TokenStore | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: OpenX configuration with credentials and endpoints
            token_store: Optional token storage (uses default if not provided)
            http_client: Optional httpx.AsyncClient for connection pooling.
                        If provided, the client will use this pool and NOT close it.
        """
        self.config = config
        self.token_store = token_store or TokenStore()
        self.auth = OpenXAuth(config, token_store=self.token_store, http_client=http_client)
        self.transport = AuthenticatedTransport(config, self.auth, http_client)

        self._http_client = http_client
        self._owns_http_client = http_client is None

    @classmethod
    def create(
        cls,
        consumer_key: str,
        consumer_secret: str,
        realm: str,
        base_url: str,
        config: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> OpenXClient:
        """Create a client from credentials and an optional endpoint override map."""
        return cls(
            OpenXConfig.create(consumer_key, consumer_secret, realm, base_url, config),
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> OpenXClient:
        """Create client from environment variables.

        Expects:
        - OAUTH_CONSUMER_KEY
        - OAUTH_CONSUMER_SECRET
        - OAUTH_REALM
        - OPENX_URL
        """
        return cls(OpenXConfig.from_env(), **kwargs)

    def _set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Update HTTP client on auth and transport."""
        self._http_client = http_client
        self.auth.set_http_client(http_client)
        self.transport.set_http_client(http_client)

    async def open(self) -> None:
        """Open connection pool for HTTP requests.

        Only needed if not using context manager or external http_client.
        """
        if self._http_client is None and self._owns_http_client:
            self._set_http_client(httpx.AsyncClient(timeout=self.config.timeout))

    async def close(self) -> None:
        """Close connection pool.

        Only closes the pool if this client owns it (not external).
        """
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._set_http_client(None)

    async def __aenter__(self) -> OpenXClient:
        """Async context manager entry - opens connection pool."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes connection pool."""
        await self.close()

    @property
    def is_authenticated(self) -> bool:
        """Check if the client holds an access token."""
        return self.auth.is_authenticated

    async def login(self, email: str, password: str) -> Verifier:
        """Log in with user credentials (request token + verifier)."""
        return await self.auth.login(email, password)

    async def get_request_token(self, *, refresh: bool = False) -> str:
        """Get the request token value."""
        return (await self.auth.get_request_token(refresh=refresh)).token

    async def get_access_token(self, *, refresh: bool = False) -> str:
        """Get the access token value, exchanging the verifier if needed."""
        return (await self.auth.get_access_token(refresh=refresh)).token

    async def get_auth_cookie(self) -> str:
        """Get the authentication cookie string."""
        return await self.auth.get_auth_cookie()

    def load_token(self) -> bool:
        """Load saved access token.

        Returns:
            True if token was loaded, False if no token saved
        """
        return self.token_store.load() is not None

    def save_token(self) -> None:
        """Save current access token."""
        self.token_store.save()

    def clear_token(self) -> None:
        """Forget the access token and remove the saved copy."""
        self.auth.reset()
        self.token_store.delete()

    def set_access_token(self, token: str) -> None:
        """Set access token directly.

        Useful when you have a token from another source.
        """
        self.auth.set_access_token(AccessToken(token=token))

    async def request(self, method: str, url: str, **options: Any) -> httpx.Response:
        """Make an authenticated request (see AuthenticatedTransport.request)."""
        return await self.transport.request(method, url, **options)

    async def request_json(self, method: str, url: str, **options: Any) -> Any:
        """Make an authenticated request and decode the response body."""
        return await self.transport.request_json(method, url, **options)

    async def get(self, url: str, **options: Any) -> httpx.Response:
        return await self.transport.get(url, **options)

    async def post(self, url: str, **options: Any) -> httpx.Response:
        return await self.transport.post(url, **options)

    async def put(self, url: str, **options: Any) -> httpx.Response:
        return await self.transport.put(url, **options)

    async def delete(self, url: str, **options: Any) -> httpx.Response:
        return await self.transport.delete(url, **options)

    async def head(self, url: str, **options: Any) -> httpx.Response:
        return await self.transport.head(url, **options)

    async def options(self, url: str, **options: Any) -> httpx.Response:
        return await self.transport.options(url, **options)

    async def patch(self, url: str, **options: Any) -> httpx.Response:
        return await self.transport.patch(url, **options)
