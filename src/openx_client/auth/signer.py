"""OAuth 1.0a HMAC-SHA1 request signing."""

import base64
import hashlib
import hmac
import secrets
import time
from collections.abc import Mapping
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value: str) -> str:
    """Percent-encode using the RFC 3986 unreserved character set."""
    return quote(value, safe="~")


def normalize_url(url: str) -> str:
    """Build the base string URI: lowercase scheme/host, no default port or query."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if parts.port and parts.port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{parts.port}"
    return urlunsplit((scheme, host, parts.path or "/", "", ""))


def normalize_params(params: list[tuple[str, str]]) -> str:
    """Encode, sort and join request parameters for the signature base string."""
    encoded = sorted((percent_encode(k), percent_encode(v)) for k, v in params)
    return "&".join(f"{k}={v}" for k, v in encoded)


def signature_base_string(method: str, url: str, params: list[tuple[str, str]]) -> str:
    """Build the OAuth signature base string."""
    query = urlsplit(url).query
    all_params = parse_qsl(query, keep_blank_values=True) + params
    return "&".join(
        [
            method.upper(),
            percent_encode(normalize_url(url)),
            percent_encode(normalize_params(all_params)),
        ]
    )


class OAuthSigner:
    """Produces OAuth 1.0a ``Authorization`` headers.

    Operates in two modes:
    - unauthorized: consumer credentials only (request token, login)
    - authorized: consumer credentials plus token, token secret and
      verifier (access token exchange)
    """

    def __init__(self, consumer_key: str, consumer_secret: str, realm: str = "") -> None:
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.realm = realm

    def sign(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        token: str | None = None,
        token_secret: str = "",
        verifier: str | None = None,
        nonce: str | None = None,
        timestamp: str | None = None,
    ) -> dict[str, str]:
        """Generate OAuth headers for a request.

        Args:
            method: HTTP method
            url: Full request URL (query parameters are signed too)
            params: Form body parameters
            token: Request or access token (authorized mode)
            token_secret: Secret paired with ``token``
            verifier: OAuth verifier (access token exchange)
            nonce: Fixed nonce (generated when omitted)
            timestamp: Fixed timestamp (current time when omitted)

        Returns:
            Headers dict with Authorization header
        """
        oauth_params = self._build_oauth_params(nonce, timestamp)
        if token:
            oauth_params["oauth_token"] = token
        if verifier:
            oauth_params["oauth_verifier"] = verifier

        body_params = list(params.items()) if params else []
        oauth_params["oauth_signature"] = self.generate_signature(
            method,
            url,
            list(oauth_params.items()) + body_params,
            token_secret,
        )

        return {"Authorization": self._build_auth_header(oauth_params)}

    def generate_signature(
        self,
        method: str,
        url: str,
        params: list[tuple[str, str]],
        token_secret: str = "",
    ) -> str:
        """Generate OAuth 1.0a HMAC-SHA1 signature."""
        base_string = signature_base_string(method, url, params)
        signing_key = f"{percent_encode(self.consumer_secret)}&{percent_encode(token_secret)}"

        signature = hmac.new(
            signing_key.encode(),
            base_string.encode(),
            hashlib.sha1,
        ).digest()

        return base64.b64encode(signature).decode()

    def _build_oauth_params(self, nonce: str | None, timestamp: str | None) -> dict[str, str]:
        """Build base OAuth parameters."""
        return {
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": nonce or secrets.token_hex(16),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": timestamp or str(int(time.time())),
            "oauth_version": OAUTH_VERSION,
        }

    def _build_auth_header(self, oauth_params: dict[str, str]) -> str:
        """Build OAuth Authorization header (realm first, unsigned)."""
        auth_parts = [f'{k}="{percent_encode(v)}"' for k, v in sorted(oauth_params.items())]
        if self.realm:
            auth_parts.insert(0, f'realm="{percent_encode(self.realm)}"')
        return "OAuth " + ", ".join(auth_parts)
