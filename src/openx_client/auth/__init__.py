"""OAuth authentication for the OpenX API."""

from openx_client.auth.oauth import OpenXAuth
from openx_client.auth.signer import OAuthSigner
from openx_client.auth.tokens import TokenStore

__all__ = ["OAuthSigner", "OpenXAuth", "TokenStore"]
