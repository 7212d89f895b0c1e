"""OpenX API client library.

An async Python client for the OpenX v4 API using OAuth 1.0a with
email/password login.

Example:
    from openx_client import OpenXClient

    # Create client from environment variables
    client = OpenXClient.from_env()

    # Or with explicit credentials
    client = OpenXClient.create(
        "consumer_key",
        "consumer_secret",
        "realm",
        "https://example-ui3.openxenterprise.com/ox/4.0",
    )

    async with client:
        await client.login("user@example.com", "password")
        response = await client.get("account")
        print(response.json())
"""

from openx_client.client import OpenXClient
from openx_client.config import EndpointConfig, OpenXConfig
from openx_client.exceptions import (
    AuthenticationError,
    HandshakeError,
    OpenXAuthError,
    OpenXError,
    PreconditionError,
    TransportError,
    UnsupportedMethodError,
)
from openx_client.transport import HttpMethod

__version__ = "0.1.0"

__all__ = [
    # Main client
    "EndpointConfig",
    "HttpMethod",
    "OpenXClient",
    "OpenXConfig",
    # Exceptions
    "AuthenticationError",
    "HandshakeError",
    "OpenXAuthError",
    "OpenXError",
    "PreconditionError",
    "TransportError",
    "UnsupportedMethodError",
]
