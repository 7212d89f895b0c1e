"""Token caching and persistence."""

import json
import os
from pathlib import Path

from pydantic import ValidationError

from openx_client.models.auth import AccessToken, RequestToken


def _get_token_path() -> Path:
    """Get default token storage path."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "openx-client" / "token.json"


class TokenStore:
    """Cache for the credentials acquired during the handshake.

    The store is passive: the auth flow performs the network calls and
    writes results through the setters. Cached values are served until
    a caller asks for a refresh.

    The access token can also be persisted to a JSON file so that a later
    process can reuse it. Not thread-safe; callers serialize access.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _get_token_path()
        self.request_token: RequestToken | None = None
        self.verifier: str | None = None
        self.access_token: AccessToken | None = None

    def get_request_token(self, *, refresh: bool = False) -> RequestToken | None:
        """Return the cached request token, or None when absent or refreshing."""
        if refresh:
            return None
        return self.request_token

    def set_request_token(self, token: RequestToken) -> None:
        """Replace the cached request token."""
        self.request_token = token

    def set_verifier(self, verifier: str | None) -> None:
        self.verifier = verifier

    def get_access_token(self, *, refresh: bool = False) -> AccessToken | None:
        """Return the cached access token, or None when absent or refreshing."""
        if refresh:
            return None
        return self.access_token

    def set_access_token(self, token: AccessToken | None) -> None:
        """Replace the cached access token."""
        self.access_token = token

    def clear(self) -> None:
        """Forget all cached credentials (the saved file is left alone)."""
        self.request_token = None
        self.verifier = None
        self.access_token = None

    def save(self) -> None:
        """Save the cached access token to storage."""
        if self.access_token is None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)

        with self.path.open("w") as f:
            json.dump({"token": self.access_token.token}, f, indent=2)

        # Set restrictive permissions (owner read/write only)
        self.path.chmod(0o600)

    def load(self) -> AccessToken | None:
        """Load the access token from storage into the cache.

        Returns None if no token is stored or the file is unreadable.
        """
        if not self.path.exists():
            return None

        try:
            with self.path.open() as f:
                data = json.load(f)
            token = AccessToken(token=data["token"])
        except (json.JSONDecodeError, KeyError, TypeError, ValidationError):
            return None

        self.access_token = token
        return token

    def delete(self) -> None:
        """Remove the stored token file."""
        if self.path.exists():
            self.path.unlink()

    def has_saved_token(self) -> bool:
        """Check if a token is stored."""
        return self.path.exists()
