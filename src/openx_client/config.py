"""Configuration management for the OpenX client."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

# camelCase option names accepted alongside the field names
_ENDPOINT_ALIASES = {
    "requestTokenUrl": "request_token_url",
    "accessTokenUrl": "access_token_url",
    "authorizeUrl": "authorize_url",
    "loginUrl": "login_url",
    "callbackUrl": "callback_url",
}


class MissingConfigError(ValueError):
    """Required configuration values are absent."""


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "openx-client"
    return Path.home() / ".config" / "openx-client"


@dataclass(frozen=True, slots=True)
class EndpointConfig:
    """OAuth endpoint URLs used during the handshake."""

    request_token_url: str = "https://sso.openx.com/api/index/initiate"
    access_token_url: str = "https://sso.openx.com/api/index/token"
    authorize_url: str = "https://sso.openx.com/login/login"
    login_url: str = "https://sso.openx.com/login/process"
    callback_url: str = "oob"  # Out-of-band (programmatic login)

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, str] | None = None) -> EndpointConfig:
        """Build endpoints from an override map.

        Keys may be field names (``login_url``) or the camelCase option
        names (``loginUrl``). Missing keys keep their defaults.
        """
        if not overrides:
            return cls()
        return cls().with_overrides(overrides)

    def with_overrides(self, overrides: Mapping[str, str]) -> EndpointConfig:
        """Return a copy with the given endpoints replaced."""
        known = {f.name for f in fields(self)}
        changes: dict[str, str] = {}
        for key, value in overrides.items():
            name = _ENDPOINT_ALIASES.get(key, key)
            if name not in known:
                msg = f"Unknown endpoint option: {key}"
                raise ValueError(msg)
            changes[name] = value
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class OpenXConfig:
    """OpenX API configuration.

    Holds the consumer credentials, the API base URL and the OAuth
    endpoints. Immutable once built.
    """

    consumer_key: str
    consumer_secret: str
    realm: str
    base_url: str
    endpoints: EndpointConfig = field(default_factory=EndpointConfig)
    timeout: float = 30.0

    @property
    def api_base_url(self) -> str:
        """Base URL with a single trailing slash, for joining relative paths."""
        return self.base_url.rstrip("/") + "/"

    @classmethod
    def create(
        cls,
        consumer_key: str,
        consumer_secret: str,
        realm: str,
        base_url: str,
        config: Mapping[str, str] | None = None,
        *,
        timeout: float = 30.0,
    ) -> OpenXConfig:
        """Create config with an optional endpoint override map."""
        return cls(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            realm=realm,
            base_url=base_url,
            endpoints=EndpointConfig.from_mapping(config),
            timeout=timeout,
        )

    @classmethod
    def from_env(cls) -> OpenXConfig:
        """Create config from environment variables.

        Expected env vars:
        - OAUTH_CONSUMER_KEY
        - OAUTH_CONSUMER_SECRET
        - OAUTH_REALM
        - OPENX_URL
        - OPENX_TIMEOUT (optional, seconds)
        """
        names = ("OAUTH_CONSUMER_KEY", "OAUTH_CONSUMER_SECRET", "OAUTH_REALM", "OPENX_URL")
        values = {name: os.environ.get(name) for name in names}
        missing = [name for name, value in values.items() if not value]
        if missing:
            msg = f"Missing required environment variables: {', '.join(missing)}"
            raise MissingConfigError(msg)

        timeout = os.environ.get("OPENX_TIMEOUT")
        try:
            timeout_seconds = float(timeout) if timeout else 30.0
        except ValueError:
            msg = f"Invalid OPENX_TIMEOUT: {timeout!r}"
            raise ValueError(msg) from None

        return cls(
            consumer_key=values["OAUTH_CONSUMER_KEY"] or "",
            consumer_secret=values["OAUTH_CONSUMER_SECRET"] or "",
            realm=values["OAUTH_REALM"] or "",
            base_url=values["OPENX_URL"] or "",
            timeout=timeout_seconds,
        )

    @classmethod
    def from_file(cls, path: Path | None = None) -> OpenXConfig:
        """Load config from JSON file.

        Default path: ~/.config/openx-client/config.json

        Expected format:
        {
            "consumer_key": "...",
            "consumer_secret": "...",
            "realm": "...",
            "base_url": "https://...",
            "endpoints": {"loginUrl": "..."}  # optional
        }
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data: dict[str, Any] = json.load(f)

        return cls(
            consumer_key=data["consumer_key"],
            consumer_secret=data["consumer_secret"],
            realm=data["realm"],
            base_url=data["base_url"],
            endpoints=EndpointConfig.from_mapping(data.get("endpoints")),
            timeout=float(data.get("timeout", 30.0)),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> OpenXConfig:
        """Load config from environment or file (env takes precedence).

        The file is only consulted when required environment variables are
        missing; an invalid value in the environment is reported as is.
        """
        try:
            return cls.from_env()
        except MissingConfigError:
            return cls.from_file(path)
