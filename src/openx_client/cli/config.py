"""CLI configuration with XDG-compliant paths."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from openx_client.config import OpenXConfig


def _default_data_dir() -> Path:
    """Get XDG-compliant data directory for tokens.

    Uses XDG_DATA_HOME if set, otherwise ~/.local/share/openx-cli.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "openx-cli"
    return Path.home() / ".local" / "share" / "openx-cli"


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Attributes:
        verbose: Enable debug logging.
        config_file: JSON credentials file (environment variables take precedence).
        data_dir: Directory for the saved access token.
    """

    verbose: bool = False
    config_file: Path | None = None
    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def token_path(self) -> Path:
        """Get the token file path."""
        return self.data_dir / "token.json"

    def load_openx_config(self) -> OpenXConfig:
        """Load client configuration from environment or config file.

        Raises:
            ValueError: If environment variables are incomplete and no file exists
        """
        try:
            return OpenXConfig.load(self.config_file)
        except FileNotFoundError as e:
            msg = (
                f"{e}. Set OAUTH_CONSUMER_KEY, OAUTH_CONSUMER_SECRET, OAUTH_REALM "
                "and OPENX_URL or create a config file."
            )
            raise ValueError(msg) from None
