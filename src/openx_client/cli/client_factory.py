"""Client factory for CLI commands."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import typer

from openx_client.auth import TokenStore
from openx_client.cli.formatters import print_error
from openx_client.client import OpenXClient

if TYPE_CHECKING:
    from openx_client.cli.config import CLIConfig


def build_client(config: CLIConfig) -> OpenXClient:
    """Create an OpenXClient using the CLI's token storage.

    Exits with status 1 when credentials cannot be loaded.
    """
    try:
        openx_config = config.load_openx_config()
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1) from None

    return OpenXClient(openx_config, token_store=TokenStore(path=config.token_path))


@asynccontextmanager
async def get_client(config: CLIConfig) -> AsyncGenerator[OpenXClient]:
    """Create a client with any saved token loaded and a pooled connection.

    Usage:
        async with get_client(cli_config) as client:
            response = await client.get("account")
    """
    client = build_client(config)
    client.load_token()

    async with client:
        yield client
