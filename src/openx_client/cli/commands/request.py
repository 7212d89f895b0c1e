"""Authenticated passthrough request command."""

import json
import os
from typing import Any

import typer

from openx_client.cli.async_runner import async_command
from openx_client.cli.client_factory import get_client
from openx_client.cli.config import CLIConfig
from openx_client.cli.formatters import print_body, print_error
from openx_client.transport import HttpMethod


def _parse_params(values: list[str]) -> dict[str, str]:
    """Parse repeated key=value options."""
    params: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            print_error(f"Invalid parameter (expected key=value): {item}")
            raise typer.Exit(1)
        params[key] = value
    return params


@async_command
async def request(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="HTTP method (GET, POST, PUT, ...)."),
    path: str = typer.Argument(..., help="Resource path relative to OPENX_URL, e.g. 'account'."),
    param: list[str] = typer.Option(
        [],
        "--param",
        "-p",
        help="Query parameter as key=value (repeatable).",
    ),
    data: str | None = typer.Option(
        None,
        "--data",
        "-d",
        help="JSON request body.",
    ),
) -> None:
    """Send an authenticated request and print the response body.

    Uses the saved token; without one, logs in with OPENX_EMAIL and
    OPENX_PASSWORD.
    """
    config: CLIConfig = ctx.obj

    verb = HttpMethod.parse(method)
    params = _parse_params(param)
    body: Any = None
    if data is not None:
        try:
            body = json.loads(data)
        except json.JSONDecodeError as e:
            print_error(f"Invalid JSON body: {e}")
            raise typer.Exit(1) from None

    async with get_client(config) as client:
        if not client.is_authenticated:
            email = os.environ.get("OPENX_EMAIL")
            password = os.environ.get("OPENX_PASSWORD")
            if not email or not password:
                print_error("Not authenticated. Run 'openx-cli auth login' first.")
                raise typer.Exit(1)
            await client.login(email, password)

        result = await client.request_json(
            verb,
            path,
            params=params or None,
            json=body,
        )

    print_body(result)
