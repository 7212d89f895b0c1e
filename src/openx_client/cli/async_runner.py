"""Async command support for Typer."""

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

import typer

from openx_client.cli.formatters import print_error, print_info
from openx_client.exceptions import AuthenticationError, OpenXError, TransportError

T = TypeVar("T")


def async_command(f: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Decorator to run async Typer commands.

    Library errors are reported on stderr and exit with status 1.

    Usage:
        @app.command()
        @async_command
        async def my_command(ctx: typer.Context):
            async with get_client(ctx.obj) as client:
                response = await client.get("account")
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return asyncio.run(f(*args, **kwargs))
        except AuthenticationError as e:
            print_error(e.message)
            print_info("Check your email and password, then run 'openx-cli auth login'.")
            raise typer.Exit(1) from None
        except TransportError as e:
            print_error(e.message)
            if e.status_code == 401:
                print_info("Your session may have expired. Run 'openx-cli auth login'.")
            raise typer.Exit(1) from None
        except OpenXError as e:
            print_error(e.message)
            raise typer.Exit(1) from None

    return wrapper
