"""OpenX CLI - Command-line interface for the OpenX API."""

from openx_client.cli.app import app

# Import command modules to register them with the app
from openx_client.cli.commands import auth, request

# Register sub-apps
app.add_typer(auth.app, name="auth", help="Authentication commands.")
app.command("request")(request.request)


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
