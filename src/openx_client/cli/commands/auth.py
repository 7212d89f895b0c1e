"""Authentication commands."""

import typer

from openx_client.auth import TokenStore
from openx_client.cli.async_runner import async_command
from openx_client.cli.client_factory import build_client
from openx_client.cli.config import CLIConfig
from openx_client.cli.formatters import console, print_info, print_success

app = typer.Typer(no_args_is_help=True)


@app.command("login")
@async_command
async def login(
    ctx: typer.Context,
    email: str = typer.Option(
        ...,
        "--email",
        "-e",
        prompt=True,
        envvar="OPENX_EMAIL",
        help="OpenX user email.",
    ),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        envvar="OPENX_PASSWORD",
        help="OpenX user password.",
    ),
    save: bool = typer.Option(
        True,
        "--save/--no-save",
        help="Save the access token for later commands.",
    ),
) -> None:
    """Authenticate with OpenX.

    Runs the full handshake:
    1. Gets a request token
    2. Logs in with email and password
    3. Exchanges the verifier for an access token
    """
    config: CLIConfig = ctx.obj

    async with build_client(config) as client:
        print_info("Logging in...")
        await client.login(email, password)
        await client.get_access_token()

        if save:
            client.save_token()
            print_success(f"Authenticated successfully! Token saved to {config.token_path}")
        else:
            print_success("Authenticated successfully!")


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Check authentication status."""
    config: CLIConfig = ctx.obj

    token_store = TokenStore(path=config.token_path)

    console.print(f"Token path: {config.token_path}")

    if token_store.load() is not None:
        print_success("Token found - you are authenticated")
    else:
        print_info("Not authenticated - run 'openx-cli auth login' to authenticate")


@app.command("logout")
def logout(ctx: typer.Context) -> None:
    """Log out and clear saved token."""
    config: CLIConfig = ctx.obj

    token_store = TokenStore(path=config.token_path)

    if not token_store.has_saved_token():
        print_info("No token to clear.")
        return

    token_store.delete()
    print_success("Logged out.")
