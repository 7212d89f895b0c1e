"""Main Typer application."""

import logging
from pathlib import Path

import typer
from dotenv import find_dotenv, load_dotenv

from openx_client.cli.config import CLIConfig

# Create main app
app = typer.Typer(
    name="openx-cli",
    help="OpenX API command-line interface.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Credentials file (default: ~/.config/openx-client/config.json).",
        envvar="OPENX_CONFIG_FILE",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Load environment variables from this file (default: ./.env).",
    ),
    data_dir: Path | None = typer.Option(
        None,
        "--data-dir",
        help="Token directory (default: ~/.local/share/openx-cli).",
        envvar="OPENX_CLI_DATA_DIR",
    ),
) -> None:
    """OpenX API command-line interface.

    Credentials come from OAUTH_CONSUMER_KEY, OAUTH_CONSUMER_SECRET,
    OAUTH_REALM and OPENX_URL (a .env file is honoured) or a config file.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    cli_config = CLIConfig(verbose=verbose, config_file=config_file)
    if data_dir is not None:
        cli_config.data_dir = data_dir
    ctx.obj = cli_config
