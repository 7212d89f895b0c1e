"""Output helpers for CLI commands."""

import json
from typing import Any

from rich.console import Console

console = Console()
error_console = Console(stderr=True)


def print_body(body: Any) -> None:
    """Print a decoded response body (JSON when structured)."""
    if body is None:
        console.print("[dim]No content[/dim]")
    elif isinstance(body, (dict, list)):
        console.print_json(json.dumps(body, default=str))
    else:
        console.print(body, markup=False)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")
