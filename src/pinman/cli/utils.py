# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/cli/utils.py

"""
CLI utility functions for common patterns across pinman commands.

All functions handle console output and typer exits consistently.
"""

from pathlib import Path

import typer
from rich.console import Console

from pinman.config.manager import UserConfig, load_merged_user_config
from pinman.system.exceptions import ConfigError


def load_config_with_console(console: Console, verbose: bool = False) -> UserConfig:
    """
    Load pinman configuration with proper error handling and console output.

    Args:
        console: Rich console for output
        verbose: Show loading message if True

    Returns:
        Loaded configuration object

    Raises:
        typer.Exit: If configuration loading fails
    """
    if verbose:
        console.print("[dim]Loading configuration...[/dim]")

    try:
        return load_merged_user_config()
    except ConfigError as e:
        console.print(f"[red]✗[/red] Configuration error: {e}")
        console.print("Run 'pinman validate-config' for details")
        raise typer.Exit(1)


def ensure_directory(console: Console, path: Path) -> Path:
    """
    Check that `path` is an existing directory.

    Raises:
        typer.Exit: If path is missing or not a directory
    """
    if not path.is_dir():
        console.print(f"[red]✗[/red] Not a directory: {path}")
        raise typer.Exit(1)
    return path


def handle_operation_error(console: Console, operation: str, error: Exception) -> None:
    """Handle operation errors with consistent formatting."""
    console.print(f"[red]✗[/red] Error {operation}: {error}")
    raise typer.Exit(1)
