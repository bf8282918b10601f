# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/cli/commands/info.py

"""
Info command handlers - read-only information commands.

Handles: list-dir, safety-net, validate-config
"""

from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from pinman.cli.utils import ensure_directory
from pinman.config.manager import UserConfig, validate_config as collect_config_errors
from pinman.core.backup import list_safety_net
from pinman.core.operations import list_directory
from pinman.system.display import display_config_validation_results, display_listing, display_safety_net


def list_dir(
    console: Console,
    config: UserConfig,
    path: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False
) -> dict[str, Any]:
    """List the subdirectories and images of a directory.

    Args:
        console: Rich console for output
        config: Loaded configuration
        path: Directory to list (default: configured start_directory)
        verbose: Show full paths
        quiet: Minimize output

    Returns:
        Listing for JSON output
    """
    target = Path(path) if path else config.start_directory
    listing = list_directory(target, config.image_extensions)

    if not quiet:
        display_listing(console, listing, verbose=verbose)

    return {"listing": listing}


def safety_net(
    console: Console,
    config: UserConfig,
    path: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False
) -> dict[str, Any]:
    """Show the backups kept in a directory's safety net."""
    directory = ensure_directory(console, Path(path) if path else config.start_directory)
    entries = list_safety_net(directory)

    if not quiet:
        display_safety_net(console, directory, entries, verbose=verbose)

    return {
        "directory": directory,
        "backups": [
            {"digest": e.digest, "backup_path": e.backup_path} for e in entries
        ],
    }


def validate_config(
    console: Console,
    config: Optional[UserConfig],
    verbose: bool = False,
    quiet: bool = False
) -> dict[str, Any]:
    """Validate the merged pinman configuration.

    `config` is None when the files could not be loaded; the loading error
    is then the first entry in the returned errors.
    """
    errors = collect_config_errors()

    if not quiet:
        display_config_validation_results(console, errors)
        if verbose and not errors and config is not None:
            console.print(f"[dim]Serving at {config.url}, start directory {config.start_directory}[/dim]")

    return {"ok": not errors, "errors": errors, "config": config}
