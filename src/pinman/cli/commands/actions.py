# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/cli/commands/actions.py

"""
Action command handlers - commands that write to disk or serve.

Handles: serve, backup
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.console import Console

from pinman.config.manager import UserConfig
from pinman.system.exceptions import ConfigError
from pinman.core.backup import ensure_backup
from pinman.core.operations import resolve_file
from pinman.server.app import run_server
from pinman.system.display import display_backup_result


def serve(
    console: Console,
    config: UserConfig,
    verbose: bool = False,
    quiet: bool = False,
    host: Optional[str] = None,
    port: Optional[int] = None,
    open_browser: Optional[bool] = None,
) -> dict[str, Any]:
    """Run the HTTP server until interrupted.

    Command-line values override the configured host, port and browser flag.
    """
    overrides = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    if open_browser is not None:
        overrides["open_browser"] = open_browser
    if overrides:
        try:
            config = UserConfig.model_validate({**config.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError(str(e)) from e

    if verbose:
        console.print(f"[dim]Image extensions: {', '.join(sorted(config.image_extensions))}[/dim]")

    run_server(config, console, open_browser=config.open_browser)
    return {"url": config.url}


def backup(
    console: Console,
    config: UserConfig,
    file: str,
    verbose: bool = False,
    quiet: bool = False
) -> dict[str, Any]:
    """Put a copy of `file` into its directory's safety net."""
    target = resolve_file(Path(file))
    result = ensure_backup(target)

    if not quiet:
        display_backup_result(console, result)
        if verbose:
            console.print(f"[dim]sha256 {result.digest}[/dim]")

    return {"backup": result.to_dict()}
