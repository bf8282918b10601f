# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/cli/main.py

"""
CLI dispatcher: routes typer commands to the handlers in pinman.cli.commands
through command_pattern().
"""

# Standard library imports
from importlib.metadata import version
from typing import Optional, Any

# Third-party imports
import typer
from rich.console import Console

# Local pinman imports
from pinman.cli.patterns import command_pattern
from pinman.cli.utils import handle_operation_error
from pinman.cli.commands import info as info_commands
from pinman.cli.commands import actions as action_commands

# Initialize Typer app
app = typer.Typer(
    help="""pinman - Browse images and tidy folders with a safety net

[bold green]Server:[/bold green] serve
[bold blue]Browse:[/bold blue] list-dir
[bold magenta]Safety net:[/bold magenta] backup, safety-net
[bold red]Validation:[/bold red] validate-config
""",
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        try:
            pkg_version = version("pinman")
        except Exception as e:
            handle_operation_error(console, "retrieving version", e)
        console.print(f"pinman version {pkg_version}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
) -> None:
    """pinman - local image browser with backup-before-delete."""
    pass


# =============================================================================
# SERVER
# =============================================================================

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on (default from config)"),
    open_browser: Optional[bool] = typer.Option(None, "--browser/--no-browser", help="Open a browser tab on start"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed startup information"),
) -> Any:
    """[bold green]Server[/bold green]: Start the local image browser."""
    decorated_handler = command_pattern(
        lambda console, config, verbose, quiet: action_commands.serve(
            console, config, verbose=verbose, quiet=quiet,
            host=host, port=port, open_browser=open_browser
        ),
        "starting server"
    )
    return decorated_handler(verbose=verbose, debug=debug)


# =============================================================================
# INFO COMMANDS - Read-only
# =============================================================================

@app.command(name="list-dir")
def list_dir_command(
    path: Optional[str] = typer.Argument(None, help="Directory to list (default: start_directory)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show full paths"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
    to_json: bool = typer.Option(False, "--json", help="Output results as JSON")
) -> Any:
    """[bold blue]Browse[/bold blue]: List subdirectories and images, hidden entries excluded."""
    decorated_handler = command_pattern(
        lambda console, config, verbose, quiet: info_commands.list_dir(console, config, path=path, verbose=verbose, quiet=quiet),
        "listing directory"
    )
    return decorated_handler(verbose=verbose, quiet=quiet, to_json=to_json)


@app.command(name="safety-net")
def safety_net_command(
    path: Optional[str] = typer.Argument(None, help="Directory whose safety net to show (default: start_directory)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show full hashes"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
    to_json: bool = typer.Option(False, "--json", help="Output results as JSON")
) -> Any:
    """[bold magenta]Safety net[/bold magenta]: Show the backups kept for a directory."""
    decorated_handler = command_pattern(
        lambda console, config, verbose, quiet: info_commands.safety_net(console, config, path=path, verbose=verbose, quiet=quiet),
        "reading safety net"
    )
    return decorated_handler(verbose=verbose, quiet=quiet, to_json=to_json)


@app.command(name="validate-config")
def validate_config_command(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed validation information"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
    to_json: bool = typer.Option(False, "--json", help="Output results as JSON")
) -> Any:
    """[bold red]Validation[/bold red]: Validate pinman configuration."""
    decorated_handler = command_pattern(
        lambda console, config, verbose, quiet: info_commands.validate_config(console, config, verbose=verbose, quiet=quiet),
        "validating configuration",
        require_config=False
    )
    return decorated_handler(verbose=verbose, quiet=quiet, to_json=to_json)


# =============================================================================
# ACTION COMMANDS
# =============================================================================

@app.command()
def backup(
    file: str = typer.Argument(..., help="File to copy into its directory's safety net"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the full hash"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
    to_json: bool = typer.Option(False, "--json", help="Output results as JSON")
) -> Any:
    """[bold magenta]Safety net[/bold magenta]: Back up a file now, skipping content already saved."""
    decorated_handler = command_pattern(
        lambda console, config, verbose, quiet: action_commands.backup(console, config, file=file, verbose=verbose, quiet=quiet),
        "backing up file"
    )
    return decorated_handler(verbose=verbose, quiet=quiet, to_json=to_json)


# =============================================================================
# ENTRY POINT
# =============================================================================

def cli_main() -> None:  # pragma: no cover - entry point
    """Entry point for the pinman CLI application."""
    app()


if __name__ == "__main__":  # pragma: no cover
    cli_main()
