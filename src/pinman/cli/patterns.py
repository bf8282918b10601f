# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/cli/patterns.py

"""
Shared wrapper for CLI commands.

Every command handler has the signature
    handler(console, config, verbose, quiet) -> result
and is wrapped by command_pattern(), which sets up logging, loads the
configuration, collects --json output and turns pinman errors into a
clean exit code.
"""

from typing import Any, Callable

import typer
from rich.console import Console

from pinman.cli.utils import handle_operation_error, load_config_with_console
from pinman.config.manager import UserConfig, load_merged_user_config
from pinman.data.json_collector import JSONCollector
from pinman.system.exceptions import ConfigError, PinmanError
from pinman.system.logging_setup import setup_logging

Handler = Callable[[Console, UserConfig, bool, bool], Any]


def command_pattern(handler: Handler, operation: str, require_config: bool = True) -> Callable[..., Any]:
    """Wrap `handler` with logging, config loading, JSON output and error handling.

    Args:
        handler: Command implementation
        operation: Short description used in error messages ("listing directory")
        require_config: Exit on a broken config before the handler runs. When
            False the handler receives None instead and reports the problem
            itself.
    """
    def wrapper(verbose: bool = False, quiet: bool = False, to_json: bool = False, debug: bool = False) -> Any:
        setup_logging(debug=debug)
        # JSON mode keeps rich output off stdout
        console = Console(quiet=quiet or to_json)
        collector = JSONCollector(enabled=to_json)

        if require_config:
            config = load_config_with_console(console, verbose=verbose)
        else:
            try:
                config = load_merged_user_config()
            except ConfigError:
                config = None
        try:
            result = handler(console, config, verbose, quiet)
        except PinmanError as e:
            collector.capture_error(e)
            collector.output()
            handle_operation_error(console, operation, e)

        collector.capture_success(result)
        collector.output()
        if isinstance(result, dict) and result.get("ok") is False:
            raise typer.Exit(1)
        return result

    return wrapper
