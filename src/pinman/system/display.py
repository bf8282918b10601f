# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/system/display.py

# Standard library imports
from pathlib import Path

# Third-party imports
import humanize
from rich.console import Console
from rich.table import Table

# Local pinman imports
from pinman.core.backup import BackupResult, BackupStatus, SafetyNetEntry, HASH_PREFIX_LEN
from pinman.core.operations import DirectoryListing


def _size_of(path: str | Path) -> str:
    try:
        return humanize.naturalsize(Path(path).stat().st_size)
    except OSError:
        return "?"


def listing_to_table(listing: DirectoryListing, verbose: bool = False) -> Table:
    """Convert a directory listing to a rich Table for display.

    Args:
        listing: Listing returned by list_directory()
        verbose: Add a Path column with the full entry path

    Returns:
        Rich Table object ready for display
    """
    table = Table(title=listing.current_path)
    table.add_column("Type", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Size", justify="right")
    if verbose:
        table.add_column("Path", style="dim")

    for entry in listing.entries:
        if entry.is_dir:
            row = ["[blue]dir[/blue]", entry.name, ""]
        else:
            row = ["[green]image[/green]", entry.name, _size_of(entry.path)]
        if verbose:
            row.append(entry.path)
        table.add_row(*row)

    return table


def display_listing(console: Console, listing: DirectoryListing, verbose: bool = False) -> None:
    console.print(listing_to_table(listing, verbose=verbose))
    dirs = sum(1 for e in listing.entries if e.is_dir)
    images = len(listing.entries) - dirs
    console.print(f"{dirs} directories, {images} images")


def display_backup_result(console: Console, result: BackupResult) -> None:
    """Display the outcome of a single ensure_backup() call."""
    short = result.digest[:HASH_PREFIX_LEN]
    if result.status is BackupStatus.CREATED:
        console.print(f"[green]✓[/green] Backed up {result.source} -> {result.backup_path}")
    else:
        console.print(f"[green]✓[/green] {result.source} already backed up ({short})")


def display_safety_net(console: Console, directory: Path, entries: list[SafetyNetEntry], verbose: bool = False) -> None:
    """Display the index of a directory's safety net with its backup files."""
    if not entries:
        console.print(f"[yellow]No backups found in {directory}[/yellow]")
        return

    table = Table(title=f"Safety net of {directory}")
    table.add_column("Hash", style="cyan", no_wrap=True)
    table.add_column("Backup file", style="green")
    table.add_column("Size", justify="right")

    total_size = 0
    for entry in entries:
        digest = entry.digest if verbose else entry.digest[:HASH_PREFIX_LEN]
        if entry.backup_path is None:
            table.add_row(digest, "[red]missing[/red]", "")
            continue
        try:
            size = entry.backup_path.stat().st_size
        except OSError:
            table.add_row(digest, entry.backup_path.name, "?")
            continue
        total_size += size
        table.add_row(digest, entry.backup_path.name, humanize.naturalsize(size))

    console.print(table)
    console.print(f"{len(entries)} backups, {humanize.naturalsize(total_size)} total")


def display_config_validation_results(console: Console, errors: list[str]) -> None:
    """Display configuration validation results."""
    console.print("[bold]pinman Configuration Validation[/bold]")
    console.print()

    if not errors:
        console.print("[green]✓[/green] All configuration checks passed")
        return

    console.print("[red]✗[/red] Configuration validation failed")
    console.print()

    for i, error in enumerate(errors, 1):
        console.print(f"[red]{i}.[/red] {error}")

    console.print(f"\n[red]Found {len(errors)} configuration error(s).[/red]")
