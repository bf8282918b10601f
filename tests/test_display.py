# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/test_display.py

from rich.console import Console

from pinman.core.backup import ensure_backup, list_safety_net
from pinman.core.operations import list_directory
from pinman.system.display import (
    display_backup_result,
    display_config_validation_results,
    display_safety_net,
    listing_to_table,
)


def _console() -> Console:
    return Console(record=True, width=200)


def test_listing_table_rows(image_dir):
    table = listing_to_table(list_directory(image_dir))
    assert table.row_count == 4
    assert len(table.columns) == 3


def test_listing_table_verbose_adds_path_column(image_dir):
    table = listing_to_table(list_directory(image_dir), verbose=True)
    assert len(table.columns) == 4


def test_backup_result_messages(image_dir):
    console = _console()
    first = ensure_backup(image_dir / "A.jpg")
    second = ensure_backup(image_dir / "A.jpg")

    display_backup_result(console, first)
    display_backup_result(console, second)

    text = console.export_text()
    assert "Backed up" in text
    assert f"already backed up ({first.digest[:8]})" in text


def test_safety_net_empty(tmp_path):
    console = _console()
    display_safety_net(console, tmp_path, [])
    assert "No backups found" in console.export_text()


def test_safety_net_marks_missing_files(image_dir):
    result = ensure_backup(image_dir / "A.jpg")
    ensure_backup(image_dir / "b.PNG")
    result.backup_path.unlink()

    console = _console()
    display_safety_net(console, image_dir, list_safety_net(image_dir))

    text = console.export_text()
    assert "missing" in text
    assert "2 backups" in text


def test_config_validation_results():
    console = _console()
    display_config_validation_results(console, [])
    assert "All configuration checks passed" in console.export_text()

    console = _console()
    display_config_validation_results(console, ["start_directory is not a directory: /nope"])
    text = console.export_text()
    assert "Configuration validation failed" in text
    assert "Found 1 configuration error(s)." in text
