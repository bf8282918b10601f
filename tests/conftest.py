# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/conftest.py

"""
Shared test fixtures for the pinman test suite.
"""

import sys
from pathlib import Path

import pytest
from loguru import logger

from tests.fixtures.sample_images import JPEG_BYTES, PNG_BYTES


@pytest.fixture(autouse=True)
def isolated_config_env(tmp_path_factory, monkeypatch):
    """Point every config search path at an empty directory.

    Returns the directory used as PINMAN_CONFIG_HOME so tests can drop a
    pinman.yml into it.
    """
    base = tmp_path_factory.mktemp("config-env")
    home = base / "home"
    config_home = base / "pinman-config"
    home.mkdir()
    config_home.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("PINMAN_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setattr(
        "pinman.config.manager._get_user_config_search_paths",
        lambda: (
            home / ".config" / "pinman" / "pinman.yml",
            Path(str(base / "xdg")) / "pinman" / "pinman.yml",
            config_home / "pinman.yml",
        ),
    )
    return config_home


@pytest.fixture(autouse=True)
def reset_loguru():
    """setup_logging() replaces loguru handlers; restore a plain one after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def log_messages():
    """Capture loguru messages at WARNING and above."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def image_dir(tmp_path):
    """Directory with a mix of images, subdirectories and non-image files."""
    root = tmp_path / "pictures"
    root.mkdir()

    (root / "alpha").mkdir()
    (root / "Beta").mkdir()
    (root / "A.jpg").write_bytes(JPEG_BYTES)
    (root / "b.PNG").write_bytes(PNG_BYTES)
    (root / "notes.txt").write_text("not an image")
    (root / "README").write_text("no extension")
    (root / ".hidden.jpg").write_bytes(JPEG_BYTES)
    (root / ".cache").mkdir()

    return root
