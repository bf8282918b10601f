# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/config/manager.py

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Final

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from pinman.system.exceptions import ConfigError


# ---- Constants ----

USER_CFG: Final = "pinman.yml"

DEFAULT_IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset({
    "jpg", "jpeg", "png", "gif", "bmp", "avif", "webp", "tiff", "svg", "ico",
})


def _get_user_config_search_paths() -> tuple[Path, ...]:
    """Get config file search paths (ordered by priority: lowest to highest).

    Evaluated at call time so tests can redirect the environment.
    """
    return (
        Path("/etc/pinman") / USER_CFG,  # System defaults
        Path.home() / ".config" / "pinman" / USER_CFG,  # User config
        Path(os.getenv("XDG_CONFIG_HOME", "")) / "pinman" / USER_CFG,  # XDG override
        Path(os.getenv("PINMAN_CONFIG_HOME", "")) / USER_CFG,  # Explicit override (highest priority)
    )


def _is_unset_env_candidate(candidate: Path) -> bool:
    return candidate in (Path("") / USER_CFG, Path("") / "pinman" / USER_CFG)


def _load_merged_config_data(candidates: tuple[Path, ...]) -> tuple[dict, list[str]]:
    """Load and merge config data from candidate paths.

    Args:
        candidates: Paths to check for config files

    Returns:
        Tuple of (merged configuration data, list of files that were loaded)

    Raises:
        ConfigError: If a config file exists but cannot be parsed
    """
    merged_data = {}
    found_configs = []

    for candidate in candidates:
        if _is_unset_env_candidate(candidate) or not candidate.exists():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {candidate}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {candidate} must contain a mapping")

        merged_data.update(data)  # Later configs override earlier ones
        found_configs.append(str(candidate))
        logger.debug(f"Loaded config from {candidate}")

    if found_configs:
        logger.debug(f"Merged config from: {', '.join(found_configs)}")
    else:
        logger.debug("No pinman.yml found, using defaults")
    return merged_data, found_configs


# ---- User Config Model ----

class UserConfig(BaseModel):
    """Server and browsing settings."""
    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)
    open_browser: bool = True
    start_directory: Path = Path(".")

    image_extensions: set[str] = Field(default_factory=lambda: set(DEFAULT_IMAGE_EXTENSIONS))

    # Optional logging configuration
    local_log: Optional[Path] = None

    @field_validator("image_extensions")
    @classmethod
    def normalize_extensions(cls, value: set[str]) -> set[str]:
        """Store extensions lowercase and without a leading dot."""
        return {ext.lower().lstrip(".") for ext in value if ext.strip(". ")}

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @classmethod
    def load(cls, config_path: Path) -> "UserConfig":
        """Load user config from a single file."""
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)


def load_merged_user_config() -> UserConfig:
    """Load and merge user config from all locations (system defaults + user overrides).

    Raises:
        ConfigError: If any config file is unreadable or the merged data is invalid
    """
    merged_data, _ = _load_merged_config_data(_get_user_config_search_paths())
    try:
        return UserConfig.model_validate(merged_data)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


# ---- Validation Function ----

def validate_config() -> list[str]:
    """Return a list of validation errors. Empty list means config is valid."""
    errors = []

    try:
        user_config = load_merged_user_config()
    except ConfigError as e:
        errors.append(f"Error in user config: {e}")
        return errors

    if not user_config.start_directory.is_dir():
        errors.append(f"start_directory is not a directory: {user_config.start_directory}")

    if not user_config.image_extensions:
        errors.append("image_extensions is empty; no files would be listed")

    # Validate local_log if specified
    if user_config.local_log:
        log_path = user_config.local_log
        if not log_path.is_absolute():
            errors.append(f"local_log path must be absolute: {log_path}")
        elif log_path.exists() and not log_path.is_dir():
            errors.append(f"local_log path exists but is not a directory: {log_path}")
        elif log_path.exists():
            test_file = log_path / ".pinman_write_test"
            try:
                test_file.write_text("test")
                test_file.unlink()
            except OSError as write_error:
                errors.append(f"local_log directory is not writable: {log_path} ({write_error})")

    return errors


# done.
