# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/system/logging_setup.py

import sys
from pathlib import Path

from loguru import logger

from pinman.config.manager import load_merged_user_config


def setup_logging(debug: bool = False) -> None:
    """Setup loguru logging for the entire application.

    Configures:
    - Console output: WARNING+ (DEBUG+ with debug=True)
    - File output: DEBUG+ if local_log is configured in user config
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format="<level>{level}</level>: {message}",
        colorize=True
    )

    # File handler: DEBUG+ if configured
    try:
        user_config = load_merged_user_config()
        if user_config.local_log:
            log_dir = Path(user_config.local_log)
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / "pinman.log"

            logger.add(
                log_file,
                level="DEBUG",
                format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
                rotation="10 MB",
                retention="30 days",
                compression="gz"
            )
            logger.debug(f"File logging enabled: {log_file}")

    except Exception as e:
        # Don't fail the entire application if logging setup fails
        logger.warning(f"Failed to setup file logging: {e}")
