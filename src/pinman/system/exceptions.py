# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/system/exceptions.py

"""
pinman-specific exception classes.

Two families matter at runtime: BackupError (raised by the safety net and
always treated as non-fatal by callers) and FileServiceError (raised by the
file service and mapped to HTTP status codes by the server).
"""


class PinmanError(Exception):
    """Base exception for all pinman-specific errors."""
    pass


class ConfigError(PinmanError):
    """Raised when there are configuration validation or loading errors."""
    pass


# === SAFETY NET (BACKUP) ERRORS ===

class BackupError(PinmanError):
    """Base class for safety-net backup failures."""

    def __init__(self, message: str, path: str = None):
        self.path = path
        super().__init__(message)


class NoParentDirectoryError(BackupError):
    """Raised when the target path has no parent directory (filesystem root)."""
    pass


class BackupIOError(BackupError):
    """Raised when any filesystem step of a backup fails.

    The underlying OSError is chained as __cause__.
    """
    pass


# === FILE SERVICE ERRORS ===

class FileServiceError(PinmanError):
    """Base class for file service failures."""

    def __init__(self, message: str, path: str = None):
        self.path = path
        super().__init__(message)


class PathNotFoundError(FileServiceError):
    """Target path does not exist (or is not the expected kind of entry)."""
    pass


class NotADirectoryPathError(FileServiceError):
    """A directory listing was requested for something that is not a directory."""
    pass


class TargetExistsError(FileServiceError):
    """Rename target already exists."""
    pass


class InvalidNameError(FileServiceError):
    """Rename target name failed validation."""
    pass
