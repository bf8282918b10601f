# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/core/operations.py

"""
File service: the operations behind the HTTP endpoints.

Every operation takes the path it works on explicitly. Delete and rename
call ensure_backup() first; a backup failure is logged and recorded in the
result but never stops the operation the user asked for.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Literal, Optional

import loguru
from pydantic import BaseModel

from pinman.config.manager import DEFAULT_IMAGE_EXTENSIONS
from pinman.core.backup import SIDECAR_DIRNAME, ensure_backup
from pinman.data.filename_validation import validate_new_name
from pinman.system.exceptions import (
    BackupError,
    FileServiceError,
    InvalidNameError,
    NotADirectoryPathError,
    PathNotFoundError,
    TargetExistsError,
)

logger = loguru.logger

_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
    "avif": "image/avif",
    "svg": "image/svg+xml",
    "tiff": "image/tiff",
    "tif": "image/tiff",
    "ico": "image/x-icon",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class DirectoryEntry(BaseModel):
    name: str
    path: str
    is_dir: bool
    is_image: bool


class DirectoryListing(BaseModel):
    current_path: str
    parent_path: Optional[str] = None
    entries: list[DirectoryEntry]


class MutationResult(BaseModel):
    """What happened to a file and to its safety-net copy."""
    operation: Literal["delete", "rename"]
    path: str
    new_path: Optional[str] = None
    backup_status: Literal["created", "deduplicated", "failed"]
    backup_error: Optional[str] = None


def _extension(path: Path) -> str:
    return path.suffix[1:].lower()


def _is_utf8_name(name: str) -> bool:
    # os.listdir hands back undecodable bytes as lone surrogates
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def is_hidden_entry(name: str) -> bool:
    """True for entries that never appear in a listing.

    Two separate rules: dot-prefixed names are hidden, and the safety-net
    sidecar directory is always excluded by name.
    """
    if name == SIDECAR_DIRNAME:
        return True
    return name.startswith(".")


def is_image_file(path: Path, image_extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS) -> bool:
    ext = _extension(path)
    return bool(ext) and ext in image_extensions


def content_type_for(path: Path) -> str:
    """Media type for serving `path`, by extension."""
    return _CONTENT_TYPES.get(_extension(path), DEFAULT_CONTENT_TYPE)


def list_directory(
    path: Path,
    image_extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS,
) -> DirectoryListing:
    """List the subdirectories and image files of `path`.

    Hidden entries (see is_hidden_entry) and names that are not valid
    UTF-8 are skipped. Directories sort
    before files, then names sort case-insensitively.

    Raises:
        PathNotFoundError: path does not exist
        NotADirectoryPathError: path is not a directory
        FileServiceError: directory could not be read
    """
    path = Path(path)
    if not path.exists():
        raise PathNotFoundError(f"Directory '{path}' does not exist", path=str(path))
    if not path.is_dir():
        raise NotADirectoryPathError(f"'{path}' is not a directory", path=str(path))

    extensions = set(image_extensions)
    entries = []
    try:
        for entry_path in path.iterdir():
            if is_hidden_entry(entry_path.name):
                continue
            if not _is_utf8_name(entry_path.name):
                logger.debug(f"Skipping non-UTF-8 name in {path}: {entry_path.name!r}")
                continue

            is_directory = entry_path.is_dir()
            is_image = not is_directory and is_image_file(entry_path, extensions)
            if is_directory or is_image:
                entries.append(DirectoryEntry(
                    name=entry_path.name,
                    path=str(entry_path),
                    is_dir=is_directory,
                    is_image=is_image,
                ))
    except OSError as e:
        raise FileServiceError(f"Cannot read directory '{path}': {e}", path=str(path)) from e

    entries.sort(key=lambda e: (not e.is_dir, e.name.lower()))

    parent_path = str(path.parent) if path.parent != path else None
    logger.debug(f"Listed {len(entries)} entries in {path}")

    return DirectoryListing(
        current_path=str(path),
        parent_path=parent_path,
        entries=entries,
    )


def resolve_file(path: Path) -> Path:
    """Return `path` if it is an existing regular file.

    Raises:
        PathNotFoundError: path is missing or not a regular file
    """
    path = Path(path)
    if not path.is_file():
        raise PathNotFoundError(f"File '{path}' not found", path=str(path))
    return path


def _backup_before_mutation(path: Path) -> tuple[str, Optional[str]]:
    """Run the safety net; never raises for backup failures."""
    try:
        result = ensure_backup(path)
    except BackupError as e:
        logger.warning(f"Failed to create backup: {e}")
        return "failed", str(e)
    return result.status.value, None


def delete_file(path: Path) -> MutationResult:
    """Back up then delete a regular file.

    Raises:
        PathNotFoundError: path is missing or not a regular file
        FileServiceError: the delete itself failed
    """
    path = resolve_file(path)
    backup_status, backup_error = _backup_before_mutation(path)

    try:
        path.unlink()
    except OSError as e:
        raise FileServiceError(f"Cannot delete '{path}': {e}", path=str(path)) from e

    logger.info(f"Deleted {path} (backup {backup_status})")
    return MutationResult(
        operation="delete",
        path=str(path),
        backup_status=backup_status,
        backup_error=backup_error,
    )


def rename_file(old_path: Path, new_name: str) -> MutationResult:
    """Back up then rename a regular file within its own directory.

    Raises:
        PathNotFoundError: old_path is missing or not a regular file
        InvalidNameError: new_name is not a single visible filename
        TargetExistsError: something already exists at the new name
        FileServiceError: the rename itself failed
    """
    old_path = resolve_file(old_path)

    is_valid, message = validate_new_name(new_name)
    if not is_valid:
        raise InvalidNameError(message, path=str(old_path))

    new_path = old_path.parent / new_name
    if new_path.exists() or new_path.is_symlink():
        raise TargetExistsError(f"'{new_path}' already exists", path=str(new_path))

    backup_status, backup_error = _backup_before_mutation(old_path)

    try:
        old_path.rename(new_path)
    except OSError as e:
        raise FileServiceError(
            f"Cannot rename '{old_path}' to '{new_name}': {e}", path=str(old_path)
        ) from e

    logger.info(f"Renamed {old_path} -> {new_path} (backup {backup_status})")
    return MutationResult(
        operation="rename",
        path=str(old_path),
        new_path=str(new_path),
        backup_status=backup_status,
        backup_error=backup_error,
    )


# done.
