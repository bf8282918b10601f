# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/core/backup.py

"""
Safety net: deduplicated backup-before-mutate.

Every directory that has ever had a file deleted or renamed through pinman
gets a hidden sidecar directory:

    <parent_dir>/.safety_net/
        index.txt                  one sha256 hex digest per line, append-only
        <stem>_<8 hex>.<ext>       backup copy
        <stem>_<8 hex>.bak         backup copy of a file without extension

ensure_backup() is stateless. It re-reads the index on every call and takes
no lock, so two simultaneous backups of identical content can both miss the
membership test and both write a copy plus an index line. That costs storage
only; either copy restores the same bytes.
"""

from __future__ import annotations

import hashlib
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final, Optional

import loguru

from pinman.system.exceptions import BackupIOError, NoParentDirectoryError

logger = loguru.logger

SIDECAR_DIRNAME: Final = ".safety_net"
INDEX_FILENAME: Final = "index.txt"
NO_EXTENSION_SUFFIX: Final = "bak"
FALLBACK_STEM: Final = "file"
HASH_PREFIX_LEN: Final = 8
CHUNK_SIZE: Final = 8192


class BackupStatus(str, Enum):
    CREATED = "created"
    DEDUPLICATED = "deduplicated"


@dataclass
class BackupResult:
    """Outcome of a successful ensure_backup() call."""
    source: Path
    digest: str
    status: BackupStatus
    backup_path: Optional[Path] = None  # None on a dedup hit

    def to_dict(self) -> dict[str, str | None]:
        return {
            "source": str(self.source),
            "digest": self.digest,
            "status": self.status.value,
            "backup_path": str(self.backup_path) if self.backup_path else None,
        }


@dataclass
class SafetyNetEntry:
    """One index line, paired with the backup file it points at (if found)."""
    digest: str
    backup_path: Optional[Path]


def hash_file(path: Path) -> str:
    """Calculate the sha256 hex digest of a file, streamed in chunks."""
    h = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            h.update(chunk)
    return h.hexdigest()


def sidecar_dir(directory: Path) -> Path:
    return directory / SIDECAR_DIRNAME


def _is_utf8(name: str) -> bool:
    # Undecodable filename bytes arrive as lone surrogates
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _split_name(path: Path) -> tuple[str, str]:
    """Split a filename into (stem, extension) on its final dot.

    '.env' has no extension, matching how the name reads on disk. A stem
    that is empty or not valid UTF-8 becomes FALLBACK_STEM.
    """
    name = path.name
    dot = name.rfind(".")
    if dot <= 0:
        stem, extension = name, ""
    else:
        stem, extension = name[:dot], name[dot + 1:]
    if not stem or not _is_utf8(stem):
        stem = FALLBACK_STEM
    return stem, extension


def backup_filename(path: Path, digest: str) -> str:
    """Name of the backup copy of `path` whose content hashes to `digest`.

    Examples:
        photo.jpg, abc12345... -> photo_abc12345.jpg
        README,    deadbeef... -> README_deadbeef.bak
    """
    stem, extension = _split_name(path)
    prefix = digest[:HASH_PREFIX_LEN]
    suffix = extension if extension else NO_EXTENSION_SUFFIX
    return f"{stem}_{prefix}.{suffix}"


def read_index(sidecar: Path) -> list[str]:
    """Return index lines in append order; empty if no index exists yet."""
    index_path = sidecar / INDEX_FILENAME
    if not index_path.exists():
        return []
    return index_path.read_text(encoding="utf-8").splitlines()


def _resolve_parent(file_path: Path) -> Path:
    if not file_path.name or file_path.parent == file_path:
        raise NoParentDirectoryError(
            f"File has no parent directory: {file_path}", path=str(file_path)
        )
    return file_path.parent


def ensure_backup(file_path: Path | str) -> BackupResult:
    """Make sure a copy of `file_path`'s current content exists in the sidecar.

    Args:
        file_path: Existing regular file about to be deleted or renamed

    Returns:
        BackupResult with status CREATED (new copy written) or
        DEDUPLICATED (digest already indexed, nothing written)

    Raises:
        NoParentDirectoryError: path is a filesystem root; nothing was touched
        BackupIOError: any filesystem failure or an undecodable index,
            original exception chained
    """
    file_path = Path(file_path)
    parent_dir = _resolve_parent(file_path)
    backup_dir = sidecar_dir(parent_dir)

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        digest = hash_file(file_path)
        logger.debug(f"sha256 {digest} for {file_path}")

        if digest in read_index(backup_dir):
            logger.debug(f"Already backed up: {file_path} ({digest[:HASH_PREFIX_LEN]})")
            return BackupResult(file_path, digest, BackupStatus.DEDUPLICATED)

        backup_path = backup_dir / backup_filename(file_path, digest)
        shutil.copyfile(file_path, backup_path)

        with (backup_dir / INDEX_FILENAME).open("a", encoding="utf-8") as index_file:
            index_file.write(f"{digest}\n")

    except (OSError, UnicodeDecodeError) as e:
        raise BackupIOError(
            f"Backup of {file_path} failed: {e}", path=str(file_path)
        ) from e

    logger.info(f"Backed up {file_path} -> {backup_path}")
    return BackupResult(file_path, digest, BackupStatus.CREATED, backup_path)


def list_safety_net(directory: Path) -> list[SafetyNetEntry]:
    """Pair each index line of `directory`'s sidecar with its backup file.

    Read-only. Backup files are matched by the `_<8 hex>.` marker in their
    names; an index line whose file is missing gets backup_path=None.
    """
    backup_dir = sidecar_dir(directory)
    if not backup_dir.is_dir():
        return []

    files = sorted(p for p in backup_dir.iterdir() if p.is_file() and p.name != INDEX_FILENAME)
    entries = []
    for digest in read_index(backup_dir):
        marker = f"_{digest[:HASH_PREFIX_LEN]}."
        match = next((p for p in files if marker in p.name), None)
        entries.append(SafetyNetEntry(digest=digest, backup_path=match))
    return entries


# done.
