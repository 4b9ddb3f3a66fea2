"""Backup and restore for the patched stylesheet (.rtl-backup)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

_BACKUP_SUFFIX = ".rtl-backup"


def backup_path(original: Path) -> Path:
    """Return the backup path for a given file."""
    return original.with_name(original.name + _BACKUP_SUFFIX)


def create_backup(original: Path, content: Optional[bytes] = None) -> Path:
    """
    Back up ``original`` unless a backup already exists.

    ``content`` replaces the file's current bytes as the backup payload.
    An existing backup is never overwritten: it holds the pre-patch file
    across any number of re-patches. Returns the backup path.
    """
    bak = backup_path(original)
    if bak.exists():
        return bak
    if content is None:
        content = original.read_bytes()
    bak.write_bytes(content)
    # Preserve permissions
    try:
        os.chmod(bak, original.stat().st_mode)
    except OSError:
        pass
    return bak


def restore_backup(original: Path) -> bool:
    """
    Restore a file from its backup.

    Returns False if no backup exists. I/O errors propagate.
    """
    bak = backup_path(original)
    if not bak.exists():
        return False
    original.write_bytes(bak.read_bytes())
    # Preserve permissions from backup
    try:
        os.chmod(original, bak.stat().st_mode)
    except OSError:
        pass
    return True


def remove_backup(original: Path) -> bool:
    """Remove the backup file if it exists."""
    bak = backup_path(original)
    if not bak.exists():
        return False
    bak.unlink()
    return True


def has_backup(original: Path) -> bool:
    """Check if a backup exists for the given file."""
    return backup_path(original).exists()
