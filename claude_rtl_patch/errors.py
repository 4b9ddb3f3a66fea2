"""Errors raised by the per-file patch operations."""

from __future__ import annotations

from pathlib import Path


class PatchError(Exception):
    """Base class: a single target file could not be processed."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.message = message


class NotFoundError(PatchError):
    """The target stylesheet does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"CSS file not found: {path}")


class UnrecognizedFormatError(PatchError):
    """The mandatory class could not be located in the stylesheet."""

    def __init__(self, path: Path, class_name: str) -> None:
        super().__init__(
            path,
            f"Could not find the '{class_name}' class in {path.name}. "
            "The extension structure may have changed.",
        )
        self.class_name = class_name


class NothingToRevertError(PatchError):
    """Neither a backup nor an injected fragment is present."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "No patch found to revert")


class BrokenFragmentError(PatchError):
    """A start marker is present without a matching end marker."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            path,
            f"{path.name} contains an unterminated RTL patch block. "
            "Reinstall the extension or remove the block by hand.",
        )
