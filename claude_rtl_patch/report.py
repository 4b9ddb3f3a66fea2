"""Report data classes for patch/unpatch/status operations."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .discovery import EXTENSION_PREFIX

RELOAD_HINT = 'Reload the editor window to see changes (Ctrl+Shift+P -> "Reload Window")'

METHOD_BACKUP = "restored-from-backup"
METHOD_STRIP = "stripped-in-place"


def _has_permission_error(errors: List[Tuple[Path, str]]) -> bool:
    """Check if any error looks like a permission issue."""
    for _, msg in errors:
        low = msg.lower()
        if "permission denied" in low or "errno 13" in low or "access is denied" in low:
            return True
    return False


def _permission_hint(command: str) -> str:
    if sys.platform == "win32":
        return "Fix: Run as Administrator"
    return f"Fix: Run with elevated permissions:\n  sudo {command}"


def _label(path: Path) -> str:
    """'[<version>]' for a css path inside an extension dir."""
    root = path.parent.parent
    name = root.name
    if name.startswith(EXTENSION_PREFIX):
        name = name[len(EXTENSION_PREFIX):]
    return f"[{name or root}]"


def _error_lines(errors: List[Tuple[Path, str]], command: str) -> List[str]:
    lines: List[str] = []
    for path, msg in errors:
        lines.append(f"{_label(path)} Failed: {msg} - {path.parent.parent}")
    if _has_permission_error(errors):
        lines.append("")
        lines.append(_permission_hint(command))
    return lines


@dataclass
class ApplyResult:
    """Outcome of a successful apply on one stylesheet."""
    path: Path
    class_map: Dict[str, str]
    backup_path: Path
    replaced: bool = False  # True if an older fragment was swapped out


@dataclass
class RevertResult:
    """Outcome of a successful revert on one stylesheet."""
    path: Path
    method: str  # METHOD_BACKUP | METHOD_STRIP
    stale_backup: Optional[Path] = None  # backup that could not be deleted


@dataclass
class PatchReport:
    """Report for a patch (or ensure) run over several installs."""
    patched: List[ApplyResult] = field(default_factory=list)
    already_patched: List[Path] = field(default_factory=list)
    errors: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.patched or self.already_patched)

    def summary(self) -> str:
        lines: List[str] = []
        for r in self.patched:
            action = "re-applied" if r.replaced else "applied"
            lines.append(f"{_label(r.path)} RTL patch {action} - {r.path.parent.parent}")
            lines.append(f"  Classes found: {', '.join(r.class_map)}")
            lines.append(f"  Backup saved: {r.backup_path}")
        for p in self.already_patched:
            lines.append(f"{_label(p)} Already patched - {p.parent.parent}")
        lines.extend(_error_lines(self.errors, "ccrtl"))
        if self.patched:
            lines.append("")
            lines.append(RELOAD_HINT)
        return "\n".join(lines)


@dataclass
class UnpatchReport:
    """Report for a revert run."""
    reverted: List[RevertResult] = field(default_factory=list)
    errors: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.reverted)

    def summary(self) -> str:
        lines = [
            f"{_label(r.path)} Reverted RTL patch ({r.method}) - {r.path.parent.parent}"
            for r in self.reverted
        ]
        for r in self.reverted:
            if r.stale_backup is not None:
                lines.append(f"  Warning: could not delete backup {r.stale_backup}; remove it by hand")
        lines.extend(_error_lines(self.errors, "ccrtl --revert"))
        if self.reverted:
            lines.append("")
            lines.append(RELOAD_HINT)
        return "\n".join(lines)


@dataclass
class FileStatus:
    """Status of a single target stylesheet."""
    path: Path
    version: str
    patched: bool = False
    has_backup: bool = False
    build_hash: Optional[str] = None
    error: str = ""


@dataclass
class StatusReport:
    """Report for --check."""
    files: List[FileStatus] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return any(f.patched for f in self.files)

    def summary(self) -> str:
        lines: List[str] = []
        for f in self.files:
            state = "PATCHED" if f.patched else "NOT PATCHED"
            backup_str = " [backup]" if f.has_backup else ""
            hash_str = f" (hash: {f.build_hash})" if f.build_hash else ""
            error_str = f" ERROR: {f.error}" if f.error else ""
            lines.append(
                f"[{f.version}] {state}{backup_str}{hash_str}{error_str} - {f.path.parent.parent}"
            )
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, object]:
        return {
            "files": [
                {
                    "path": str(f.path),
                    "version": f.version,
                    "patched": f.patched,
                    "has_backup": f.has_backup,
                    "build_hash": f.build_hash,
                    "error": f.error,
                }
                for f in self.files
            ],
        }
