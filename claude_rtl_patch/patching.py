"""Core patching engine: apply, revert and check the RTL fragment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from . import backup as bak
from .classes import PRIMARY_CLASS, extract_hash_suffix, resolve
from .discovery import ExtensionInstall, discover_installs
from .errors import (
    BrokenFragmentError,
    NothingToRevertError,
    NotFoundError,
    PatchError,
    UnrecognizedFormatError,
)
from .fragment import append_fragment, excise, has_fragment, synthesize
from .report import (
    METHOD_BACKUP,
    METHOD_STRIP,
    ApplyResult,
    FileStatus,
    PatchReport,
    RevertResult,
    StatusReport,
    UnpatchReport,
)

# Lossless round trip for stylesheets that are not valid UTF-8.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _read(path: Path) -> str:
    # Binary mode keeps line endings byte-exact on Windows.
    return path.read_bytes().decode(_ENCODING, _ERRORS)


def _write(path: Path, content: str) -> None:
    try:
        mode: Optional[int] = path.stat().st_mode
    except OSError:
        mode = None
    path.write_bytes(content.encode(_ENCODING, _ERRORS))
    # Preserve permissions
    if mode is not None:
        try:
            os.chmod(path, mode)
        except OSError:
            pass


def apply_patch(path: Path) -> ApplyResult:
    """
    Inject the RTL fragment into the stylesheet at ``path``.

    An existing fragment is replaced, so re-running after an extension
    update picks up the new class hashes. The file is only written once
    everything else has succeeded.

    Raises NotFoundError, BrokenFragmentError or UnrecognizedFormatError;
    OSError propagates.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(path)

    original_bytes = path.read_bytes()
    content = original_bytes.decode(_ENCODING, _ERRORS)
    stripped = excise(content)
    replaced = stripped != content
    if has_fragment(content) and not replaced:
        raise BrokenFragmentError(path)
    content = stripped

    class_map = resolve(content)
    if PRIMARY_CLASS not in class_map:
        raise UnrecognizedFormatError(path, PRIMARY_CLASS)

    patched = append_fragment(content, synthesize(class_map))

    # Backup holds the unpatched file; an existing one is left alone.
    if replaced:
        backup_file = bak.create_backup(path, content.encode(_ENCODING, _ERRORS))
    else:
        backup_file = bak.create_backup(path, original_bytes)

    _write(path, patched)
    return ApplyResult(path=path, class_map=class_map, backup_path=backup_file, replaced=replaced)


def revert_patch(path: Path) -> RevertResult:
    """
    Undo the patch: restore the backup if there is one, else strip the fragment.

    Raises NotFoundError, BrokenFragmentError or NothingToRevertError;
    OSError propagates.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(path)

    if bak.has_backup(path):
        bak.restore_backup(path)
        try:
            bak.remove_backup(path)
        except OSError:
            # Restored already; the leftover backup still holds the original.
            return RevertResult(
                path=path, method=METHOD_BACKUP, stale_backup=bak.backup_path(path),
            )
        return RevertResult(path=path, method=METHOD_BACKUP)

    content = _read(path)
    if has_fragment(content):
        stripped = excise(content)
        if stripped == content:
            raise BrokenFragmentError(path)
        _write(path, stripped)
        return RevertResult(path=path, method=METHOD_STRIP)

    raise NothingToRevertError(path)


def check_patch(path: Path) -> bool:
    """Return True if the stylesheet at ``path`` carries the fragment."""
    path = Path(path)
    if not path.is_file():
        return False
    try:
        return has_fragment(_read(path))
    except OSError:
        return False


def patch(
    *,
    installs: Optional[List[ExtensionInstall]] = None,
    ext_dir: Optional[str] = None,
) -> PatchReport:
    """Apply the patch to every discovered install, skipping and reporting failures."""
    if installs is None:
        installs = discover_installs(explicit_dir=ext_dir)

    report = PatchReport()
    for inst in installs:
        _apply_one(inst.css_path, report)
    return report


def ensure(
    *,
    installs: Optional[List[ExtensionInstall]] = None,
    ext_dir: Optional[str] = None,
) -> PatchReport:
    """Patch only installs that are not patched yet (e.g. after an extension update)."""
    if installs is None:
        installs = discover_installs(explicit_dir=ext_dir)

    report = PatchReport()
    for inst in installs:
        if check_patch(inst.css_path):
            report.already_patched.append(inst.css_path)
            continue
        _apply_one(inst.css_path, report)
    return report


def _apply_one(path: Path, report: PatchReport) -> None:
    try:
        report.patched.append(apply_patch(path))
    except PatchError as e:
        report.errors.append((path, e.message))
    except OSError as e:
        report.errors.append((path, f"write failed: {e}"))


def unpatch(
    *,
    installs: Optional[List[ExtensionInstall]] = None,
    ext_dir: Optional[str] = None,
) -> UnpatchReport:
    """Revert every discovered install."""
    if installs is None:
        installs = discover_installs(explicit_dir=ext_dir)

    report = UnpatchReport()
    for inst in installs:
        path = inst.css_path
        try:
            report.reverted.append(revert_patch(path))
        except PatchError as e:
            report.errors.append((path, e.message))
        except OSError as e:
            report.errors.append((path, f"restore failed: {e}"))
    return report


def status(
    *,
    installs: Optional[List[ExtensionInstall]] = None,
    ext_dir: Optional[str] = None,
) -> StatusReport:
    """Check the patch state of every discovered install."""
    if installs is None:
        installs = discover_installs(explicit_dir=ext_dir)

    report = StatusReport()
    for inst in installs:
        path = inst.css_path
        fs = FileStatus(path=path, version=inst.version, has_backup=bak.has_backup(path))
        if not path.is_file():
            fs.error = "CSS file not found"
            report.files.append(fs)
            continue
        try:
            content = _read(path)
        except OSError as e:
            fs.error = f"read failed: {e}"
            report.files.append(fs)
            continue
        fs.patched = has_fragment(content)
        fs.build_hash = extract_hash_suffix(content)
        report.files.append(fs)
    return report
