"""Discover installed Claude Code extension directories (cross-platform)."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

ENV_EXT_DIR = "CLAUDE_CODE_EXT_DIR"

EXTENSION_PREFIX = "anthropic.claude-code-"

# Stylesheet of the extension's webview, relative to the extension root.
CSS_RELPATH = Path("webview") / "index.css"

_WSL_SKIP_USERS = {"public", "default", "default user", "all users"}


@dataclass
class ExtensionInstall:
    root: Path  # e.g. ~/.vscode/extensions/anthropic.claude-code-1.2.3

    @property
    def version(self) -> str:
        name = self.root.name
        if name.startswith(EXTENSION_PREFIX):
            return name[len(EXTENSION_PREFIX):]
        return name or "unknown"

    @property
    def css_path(self) -> Path:
        return self.root / CSS_RELPATH


def _preferred_windows_usernames() -> List[str]:
    """Return lowercase preferred Windows usernames from env vars."""
    names: List[str] = []
    seen = set()
    for key in ("CCRTL_WINDOWS_USER", "WSL_WINDOWS_USER", "USERNAME", "USER", "LOGNAME"):
        raw = os.environ.get(key)
        if not isinstance(raw, str):
            continue
        value = raw.strip().strip("\\/")
        if not value:
            continue
        # Allow DOMAIN\\user or /path/like/value forms.
        value = value.split("\\")[-1].split("/")[-1]
        low = value.lower()
        if low not in seen:
            seen.add(low)
            names.append(low)
    return names


def _ordered_wsl_user_dirs(user_dirs: Sequence[Path]) -> List[Path]:
    """Order WSL Windows user dirs: preferred usernames first, then others."""
    preferred = _preferred_windows_usernames()
    ordered: List[Path] = []
    seen = set()

    by_name: Dict[str, List[Path]] = {}
    for p in user_dirs:
        by_name.setdefault(p.name.lower(), []).append(p)
    for name in preferred:
        for p in by_name.get(name, []):
            if str(p) not in seen:
                seen.add(str(p))
                ordered.append(p)

    for p in user_dirs:
        if str(p) not in seen:
            seen.add(str(p))
            ordered.append(p)
    return ordered


def _wsl_user_dirs(users_dir: Path) -> List[Path]:
    """List non-system user directories under /mnt/c/Users."""
    out: List[Path] = []
    try:
        for user_dir in sorted(users_dir.iterdir()):
            if not user_dir.is_dir():
                continue
            name = user_dir.name.strip().lower()
            if not name or name.startswith(".") or name in _WSL_SKIP_USERS:
                continue
            out.append(user_dir)
    except OSError:
        pass
    return out


def _is_wsl() -> bool:
    """Detect if running under WSL."""
    try:
        release = Path("/proc/version").read_text()
    except OSError:
        return False
    low = release.lower()
    return "microsoft" in low or "wsl" in low


def _wsl_candidates() -> List[Path]:
    """Windows-side extension dirs reachable from inside WSL."""
    users_dir = Path("/mnt/c/Users")
    if not users_dir.is_dir():
        return []
    candidates: List[Path] = []
    for user_dir in _ordered_wsl_user_dirs(_wsl_user_dirs(users_dir)):
        candidates.append(user_dir / ".vscode" / "extensions")
        candidates.append(user_dir / ".vscode-server" / "extensions")
    return candidates


def extension_dir_candidates() -> List[Path]:
    """Return platform-specific directories that may hold installed extensions."""
    home = Path.home()
    candidates = [
        home / ".vscode" / "extensions",
        home / ".vscode-server" / "extensions",
        home / ".vscode-remote" / "extensions",
        home / ".vscode-insiders" / "extensions",
        home / ".cursor" / "extensions",
    ]
    platform = sys.platform

    if platform == "win32":
        appdata = os.environ.get("APPDATA")
        local = os.environ.get("LOCALAPPDATA")
        if appdata:
            for variant in ("Code", "Code - Insiders", "Cursor"):
                candidates.append(Path(appdata) / variant / "User" / "extensions")
        if local:
            candidates.append(Path(local) / "Programs" / "Microsoft VS Code" / "extensions")
    elif platform == "darwin":
        support = home / "Library" / "Application Support"
        candidates.extend([
            support / "Code" / "User" / "extensions",
            support / "Cursor" / "User" / "extensions",
        ])
    elif _is_wsl():
        candidates.extend(_wsl_candidates())

    return candidates


def _installs_in(ext_dir: Path) -> List[ExtensionInstall]:
    found: List[ExtensionInstall] = []
    try:
        for entry in sorted(ext_dir.iterdir()):
            if entry.name.startswith(EXTENSION_PREFIX) and entry.is_dir():
                found.append(ExtensionInstall(root=entry))
    except OSError:
        # Permission denied or vanished; skip.
        pass
    return found


def discover_installs(*, explicit_dir: Optional[str] = None) -> List[ExtensionInstall]:
    """
    Find installed Claude Code extension versions.

    Priority: explicit arg > CLAUDE_CODE_EXT_DIR > auto-discover. An explicit
    directory is taken as the extension root itself and is not validated.
    """
    explicit = explicit_dir or os.environ.get(ENV_EXT_DIR)
    if explicit:
        return [ExtensionInstall(root=Path(explicit).expanduser())]

    results: List[ExtensionInstall] = []
    seen = set()
    for ext_dir in extension_dir_candidates():
        if not ext_dir.is_dir():
            continue
        for inst in _installs_in(ext_dir):
            key = str(inst.root)
            if key in seen:
                continue
            seen.add(key)
            results.append(inst)
    return results
