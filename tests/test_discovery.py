"""Tests for extension discovery."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from claude_rtl_patch.discovery import (
    ENV_EXT_DIR,
    ExtensionInstall,
    _is_wsl,
    _ordered_wsl_user_dirs,
    _wsl_user_dirs,
    discover_installs,
    extension_dir_candidates,
)


class TestExtensionInstall(unittest.TestCase):
    def test_version(self):
        inst = ExtensionInstall(root=Path("/x/anthropic.claude-code-2.0.14-linux-x64"))
        self.assertEqual(inst.version, "2.0.14-linux-x64")

    def test_version_for_custom_dir(self):
        self.assertEqual(ExtensionInstall(root=Path("/x/my-ext")).version, "my-ext")

    def test_css_path(self):
        inst = ExtensionInstall(root=Path("/x/anthropic.claude-code-1.0.0"))
        self.assertEqual(inst.css_path, Path("/x/anthropic.claude-code-1.0.0/webview/index.css"))


class TestCandidates(unittest.TestCase):
    def test_linux_defaults(self):
        with tempfile.TemporaryDirectory() as d:
            home = Path(d)
            with mock.patch("claude_rtl_patch.discovery.Path.home", return_value=home), \
                    mock.patch("claude_rtl_patch.discovery.sys.platform", "linux"), \
                    mock.patch("claude_rtl_patch.discovery._is_wsl", return_value=False):
                candidates = extension_dir_candidates()
            self.assertIn(home / ".vscode" / "extensions", candidates)
            self.assertIn(home / ".vscode-server" / "extensions", candidates)
            self.assertIn(home / ".cursor" / "extensions", candidates)
            self.assertEqual(len(candidates), 5)

    def test_macos_adds_application_support(self):
        home = Path("/Users/me")
        with mock.patch("claude_rtl_patch.discovery.Path.home", return_value=home), \
                mock.patch("claude_rtl_patch.discovery.sys.platform", "darwin"):
            candidates = extension_dir_candidates()
        self.assertIn(home / "Library" / "Application Support" / "Code" / "User" / "extensions", candidates)

    def test_windows_uses_appdata(self):
        env = {"APPDATA": "/appdata", "LOCALAPPDATA": "/local"}
        with mock.patch.dict("os.environ", env), \
                mock.patch("claude_rtl_patch.discovery.sys.platform", "win32"):
            candidates = extension_dir_candidates()
        self.assertIn(Path("/appdata") / "Code" / "User" / "extensions", candidates)
        self.assertIn(Path("/appdata") / "Cursor" / "User" / "extensions", candidates)
        self.assertIn(Path("/local") / "Programs" / "Microsoft VS Code" / "extensions", candidates)


class TestDiscoverInstalls(unittest.TestCase):
    def test_explicit_dir_wins(self):
        with mock.patch.dict("os.environ", {ENV_EXT_DIR: "/from/env"}):
            installs = discover_installs(explicit_dir="/explicit")
        self.assertEqual([i.root for i in installs], [Path("/explicit")])

    def test_env_override(self):
        with mock.patch.dict("os.environ", {ENV_EXT_DIR: "/from/env"}):
            installs = discover_installs()
        self.assertEqual([i.root for i in installs], [Path("/from/env")])

    def test_scans_candidates(self):
        with tempfile.TemporaryDirectory() as d:
            ext_dir = Path(d) / "extensions"
            (ext_dir / "anthropic.claude-code-1.0.0").mkdir(parents=True)
            (ext_dir / "anthropic.claude-code-1.1.0").mkdir()
            (ext_dir / "ms-python.python-2024.1.0").mkdir()
            (ext_dir / "anthropic.claude-code-stray.txt").write_text("")

            with mock.patch.dict("os.environ", {}, clear=True), \
                    mock.patch(
                        "claude_rtl_patch.discovery.extension_dir_candidates",
                        return_value=[ext_dir, ext_dir, Path(d) / "missing"],
                    ):
                installs = discover_installs()

            self.assertEqual(
                [i.version for i in installs],
                ["1.0.0", "1.1.0"],
            )


class TestWsl(unittest.TestCase):
    def test_skips_system_users(self):
        with tempfile.TemporaryDirectory() as d:
            users = Path(d)
            for name in ("Public", "Default", "alice", ".hidden", "All Users"):
                (users / name).mkdir()
            self.assertEqual([p.name for p in _wsl_user_dirs(users)], ["alice"])

    def test_preferred_user_first(self):
        dirs = [Path("/mnt/c/Users/alice"), Path("/mnt/c/Users/Bob")]
        with mock.patch.dict("os.environ", {"CCRTL_WINDOWS_USER": "bob"}, clear=True):
            ordered = _ordered_wsl_user_dirs(dirs)
        self.assertEqual([p.name for p in ordered], ["Bob", "alice"])

    def test_is_wsl_reads_proc_version(self):
        with mock.patch("claude_rtl_patch.discovery.Path.read_text", return_value="Linux 5.15 microsoft-standard-WSL2"):
            self.assertTrue(_is_wsl())
        with mock.patch("claude_rtl_patch.discovery.Path.read_text", side_effect=OSError):
            self.assertFalse(_is_wsl())


if __name__ == "__main__":
    unittest.main()
