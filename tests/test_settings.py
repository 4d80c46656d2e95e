"""Tests for settings-file discovery and formatting."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from jigolo.settings import (
    InvalidSettings,
    SettingsCollection,
    SettingsFile,
    discover_settings_files_in,
    display_scalar,
    format_inline,
    format_settings,
)


class DiscoverSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        base = Path(self._tmp.name)
        self.home = base / "home"
        self.project = base / "project"
        (self.home / ".claude").mkdir(parents=True)
        (self.project / ".claude").mkdir(parents=True)

    def test_collects_existing_files_in_fixed_order(self) -> None:
        (self.project / ".claude" / "settings.local.json").write_text('{"model": "local"}', encoding="utf-8")
        (self.home / ".claude" / "settings.json").write_text('{"model": "global"}', encoding="utf-8")

        collection = discover_settings_files_in(self.home, self.project)

        self.assertEqual([f.label for f in collection.files], ["Global", "Project Local"])
        self.assertEqual(collection.files[0].value, {"model": "global"})

    def test_invalid_json_is_marked(self) -> None:
        path = self.project / ".claude" / "settings.json"
        path.write_text("{nope", encoding="utf-8")

        collection = discover_settings_files_in(None, self.project)

        self.assertEqual(collection.files[0].value, InvalidSettings(f"(invalid JSON: {path})"))

    def test_undecodable_file_is_skipped(self) -> None:
        (self.project / ".claude" / "settings.json").write_bytes(b'{"model": "\xff"}')

        collection = discover_settings_files_in(None, self.project)

        self.assertEqual(collection.files, [])

    def test_nothing_found(self) -> None:
        self.assertEqual(discover_settings_files_in(self.home, self.project).files, [])


class FormatSettingsTests(unittest.TestCase):
    def test_scalars(self) -> None:
        self.assertEqual(display_scalar(True), "true")
        self.assertEqual(display_scalar(None), "null")
        self.assertEqual(display_scalar(3), "3")
        self.assertEqual(display_scalar({"a": 1}), '{"a":1}')
        self.assertEqual(format_inline(["x", 2]), "[x, 2]")

    def test_known_keys_come_first_then_others(self) -> None:
        value = json.loads(
            """{
                "custom": "yes",
                "env": {"A": "1"},
                "permissions": {"allow": ["Bash(ls)"], "deny": []},
                "model": "opus",
                "mcpServers": {"fs": {"command": "npx", "args": ["server", "--ro"]}},
                "hooks": {"PreToolUse": [{"command": "lint"}]},
                "plugins": ["p1"]
            }"""
        )
        collection = SettingsCollection([SettingsFile("Project", Path("/p/.claude/settings.json"), value)])

        self.assertEqual(
            format_settings(collection),
            [
                "▾ Project (/p/.claude/settings.json)",
                "  Model: opus",
                "  Permissions (allow):",
                "    Bash(ls)",
                "  MCP Servers:",
                "    fs: npx server --ro",
                "  Hooks:",
                "    PreToolUse: lint",
                "  Plugins:",
                "    p1",
                "  Env:",
                "    A=1",
                "  custom: yes",
            ],
        )

    def test_files_are_separated_and_invalid_entries_reported(self) -> None:
        collection = SettingsCollection(
            [
                SettingsFile("Global", Path("/h/settings.json"), InvalidSettings("(invalid JSON: /h/settings.json)")),
                SettingsFile("Project", Path("/p/settings.json"), ["not", "object"]),
            ]
        )

        self.assertEqual(
            format_settings(collection),
            [
                "▾ Global (/h/settings.json)",
                "  (invalid JSON: /h/settings.json)",
                "",
                "▾ Project (/p/settings.json)",
                "  (not a JSON object)",
            ],
        )


if __name__ == "__main__":
    unittest.main()
