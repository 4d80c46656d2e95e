"""Read-only discovery and formatting of Claude settings files.

Looks for global, project, and project-local ``settings.json`` files and
turns each into indented display lines. Nothing here writes to disk.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

ORDERED_KEYS: tuple[str, ...] = (
    "model",
    "defaultMode",
    "thinking",
    "permissions",
    "mcpServers",
    "hooks",
    "plugins",
    "env",
)
PERMISSION_CATEGORIES: tuple[str, ...] = ("allow", "ask", "deny")


@dataclass(frozen=True)
class SettingsFile:
    """One discovered settings file.

    ``value`` holds the decoded JSON, or an ``InvalidSettings`` marker when
    the file could not be parsed.
    """

    label: str
    path: Path
    value: object


@dataclass(frozen=True)
class InvalidSettings:
    message: str


@dataclass
class SettingsCollection:
    files: list[SettingsFile] = field(default_factory=list)


def load_settings_file(label: str, path: Path) -> SettingsFile | None:
    """Load one settings file; missing or unreadable files return ``None``."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    try:
        value = json.loads(content)
    except json.JSONDecodeError:
        value = InvalidSettings(f"(invalid JSON: {path})")
    return SettingsFile(label=label, path=path, value=value)


def discover_settings_files_in(home: Path | None, project: Path) -> SettingsCollection:
    """Collect global, project, and project-local settings in that order."""
    candidates: list[tuple[str, Path]] = []
    if home is not None:
        candidates.append(("Global", Path(home) / ".claude" / "settings.json"))
    candidates.append(("Project", Path(project) / ".claude" / "settings.json"))
    candidates.append(("Project Local", Path(project) / ".claude" / "settings.local.json"))

    files: list[SettingsFile] = []
    for label, path in candidates:
        settings_file = load_settings_file(label, path)
        if settings_file is not None:
            files.append(settings_file)
    return SettingsCollection(files=files)


def display_scalar(value: object) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


def format_inline(value: object) -> str:
    if isinstance(value, list):
        return "[" + ", ".join(display_scalar(item) for item in value) + "]"
    return display_scalar(value)


def _format_permissions(value: object, lines: list[str]) -> None:
    if not isinstance(value, dict):
        lines.append(f"  Permissions: {format_inline(value)}")
        return
    for category in PERMISSION_CATEGORIES:
        items = value.get(category)
        if not isinstance(items, list) or not items:
            continue
        lines.append(f"  Permissions ({category}):")
        lines.extend(f"    {display_scalar(item)}" for item in items)
    for key, item in value.items():
        if key not in PERMISSION_CATEGORIES:
            lines.append(f"  Permissions ({key}): {format_inline(item)}")


def _format_mcp_servers(value: object, lines: list[str]) -> None:
    if not isinstance(value, dict):
        lines.append(f"  MCP Servers: {format_inline(value)}")
        return
    lines.append("  MCP Servers:")
    for name, server in value.items():
        if isinstance(server, dict) and "command" in server:
            raw_args = server.get("args")
            args = " ".join(display_scalar(arg) for arg in raw_args) if isinstance(raw_args, list) else ""
            command = display_scalar(server["command"])
            lines.append(f"    {name}: {command} {args}" if args else f"    {name}: {command}")
        else:
            lines.append(f"    {name}: {format_inline(server)}")


def _format_hooks(value: object, lines: list[str]) -> None:
    if not isinstance(value, dict):
        lines.append(f"  Hooks: {format_inline(value)}")
        return
    lines.append("  Hooks:")
    for event, hook_config in value.items():
        if not isinstance(hook_config, list):
            lines.append(f"    {event}: {format_inline(hook_config)}")
            continue
        for hook in hook_config:
            if isinstance(hook, dict) and "command" in hook:
                command = display_scalar(hook["command"])
            else:
                command = format_inline(hook)
            lines.append(f"    {event}: {command}")


def _format_plugins(value: object, lines: list[str]) -> None:
    if not isinstance(value, list):
        lines.append(f"  Plugins: {format_inline(value)}")
        return
    lines.append("  Plugins:")
    lines.extend(f"    {display_scalar(plugin)}" for plugin in value)


def _format_env(value: object, lines: list[str]) -> None:
    if not isinstance(value, dict):
        lines.append(f"  Env: {format_inline(value)}")
        return
    lines.append("  Env:")
    lines.extend(f"    {key}={display_scalar(item)}" for key, item in value.items())


_SCALAR_LABELS = {
    "model": "Model",
    "defaultMode": "Default Mode",
    "thinking": "Thinking",
}

_SECTION_FORMATTERS = {
    "permissions": _format_permissions,
    "mcpServers": _format_mcp_servers,
    "hooks": _format_hooks,
    "plugins": _format_plugins,
    "env": _format_env,
}


def format_key_value(key: str, value: object, lines: list[str]) -> None:
    if key in _SCALAR_LABELS:
        lines.append(f"  {_SCALAR_LABELS[key]}: {display_scalar(value)}")
        return
    formatter = _SECTION_FORMATTERS.get(key)
    if formatter is not None:
        formatter(value, lines)
        return
    lines.append(f"  {key}: {format_inline(value)}")


def format_settings(collection: SettingsCollection) -> list[str]:
    """Return display lines for every file in ``collection``.

    Well-known keys come first in ``ORDERED_KEYS`` order, remaining keys
    follow in file order. Files are separated by one blank line.
    """
    lines: list[str] = []
    for idx, settings_file in enumerate(collection.files):
        if idx > 0:
            lines.append("")
        lines.append(f"▾ {settings_file.label} ({settings_file.path})")

        value = settings_file.value
        if isinstance(value, InvalidSettings):
            lines.append(f"  {value.message}")
            continue
        if not isinstance(value, dict):
            lines.append("  (not a JSON object)")
            continue

        for key in ORDERED_KEYS:
            if key in value:
                format_key_value(key, value[key], lines)
        for key, item in value.items():
            if key not in ORDERED_KEYS:
                format_key_value(key, item, lines)
    return lines
