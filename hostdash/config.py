"""Configuration loading for hostdash.

Loads settings from TOML config files with sensible defaults.
Search order: explicit --config path → ~/.config/hostdash/config.toml → defaults only.

Only two tables are understood, ``[theme]`` and ``[log]``, each holding
string values. The background is always black; only the accent colour is
configurable.
"""

from __future__ import annotations

import sys
import tomllib
from pathlib import Path
from typing import Any

from hostdash.models import ConfigError

DEFAULT_CONFIG: dict[str, dict[str, str]] = {
    "theme": {"accent": "red"},
    "log": {"level": "WARNING", "file": ""},
}

_DEFAULT_PATH = Path.home() / ".config" / "hostdash" / "config.toml"


def _merge_sections(user: dict[str, Any], source: Path) -> dict[str, dict[str, str]]:
    """Overlay *user* tables onto the defaults, rejecting anything unknown.

    Raises:
        ConfigError: On an unknown table or key, a table given as a scalar,
            or a non-string value.
    """
    merged = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    for section, values in user.items():
        if section not in merged:
            raise ConfigError(f"{source}: unknown table [{section}]")
        if not isinstance(values, dict):
            raise ConfigError(f"{source}: {section} must be a [{section}] table")
        for key, value in values.items():
            if key not in merged[section]:
                raise ConfigError(f"{source}: unknown key {section}.{key}")
            if not isinstance(value, str):
                raise ConfigError(f"{source}: {section}.{key} must be a string")
            merged[section][key] = value
    return merged


def _read_toml(path: Path) -> dict[str, Any]:
    return tomllib.loads(path.read_text(encoding="utf-8"))


def load_config(path: Path | None = None) -> dict[str, dict[str, str]]:
    """Load configuration, merging user TOML over defaults.

    Args:
        path: Explicit config file path (from --config). If None, tries the
              default location ~/.config/hostdash/config.toml.

    Raises:
        SystemExit: If an explicit path doesn't exist or can't be parsed.
        ConfigError: If a file parses but holds tables or keys hostdash
            does not understand.
    """
    if path is not None:
        if not path.is_file():
            print(f"hostdash: config file not found: {path}", file=sys.stderr)
            raise SystemExit(1)
        try:
            user_config = _read_toml(path)
        except tomllib.TOMLDecodeError as e:
            print(f"hostdash: invalid TOML in {path}: {e}", file=sys.stderr)
            raise SystemExit(1) from e
        return _merge_sections(user_config, path)

    if _DEFAULT_PATH.is_file():
        try:
            return _merge_sections(_read_toml(_DEFAULT_PATH), _DEFAULT_PATH)
        except tomllib.TOMLDecodeError:
            print(
                f"hostdash: warning: ignoring invalid TOML in {_DEFAULT_PATH}",
                file=sys.stderr,
            )

    return _merge_sections({}, _DEFAULT_PATH)


def dump_default_config() -> str:
    """Return the default configuration as a TOML string."""
    lines = [
        "# hostdash configuration",
        "# Place this file at ~/.config/hostdash/config.toml",
        "",
    ]
    for section, values in DEFAULT_CONFIG.items():
        lines.append(f"[{section}]")
        for key, value in values.items():
            lines.append(f'{key} = "{value}"')
        lines.append("")
    return "\n".join(lines) + "\n"
