"""Configuration management.

TIER 1: May import from core only.

Settings come from an optional cleanup.jsonc (or cleanup.json) in the
directory named by CLEANUP_CONFIG_DIR, or the current directory. Any key
not set there falls back to DEFAULTS.
"""

import json
import os
from pathlib import Path
from typing import Any

from core.errors import ConfigError
from core.jsonc import parse_jsonc

_config_cache: dict | None = None

# Config file names (priority order)
CONFIG_FILES = ["cleanup.jsonc", "cleanup.json"]

DEFAULTS: dict[str, Any] = {
    "typescript": {
        "generator": "@polymer/gen-typescript-declarations",
        "script_name": "update-types",
        "script_command": (
            "bower install && gen-typescript-declarations --deleteExisting --outDir ."
        ),
        "helper_dependency": "bower",
        "helper_range": "^1.8.0",
        "commit_message": "Update and/or configure type declarations.",
    },
    "npm": {
        "timeout": None,
    },
}


def get_config_dir() -> Path:
    """Get the directory searched for cleanup.jsonc."""
    if env_dir := os.environ.get("CLEANUP_CONFIG_DIR"):
        return Path(env_dir)
    return Path.cwd()


def get_config_path() -> Path | None:
    """Find config file path.

    Returns:
        Path to config file, or None if not found.
    """
    config_dir = get_config_dir()

    for filename in CONFIG_FILES:
        config_path = config_dir / filename
        if config_path.exists():
            return config_path

    return None


def load_config() -> dict:
    """Load the user config file, without defaults applied.

    Returns:
        Configuration dictionary (empty if there is no config file).

    Raises:
        ConfigError: If the config file is not valid JSON(C).
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    config_path = get_config_path()

    if config_path is None:
        _config_cache = {}
        return _config_cache

    try:
        content = config_path.read_text()
        if config_path.suffix == ".jsonc":
            content = parse_jsonc(content)
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid {config_path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {config_path.name}: top level must be an object")

    _config_cache = data
    return _config_cache


def _lookup(data: dict, parts: list[str]) -> tuple[bool, Any]:
    value: Any = data
    for part in parts:
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return False, None
    return True, value


def get(key: str, default: Any = None) -> Any:
    """Get config value by dot notation.

    Looks in the config file first, then in DEFAULTS.

    Args:
        key: Dot-separated key path (e.g., "typescript.script_name").
        default: Value used if the key is in neither.

    Returns:
        Config value or default.

    Example:
        get("typescript.generator")  # "@polymer/gen-typescript-declarations"
        get("npm.timeout")  # None unless configured
    """
    parts = key.split(".")

    found, value = _lookup(load_config(), parts)
    if found:
        return value

    found, value = _lookup(DEFAULTS, parts)
    if found:
        return value

    return default


def clear_cache() -> None:
    """Clear config cache (for testing)."""
    global _config_cache
    _config_cache = None
