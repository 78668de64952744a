"""
Configuration management for Notesync.

Uses XDG base directories:
- Config: ~/.config/notesync/config.toml

Environment overrides:
- NOTESYNC_API_URL, NOTESYNC_TIMEOUT, NOTESYNC_DEBUG
"""

from pathlib import Path
from typing import Any
import os

# XDG defaults
DEFAULT_CONFIG_HOME = Path.home() / ".config"

DEFAULT_API_BASE_URL = "http://localhost:4000/api/v1"
DEFAULT_API_TIMEOUT = 10.0  # seconds

TRUTHY = ("1", "true", "yes", "on")


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/notesync)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "notesync"


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def load_config() -> dict[str, Any]:
    """
    Load configuration from config.toml.

    File sections are merged over the defaults, so a partial file
    only needs the keys it changes.
    """
    config = get_default_config()
    config_path = get_config_path()

    if not config_path.exists():
        return config

    # Lazy import tomli only when needed
    import tomli

    with open(config_path, "rb") as f:
        file_config = tomli.load(f)

    for section, values in file_config.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section] = {**config[section], **values}
        else:
            config[section] = values

    return config


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "api": {
            "base_url": DEFAULT_API_BASE_URL,
            "timeout": DEFAULT_API_TIMEOUT,
            "debug": False,  # Development mode request tracing
        },
        "notify": {
            "desktop": False,
        },
    }


def is_truthy(value: Any) -> bool:
    """Interpret a config or env value as a boolean flag."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


def get_api_settings(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Resolve the [api] section with environment overrides applied.

    Raises ValueError if the timeout is not a number.
    """
    config = config or load_config()
    api = dict(config.get("api", {}))

    if env_url := os.environ.get("NOTESYNC_API_URL"):
        api["base_url"] = env_url
    if env_timeout := os.environ.get("NOTESYNC_TIMEOUT"):
        api["timeout"] = env_timeout
    if env_debug := os.environ.get("NOTESYNC_DEBUG"):
        api["debug"] = env_debug

    timeout = api.get("timeout", DEFAULT_API_TIMEOUT)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid API timeout: {timeout!r}")

    return {
        "base_url": str(api.get("base_url") or DEFAULT_API_BASE_URL).rstrip("/"),
        "timeout": timeout,
        "debug": is_truthy(api.get("debug", False)),
    }
