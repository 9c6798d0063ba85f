"""Configuration management for the pasty CLI."""

import json
import os
from pathlib import Path
from typing import Any, Optional

DEFAULT_URL = "https://pasty.lus.pm"

CONFIG_FILE_NAME = "config.json"
TOKENS_FILE_NAME = "tokens.json"


def get_config_dir() -> Path:
    """Directory holding config and stored tokens (``PASTY_HOME`` or ~/.pasty)."""
    home = os.environ.get("PASTY_HOME")
    if home:
        return Path(home)
    return Path.home() / ".pasty"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / CONFIG_FILE_NAME


def ensure_config_dir() -> Path:
    """Ensure the config directory exists."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def load_config() -> dict[str, Any]:
    """Load configuration from the config file.

    A missing or unreadable file reads as an empty config.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}
    try:
        with open(config_path) as f:
            config = json.load(f)
    except (json.JSONDecodeError, OSError):
        return {}
    return config if isinstance(config, dict) else {}


def save_config(config: dict[str, Any]) -> None:
    """Save configuration."""
    ensure_config_dir()
    with open(get_config_path(), "w") as f:
        json.dump(config, f, indent=2)


def get_base_url(override: Optional[str] = None) -> str:
    """Resolve the pasty instance URL.

    Order: explicit override, ``PASTY_URL``, config file, default instance.
    """
    if override:
        return override
    if os.environ.get("PASTY_URL"):
        return os.environ["PASTY_URL"]
    return load_config().get("url") or DEFAULT_URL
