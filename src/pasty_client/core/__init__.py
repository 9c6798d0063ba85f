"""pasty CLI core - config and token storage."""

from pasty_client.core.config import get_base_url, get_config_path, load_config, save_config
from pasty_client.core import tokens

__all__ = ["get_base_url", "get_config_path", "load_config", "save_config", "tokens"]
