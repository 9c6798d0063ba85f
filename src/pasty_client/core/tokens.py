"""
Local store of paste modification tokens.

pasty returns a paste's modification token exactly once, at creation.
The CLI keeps it in ~/.pasty/tokens.json so later update/delete calls
do not need it passed by hand.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from pasty_client.core.config import TOKENS_FILE_NAME, ensure_config_dir, get_config_dir


def get_tokens_path() -> Path:
    return get_config_dir() / TOKENS_FILE_NAME


def _key(base_url: str, paste_id: str) -> str:
    return f"{base_url.rstrip('/')}/{paste_id}"


def load_tokens() -> Dict[str, str]:
    """Load all stored tokens. A missing or corrupt file reads as empty."""
    path = get_tokens_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, IOError):
        return {}
    return data if isinstance(data, dict) else {}


def _write_tokens(tokens: Dict[str, str]) -> None:
    ensure_config_dir()
    path = get_tokens_path()
    path.write_text(json.dumps(tokens, indent=2))
    path.chmod(0o600)  # tokens are credentials


def save_token(base_url: str, paste_id: str, token: str) -> None:
    tokens = load_tokens()
    tokens[_key(base_url, paste_id)] = token
    _write_tokens(tokens)


def get_token(base_url: str, paste_id: str) -> Optional[str]:
    return load_tokens().get(_key(base_url, paste_id))


def forget_token(base_url: str, paste_id: str) -> bool:
    """Remove a stored token. Returns True if one was stored."""
    tokens = load_tokens()
    if tokens.pop(_key(base_url, paste_id), None) is None:
        return False
    _write_tokens(tokens)
    return True
