"""Environment helpers for chatlog with secrets-file fallbacks."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

_SECRETS_CACHE: Dict[str, str] | None = None


def config_home() -> Path:
    """Return the per-user configuration directory."""

    override = os.getenv("CHATLOG_CONFIG_HOME")
    if override:
        return Path(override).expanduser()

    home = Path.home()
    if sys.platform == "win32":
        return Path(os.getenv("APPDATA", home / "AppData" / "Roaming")) / "chatlog"
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "chatlog"
    return Path(os.getenv("XDG_CONFIG_HOME", home / ".config")) / "chatlog"


def _parse_env_lines(text: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        pairs[key.strip()] = value.strip()
    return pairs


def _load_secrets() -> Dict[str, str]:
    """Load key/value pairs from a secrets file or directory if configured."""

    global _SECRETS_CACHE
    if _SECRETS_CACHE is not None:
        return _SECRETS_CACHE

    secrets: Dict[str, str] = {}
    file_hint = os.getenv("CHATLOG_SECRETS_FILE")
    dir_hint = os.getenv("CHATLOG_SECRETS_DIR")

    if file_hint:
        path = Path(file_hint).expanduser()
        if path.is_file():
            secrets.update(_parse_env_lines(path.read_text(encoding="utf-8")))

    if dir_hint:
        root = Path(dir_hint).expanduser()
        if root.is_dir():
            for candidate in root.iterdir():
                if candidate.is_file():
                    secrets[candidate.name] = candidate.read_text(encoding="utf-8").strip()

    default_file = config_home() / "secrets.env"
    if default_file.is_file():
        for key, value in _parse_env_lines(default_file.read_text(encoding="utf-8")).items():
            secrets.setdefault(key, value)

    _SECRETS_CACHE = secrets
    return secrets


def get_env(name: str) -> Optional[str]:
    """Return an environment value, falling back to the configured secrets source."""

    value = os.getenv(name)
    if value is None:
        value = _load_secrets().get(name)
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def reset_cache() -> None:
    global _SECRETS_CACHE
    _SECRETS_CACHE = None


__all__: List[str] = ["config_home", "get_env", "reset_cache"]
