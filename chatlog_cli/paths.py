"""Log file and context file resolution."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from chatlog_env import get_env

from .errors import SessionEnvironmentError

LOG_DIR_ENV = "CHATLOG_LOG_DIR"
CONTEXT_FILENAME = "context.md"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9_-]")


def sanitize_session_name(raw: str) -> str:
    """Lowercase ``raw`` and drop everything outside ``[a-z0-9_-]``.

    Total and idempotent; a name with no usable characters becomes ``""``.
    """

    return _INVALID_NAME_CHARS.sub("", raw.lower())


def default_log_dir() -> Path:
    """Return ``$CHATLOG_LOG_DIR`` or ``~/dev/chat/log``."""

    override = get_env(LOG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / "dev" / "chat" / "log"


def ensure_log_dir(log_dir: Path) -> Path:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SessionEnvironmentError(f"Cannot create log directory {log_dir}: {exc}") from exc
    return log_dir


def resolve_log_path(
    session_name: Optional[str],
    *,
    log_dir: Path,
    now: Optional[datetime] = None,
) -> Path:
    """Return the transcript path for this run.

    Named sessions map to ``<log_dir>/<name>.md``; unnamed ones get a
    second-resolution timestamp, so two unnamed runs in the same second
    share a file.
    """

    if session_name:
        return log_dir / f"{session_name}.md"
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return log_dir / f"chat_{stamp}.md"


def resolve_context_file(base_dir: Path) -> Optional[Path]:
    candidate = base_dir / CONTEXT_FILENAME
    if candidate.is_file():
        return candidate
    return None


__all__ = [
    "CONTEXT_FILENAME",
    "default_log_dir",
    "ensure_log_dir",
    "resolve_context_file",
    "resolve_log_path",
    "sanitize_session_name",
]
