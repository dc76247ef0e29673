"""Session configuration and environment-derived runtime settings."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from chatlog_env import get_env

from .paths import default_log_dir

DEFAULT_BACKEND_COMMAND = "chat"
DEFAULT_ASSISTANT_NAME = "Assistant"
DEFAULT_USER_NAME = "You"

BACKEND_ENV = "CHATLOG_BACKEND"
ASSISTANT_NAME_ENV = "CHATLOG_ASSISTANT_NAME"
USER_NAME_ENV = "CHATLOG_USER_NAME"


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Parsed invocation options; never mutated after parsing."""

    directory: Optional[Path] = None
    session_name: Optional[str] = None
    token: Optional[str] = None
    message_parts: Tuple[str, ...] = ()

    @property
    def initial_message(self) -> str:
        return " ".join(self.message_parts)


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    log_dir: Path
    backend_command: Tuple[str, ...]
    assistant_name: str = DEFAULT_ASSISTANT_NAME
    user_name: str = DEFAULT_USER_NAME

    @classmethod
    def from_env(cls) -> "RuntimeSettings":
        """Read settings once, honouring env vars and the secrets file."""

        command = tuple(shlex.split(get_env(BACKEND_ENV) or DEFAULT_BACKEND_COMMAND))
        return cls(
            log_dir=default_log_dir(),
            backend_command=command or (DEFAULT_BACKEND_COMMAND,),
            assistant_name=get_env(ASSISTANT_NAME_ENV) or DEFAULT_ASSISTANT_NAME,
            user_name=get_env(USER_NAME_ENV) or DEFAULT_USER_NAME,
        )


__all__ = ["SessionConfig", "RuntimeSettings"]
