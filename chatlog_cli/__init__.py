"""chatlog CLI package."""

from __future__ import annotations

import sys

from .app import SessionMode, main, run_session
from .args import parse_args
from .config import RuntimeSettings, SessionConfig
from .errors import ChatlogError, ConfigurationError, SessionEnvironmentError
from .version import __version__

__all__ = [
    "main",
    "cli",
    "parse_args",
    "run_session",
    "SessionMode",
    "SessionConfig",
    "RuntimeSettings",
    "ChatlogError",
    "ConfigurationError",
    "SessionEnvironmentError",
    "__version__",
]


def cli() -> int:
    """Console-script entrypoint."""

    return main(sys.argv[1:])
