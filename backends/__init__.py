"""Chat backends the session driver can delegate turns to."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .base import BackendError, BackendLaunchError, BaseBackend
from .command import CommandBackend


def build_backend(command: Sequence[str], *, cwd: Optional[Path] = None) -> BaseBackend:
    """Return the backend for the configured command line."""

    return CommandBackend(command, cwd=cwd)


__all__ = [
    "BackendError",
    "BackendLaunchError",
    "BaseBackend",
    "CommandBackend",
    "build_backend",
]
