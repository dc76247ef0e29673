"""Base classes for chat backends the session driver delegates to."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class BackendError(RuntimeError):
    """Base exception for backend failures the driver cannot turn into a reply."""


class BackendLaunchError(BackendError):
    """Raised when the backend process cannot be started at all."""


class BaseBackend:
    """Common interface: one blocking call per turn.

    Implementations return the reply text unmodified. Errors reported by the
    backend itself (non-zero exit, error text) are part of the reply; only a
    failure to reach the backend at all raises :class:`BackendError`.
    """

    name: str = "backend"

    def send(
        self,
        message: str,
        *,
        context: Optional[Path] = None,
        token: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def describe(self) -> str:
        return self.name
