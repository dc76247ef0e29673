"""Error hierarchy for the chatlog session driver."""

from __future__ import annotations


class ChatlogError(RuntimeError):
    """Base exception for fatal session-driver failures."""

    exit_code: int = 1


class ConfigurationError(ChatlogError):
    """Raised when the invocation options cannot be honoured.

    Always raised before the log file is touched.
    """


class SessionEnvironmentError(ChatlogError):
    """Raised when the filesystem refuses a setup step (log dir, chdir)."""


__all__ = ["ChatlogError", "ConfigurationError", "SessionEnvironmentError"]
