"""Backend that shells out to an external chat CLI."""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from .base import BackendLaunchError, BaseBackend

CONTEXT_FLAG = "--context"
TOKEN_FLAG = "--token"


class CommandBackend(BaseBackend):
    """Run ``<command...> <message> [--context PATH] [--token TOKEN]`` per turn.

    stdout is the reply; stderr is left attached to the terminal. No timeout
    is applied and the exit status is not inspected.
    """

    name = "command"

    def __init__(self, command: Sequence[str], *, cwd: Optional[Path] = None) -> None:
        if not command:
            raise ValueError("backend command must not be empty")
        self.command = list(command)
        self.cwd = cwd

    def build_argv(
        self,
        message: str,
        *,
        context: Optional[Path] = None,
        token: Optional[str] = None,
    ) -> List[str]:
        argv = [*self.command, message]
        if context is not None:
            argv.extend([CONTEXT_FLAG, str(context)])
        if token is not None:
            argv.extend([TOKEN_FLAG, token])
        return argv

    def send(
        self,
        message: str,
        *,
        context: Optional[Path] = None,
        token: Optional[str] = None,
    ) -> str:
        argv = self.build_argv(message, context=context, token=token)
        try:
            proc = subprocess.run(
                argv,
                cwd=str(self.cwd) if self.cwd is not None else None,
                check=False,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise BackendLaunchError(f"Unable to run backend {self.command[0]!r}: {exc}") from exc
        # Same as shell command substitution: drop the output's trailing newlines.
        return (proc.stdout or "").rstrip("\n")

    def describe(self) -> str:
        return shlex.join(self.command)
