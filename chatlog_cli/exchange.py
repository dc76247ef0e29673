"""Single request/response turn against the backend."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

from backends.base import BaseBackend

from .colors import color
from .transcript import Transcript


class MessageExchanger:
    """Log the user's message, ask the backend, log and echo the reply."""

    def __init__(
        self,
        backend: BaseBackend,
        transcript: Transcript,
        *,
        context: Optional[Path] = None,
        token: Optional[str] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        self.backend = backend
        self.transcript = transcript
        self.context = context
        self.token = token
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def exchange(self, message: str) -> str:
        # The user block goes to disk first so a hung or crashed backend
        # still leaves the question in the log.
        self.transcript.append_user(message)
        reply = self.backend.send(message, context=self.context, token=self.token)
        self.transcript.append_assistant(reply)

        label = color(f"{self.transcript.assistant_name}:", fg="cyan", bold=True, stream=self.out)
        print(f"{label} {reply}", file=self.out)
        print(file=self.out, flush=True)
        return reply


__all__ = ["MessageExchanger"]
