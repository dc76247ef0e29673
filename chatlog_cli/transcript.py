"""Append-only Markdown transcript of a chat session."""

from __future__ import annotations

from pathlib import Path


def format_block(speaker: str, text: str) -> str:
    """Return one log block: ``### speaker``, the text verbatim, a blank line."""

    return f"### {speaker}\n{text}\n\n"


class Transcript:
    """Writes turns to ``path``; the file is opened in append mode per block."""

    def __init__(self, path: Path, *, user_name: str = "You", assistant_name: str = "Assistant") -> None:
        self.path = path
        self.user_name = user_name
        self.assistant_name = assistant_name

    def _append(self, block: str) -> None:
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(block)
            fh.flush()

    def append_user(self, text: str) -> None:
        self._append(format_block(self.user_name, text))

    def append_assistant(self, text: str) -> None:
        self._append(format_block(self.assistant_name, text))


__all__ = ["Transcript", "format_block"]
