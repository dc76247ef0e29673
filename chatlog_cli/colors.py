"""Tiny ANSI colour helper for console status output."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

_FG = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}


def colors_enabled(stream: Optional[TextIO] = None) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    target = stream if stream is not None else sys.stdout
    isatty = getattr(target, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # Closed stream.
        return False


def color(
    text: str,
    *,
    fg: Optional[str] = None,
    bold: bool = False,
    stream: Optional[TextIO] = None,
) -> str:
    """Wrap ``text`` in ANSI codes when ``stream`` (default stdout) is a TTY."""

    if not colors_enabled(stream):
        return text
    codes = []
    if bold:
        codes.append("1")
    if fg in _FG:
        codes.append(str(_FG[fg]))
    if not codes:
        return text
    return f"\033[{';'.join(codes)}m{text}\033[0m"


__all__ = ["color", "colors_enabled"]
