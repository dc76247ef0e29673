"""Command-line parsing for the chatlog session driver."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence

from .config import SessionConfig
from .errors import ConfigurationError
from .paths import sanitize_session_name
from .version import __version__


class _ChatlogArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ChatlogArgumentParser(
        prog="chatlog",
        allow_abbrev=False,
        description=(
            "Chat with an external assistant CLI while transcribing every turn "
            "to a Markdown log."
        ),
        epilog=(
            "With piped stdin the input is sent once (after any message "
            "arguments) and chatlog exits. Otherwise an interactive loop runs; "
            "type 'exit' to quit."
        ),
    )
    parser.add_argument(
        "-C",
        "--dir",
        dest="directory",
        metavar="PATH",
        default=None,
        help="Change to PATH before starting (context.md is looked up there).",
    )
    parser.add_argument(
        "--session",
        metavar="NAME",
        default=None,
        help="Session name; the log is written to <log dir>/<name>.md.",
    )
    parser.add_argument(
        "--token",
        metavar="TOKEN",
        default=None,
        help="Auth token forwarded verbatim to every backend call.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "message",
        nargs="*",
        help="Initial message; words are joined with single spaces.",
    )
    return parser


_VALUE_FLAGS = {"-C": "--dir", "--dir": "--dir", "--session": "--session", "--token": "--token"}


def _join_flag_values(argv: Sequence[str]) -> List[str]:
    """Rewrite ``--flag VALUE`` as ``--flag=VALUE``.

    The token after a value flag is taken as-is, even when it starts with a
    dash. A flag with nothing after it is left alone so argparse reports the
    missing argument. Nothing after ``--`` is touched.
    """

    tokens = list(argv)
    joined: List[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == "--":
            joined.extend(tokens[index:])
            break
        flag = _VALUE_FLAGS.get(token)
        if flag is not None and index + 1 < len(tokens):
            joined.append(f"{flag}={tokens[index + 1]}")
            index += 2
            continue
        joined.append(token)
        index += 1
    return joined


def _resolve_directory(raw: Optional[str]) -> Optional[Path]:
    if raw is None:
        return None
    if not raw:
        raise ConfigurationError("-C/--dir: missing argument")
    candidate = Path(raw).expanduser()
    if not candidate.is_dir():
        raise ConfigurationError(f"Directory not found: {raw}")
    return candidate.resolve()


def parse_args(argv: Sequence[str]) -> SessionConfig:
    """Parse ``argv`` into an immutable :class:`SessionConfig`.

    Raises :class:`ConfigurationError` for a missing flag argument, an unknown
    option, or a ``--dir`` that is not an existing directory.
    """

    parser = build_parser()
    ns = parser.parse_intermixed_args(_join_flag_values(argv))

    session_name = None
    if ns.session is not None:
        session_name = sanitize_session_name(ns.session)

    return SessionConfig(
        directory=_resolve_directory(ns.directory),
        session_name=session_name,
        token=ns.token,
        message_parts=tuple(ns.message),
    )


__all__ = ["build_parser", "parse_args"]
