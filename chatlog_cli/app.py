"""
Session driver: wrap an external chat CLI and transcribe every turn.

Piped stdin is sent once and the process exits; otherwise an optional
argument message is sent and an interactive loop follows until ``exit`` or
end of input. Both sides of each turn are appended to a Markdown log.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, TextIO

try:
    import readline  # type: ignore  # noqa: F401  (line editing for input())
except Exception:  # pragma: no cover - platform without readline
    readline = None  # type: ignore

from backends import BackendError, BaseBackend, build_backend

from .args import parse_args
from .colors import color
from .config import RuntimeSettings, SessionConfig
from .errors import ChatlogError, ConfigurationError, SessionEnvironmentError
from .exchange import MessageExchanger
from .paths import ensure_log_dir, resolve_context_file, resolve_log_path
from .transcript import Transcript

__all__ = ["SessionMode", "detect_mode", "main", "run_session"]

EXIT_COMMAND = "exit"


class SessionMode(Enum):
    PIPED_SINGLE_SHOT = "piped"
    ARG_SINGLE_SHOT = "arg"
    INTERACTIVE = "interactive"
    ENDED = "ended"


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        return False


def detect_mode(stdin: TextIO, initial_message: str) -> SessionMode:
    if not _is_tty(stdin):
        return SessionMode.PIPED_SINGLE_SHOT
    if initial_message:
        return SessionMode.ARG_SINGLE_SHOT
    return SessionMode.INTERACTIVE


def merge_piped_message(initial_message: str, piped: str) -> str:
    """Argument message first, then piped text, one space between when both exist."""

    return " ".join(part for part in (initial_message, piped) if part)


def _print_error(message: str) -> None:
    print(color(message, fg="red", stream=sys.stderr), file=sys.stderr)


def _print_warning(message: str) -> None:
    print(color(message, fg="yellow", stream=sys.stderr), file=sys.stderr)


def _read_line(prompt: str, stdin: TextIO, out: TextIO) -> str:
    if stdin is sys.stdin and out is sys.stdout:
        return input(prompt)
    out.write(prompt)
    out.flush()
    line = stdin.readline()
    if not line:
        raise EOFError
    return line.rstrip("\r\n")


def _run_interactive(exchanger: MessageExchanger, log_path: Path, stdin: TextIO, out: TextIO) -> None:
    print(color(f"Chat session started. Logging to {log_path}", fg="yellow", stream=out), file=out)
    print(color(f"Backend: {exchanger.backend.describe()}", fg="yellow", stream=out), file=out)
    print(color(f"Type '{EXIT_COMMAND}' to quit.", fg="yellow", stream=out), file=out)
    print(file=out)
    prompt = color(f"{exchanger.transcript.user_name}:", fg="cyan", bold=True, stream=out) + " "
    while True:
        try:
            line = _read_line(prompt, stdin, out)
        except EOFError:
            print(file=out)
            break
        if line.strip() == EXIT_COMMAND:
            break
        exchanger.exchange(line)
    print(color(f"Session ended. Transcript saved to {log_path}", fg="yellow", stream=out), file=out)


def run_session(
    config: SessionConfig,
    exchanger: MessageExchanger,
    *,
    log_path: Path,
    stdin: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Drive the session state machine until it reaches ``ENDED``."""

    stdin = stdin if stdin is not None else sys.stdin
    out = out if out is not None else sys.stdout
    initial = config.initial_message

    mode = detect_mode(stdin, initial)
    while mode is not SessionMode.ENDED:
        if mode is SessionMode.PIPED_SINGLE_SHOT:
            combined = merge_piped_message(initial, stdin.read().rstrip("\n"))
            if combined:
                exchanger.exchange(combined)
            mode = SessionMode.ENDED
        elif mode is SessionMode.ARG_SINGLE_SHOT:
            exchanger.exchange(initial)
            mode = SessionMode.INTERACTIVE
        else:
            _run_interactive(exchanger, log_path, stdin, out)
            mode = SessionMode.ENDED
    return 0


def _enter_directory(directory: Optional[Path]) -> Path:
    if directory is None:
        return Path.cwd()
    try:
        os.chdir(directory)
    except OSError as exc:
        raise SessionEnvironmentError(f"Cannot change directory to {directory}: {exc}") from exc
    return directory


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    backend: Optional[BaseBackend] = None,
    settings: Optional[RuntimeSettings] = None,
) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = parse_args(argv)
    except ConfigurationError as exc:
        _print_error(f"chatlog: {exc}")
        return exc.exit_code
    except SystemExit as exc:
        # --help / --version
        return exc.code if isinstance(exc.code, int) else 0

    if settings is None:
        settings = RuntimeSettings.from_env()

    # Anchor a relative log dir to the launch directory before any --dir change.
    log_dir = settings.log_dir.expanduser().resolve()

    try:
        base_dir = _enter_directory(config.directory)
        ensure_log_dir(log_dir)
        if config.session_name == "":
            _print_warning(
                "chatlog: --session name has no characters from [a-z0-9_-]; "
                "using a timestamped log name instead."
            )
        log_path = resolve_log_path(config.session_name, log_dir=log_dir)
        context = resolve_context_file(base_dir)

        if backend is None:
            backend = build_backend(settings.backend_command, cwd=base_dir)
        transcript = Transcript(
            log_path,
            user_name=settings.user_name,
            assistant_name=settings.assistant_name,
        )
        exchanger = MessageExchanger(backend, transcript, context=context, token=config.token)
        return run_session(config, exchanger, log_path=log_path)
    except (ChatlogError, BackendError) as exc:
        _print_error(f"chatlog: {exc}")
        return 1
    except KeyboardInterrupt:
        print(file=sys.stderr)
        _print_warning("Session interrupted.")
        return 130
