"""Coverage for session-name sanitization and log/context resolution."""

from __future__ import annotations

import re
import sys
from datetime import datetime
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import chatlog_env
from chatlog_cli.errors import SessionEnvironmentError
from chatlog_cli.paths import (
    default_log_dir,
    ensure_log_dir,
    resolve_context_file,
    resolve_log_path,
    sanitize_session_name,
)

_VALID = re.compile(r"[a-z0-9_-]*")

SAMPLES = [
    "",
    "simple",
    "My Project",
    "Feature/Login-Flow_v2",
    "!!!???",
    "   ",
    "ÜNÏCODE-naïve",
    "tabs\tand\nnewlines",
    "UPPER_lower-123",
    "../../etc/passwd",
    "K",  # Kelvin sign lowercases to ASCII "k"
]


@pytest.mark.parametrize("raw", SAMPLES)
def test_sanitize_output_stays_in_allowed_alphabet(raw: str) -> None:
    cleaned = sanitize_session_name(raw)
    assert _VALID.fullmatch(cleaned)


@pytest.mark.parametrize("raw", SAMPLES)
def test_sanitize_is_idempotent(raw: str) -> None:
    once = sanitize_session_name(raw)
    assert sanitize_session_name(once) == once


def test_sanitize_examples() -> None:
    assert sanitize_session_name("My Project") == "myproject"
    assert sanitize_session_name("Feature/Login-Flow_v2") == "featurelogin-flow_v2"
    assert sanitize_session_name("../../etc/passwd") == "etcpasswd"
    assert sanitize_session_name("!!!") == ""


def test_named_session_path_is_pure_function_of_name(tmp_path: Path) -> None:
    first = resolve_log_path("daily", log_dir=tmp_path, now=datetime(2020, 1, 1))
    second = resolve_log_path("daily", log_dir=tmp_path, now=datetime(2031, 7, 4, 12, 30))
    assert first == second == tmp_path / "daily.md"


def test_unnamed_session_uses_second_resolution_timestamp(tmp_path: Path) -> None:
    now = datetime(2024, 5, 6, 7, 8, 9, 654321)
    assert resolve_log_path(None, log_dir=tmp_path, now=now) == tmp_path / "chat_20240506_070809.md"


def test_unnamed_sessions_in_same_second_collide(tmp_path: Path) -> None:
    a = resolve_log_path(None, log_dir=tmp_path, now=datetime(2024, 5, 6, 7, 8, 9, 1))
    b = resolve_log_path("", log_dir=tmp_path, now=datetime(2024, 5, 6, 7, 8, 9, 999999))
    assert a == b


def test_ensure_log_dir_creates_missing_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"
    assert ensure_log_dir(target) == target
    assert target.is_dir()
    # Existing directory is fine.
    ensure_log_dir(target)


def test_ensure_log_dir_failure_is_environment_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(SessionEnvironmentError):
        ensure_log_dir(blocker / "log")


def test_default_log_dir_honours_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(chatlog_env, "_SECRETS_CACHE", {}, raising=False)
    monkeypatch.setenv("CHATLOG_LOG_DIR", str(tmp_path / "logs"))
    assert default_log_dir() == tmp_path / "logs"


def test_default_log_dir_under_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(chatlog_env, "_SECRETS_CACHE", {}, raising=False)
    monkeypatch.delenv("CHATLOG_LOG_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_log_dir() == tmp_path / "dev" / "chat" / "log"


def test_context_file_detected_only_when_present(tmp_path: Path) -> None:
    assert resolve_context_file(tmp_path) is None
    (tmp_path / "context.md").mkdir()
    assert resolve_context_file(tmp_path) is None

    other = tmp_path / "other"
    other.mkdir()
    (other / "context.md").write_text("notes", encoding="utf-8")
    assert resolve_context_file(other) == other / "context.md"
