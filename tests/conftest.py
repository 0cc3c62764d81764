"""Shared pytest fixtures."""

import os
import re
from pathlib import Path
from typing import Optional

import pytest

from ansi_color_note.config import get_settings
from ansi_color_note.core.palette import VGA, XTERM, ColorPalette

ESC = '\x1b'

_OPEN_TAG = re.compile(r'<(span|b|u|a)[ >]')
_CLOSE_TAG = re.compile(r'</(span|b|u|a)>')


def sgr(*params: int) -> str:
    """Build an SGR escape sequence, e.g. sgr(1, 31) -> ESC[1;31m."""
    return f"{ESC}[{';'.join(str(p) for p in params)}m"


def tag_balance(html: str) -> tuple[int, int]:
    """Count (opening, closing) tags in transcoder/linkifier output."""
    return len(_OPEN_TAG.findall(html)), len(_CLOSE_TAG.findall(html))


def get_test_log_dir() -> Optional[Path]:
    """
    Get a directory of real console logs for the external tests.

    Set ANSI_COLOR_NOTE_TEST_DIR to a directory containing *.log files.
    """
    if env_path := os.environ.get("ANSI_COLOR_NOTE_TEST_DIR"):
        path = Path(env_path).expanduser()
        if path.exists():
            return path
    return None


@pytest.fixture
def palette() -> ColorPalette:
    return XTERM


@pytest.fixture
def vga() -> ColorPalette:
    return VGA


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep ANSI_NOTE_* variables and .env files out of every test."""
    for name in list(os.environ):
        if name.startswith("ANSI_NOTE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def sample_logs() -> list[Path]:
    """External *.log files, skipped when unavailable."""
    log_dir = get_test_log_dir()
    if log_dir is None:
        pytest.skip("Set ANSI_COLOR_NOTE_TEST_DIR to run tests against real logs")
    files = sorted(log_dir.glob("*.log"))[:50]
    if not files:
        pytest.skip(f"No .log files found in {log_dir}")
    return files
