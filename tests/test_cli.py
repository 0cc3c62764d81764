"""Tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ansi_color_note.cli.app import create_app
from ansi_color_note.core.palette import VGA
from ansi_color_note.io.codec import PREAMBLE
from ansi_color_note.io.reader import render_raw

from conftest import sgr

RED = '<span style="color: #CD0000;">red</span>'
LOG = f"start\n{sgr(31)}red{sgr(0)}\nsee file:///tmp/out.log\n"

runner = CliRunner()


@pytest.fixture
def raw_log(tmp_path: Path) -> Path:
    path = tmp_path / "build.log"
    path.write_text(LOG, encoding="utf-8")
    return path


def test_render_fragment(raw_log: Path) -> None:
    result = runner.invoke(create_app(), ["render", str(raw_log), "--fragment"])
    assert result.exit_code == 0
    assert result.stdout == render_raw(LOG)
    assert RED in result.stdout


def test_render_document(raw_log: Path, tmp_path: Path) -> None:
    out = tmp_path / "build.html"
    result = runner.invoke(create_app(), ["render", str(raw_log), "-o", str(out), "-p", "vga"])
    assert result.exit_code == 0

    page = out.read_text(encoding="utf-8")
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>build.log</title>" in page
    assert "background-color: #000000" in page
    assert '<span style="color: #AA0000;">red</span>' in page


def test_encode_then_render(raw_log: Path, tmp_path: Path) -> None:
    stored = tmp_path / "stored.log"
    result = runner.invoke(create_app(), ["encode", str(raw_log), str(stored), "-p", "vga"])
    assert result.exit_code == 0
    assert stored.read_text(encoding="utf-8").count(PREAMBLE) == 2

    result = runner.invoke(create_app(), ["render", str(stored), "--fragment"])
    assert result.exit_code == 0
    assert result.stdout == render_raw(LOG, VGA)


def test_strip(raw_log: Path, tmp_path: Path) -> None:
    stored = tmp_path / "stored.log"
    runner.invoke(create_app(), ["encode", str(raw_log), str(stored)])

    result = runner.invoke(create_app(), ["strip", str(stored)])
    assert result.exit_code == 0
    assert result.stdout == LOG


def test_palettes() -> None:
    result = runner.invoke(create_app(), ["palettes"])
    assert result.exit_code == 0
    assert "xterm" in result.stdout
    assert "vga" in result.stdout


def test_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(create_app(), ["render", str(tmp_path / "nope.log")])
    assert result.exit_code == 1


def test_unknown_palette(raw_log: Path) -> None:
    result = runner.invoke(create_app(), ["render", str(raw_log), "-p", "solarized"])
    assert result.exit_code == 1


def test_invalid_configuration(raw_log: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANSI_NOTE_LOG_LEVEL", "chatty")
    result = runner.invoke(create_app(), ["render", str(raw_log)])
    assert result.exit_code == 1
