"""Load stored console logs and render them to HTML."""

from __future__ import annotations

import logging
from pathlib import Path

from ansi_color_note.core.palette import ColorPalette
from ansi_color_note.errors import SerializationError
from ansi_color_note.io.codec import ConsoleNoteCodec, find_notes
from ansi_color_note.io.writer import needs_note
from ansi_color_note.note import ColorNote
from ansi_color_note.render.markup import MarkupText

logger = logging.getLogger(__name__)


def load_log(path: str | Path, encoding: str = "utf-8") -> str:
    """Read a stored log file; undecodable bytes are replaced."""
    path = Path(path)
    return path.read_bytes().decode(encoding, errors="replace")


def split_notes(line: str) -> tuple[str, list[tuple[int, str]]]:
    """
    Separate framed notes from the text of one line.

    Returns:
        Tuple of (text_without_notes, [(offset_in_text, token), ...])
    """
    parts: list[str] = []
    notes: list[tuple[int, str]] = []
    last = 0
    length = 0
    for start, end, token in find_notes(line):
        chunk = line[last:start]
        parts.append(chunk)
        length += len(chunk)
        notes.append((length, token))
        last = end
    parts.append(line[last:])
    return ''.join(parts), notes


def render_line(line: str, codec: ConsoleNoteCodec | None = None) -> str:
    """Render one stored line, applying every note found in it."""
    codec = codec or ConsoleNoteCodec()
    text, notes = split_notes(line)
    markup = MarkupText(text)

    for pos, token in notes:
        try:
            length = codec.covered_length(token)
            note = codec.decode(token, text[pos:pos + length])
        except SerializationError:
            logger.warning("Skipping unreadable note at offset %d of %r", pos, text, exc_info=True)
            continue
        note.annotate(markup, pos)

    return markup.to_html()


def render_log(text: str, codec: ConsoleNoteCodec | None = None) -> str:
    """Render a stored, note-annotated log to an HTML fragment."""
    codec = codec or ConsoleNoteCodec()
    return "\n".join(render_line(line, codec) for line in text.split("\n"))


def render_raw(text: str, palette: ColorPalette | None = None) -> str:
    """Render a raw log (no stored notes) to an HTML fragment."""
    rendered: list[str] = []
    for line in text.split("\n"):
        markup = MarkupText(line)
        if needs_note(line):
            ColorNote(line, palette).annotate(markup, 0)
        rendered.append(markup.to_html())
    return "\n".join(rendered)
