"""Storing console notes with log text and reading them back."""

from ansi_color_note.io.codec import ConsoleNoteCodec, NoteCodec, find_notes, strip_notes
from ansi_color_note.io.reader import load_log, render_log, render_raw
from ansi_color_note.io.writer import NoteWriter, needs_note

__all__ = [
    "ConsoleNoteCodec",
    "NoteCodec",
    "find_notes",
    "strip_notes",
    "load_log",
    "render_log",
    "render_raw",
    "NoteWriter",
    "needs_note",
]
