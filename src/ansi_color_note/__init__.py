"""
ansi-color-note: render ANSI-colored console output as HTML

Console output is stored verbatim; small notes recorded next to it say how
to color it. At display time each note overlays markup on the original
text without modifying it, and file:// URLs become links.

Quick Start:
    >>> import ansi_color_note as acn
    >>> acn.transcode("\\x1b[31mError\\x1b[0m").text
    '<span style="color: #CD0000;">Error</span>'
    >>> markup = acn.MarkupText("see file:///tmp/out.log")
    >>> acn.ColorNote(markup.text).annotate(markup, 0)
    Applied(mode='linked', links=1)
"""

__version__ = "0.1.0"

# Core types
from ansi_color_note.core.palette import ColorPalette, ColorSlot, DEFAULT_PALETTE, PRESETS, get_preset
from ansi_color_note.core.style import StyleState

# Transcoding and markup
from ansi_color_note.codec.transcoder import AnsiTranscoder, Colorized, Unchanged, transcode
from ansi_color_note.render.markup import MarkupText
from ansi_color_note.render.linkify import linkify_html, linkify_markup

# Notes
from ansi_color_note.note import Applied, ColorNote, Degraded, colorize, encode_to
from ansi_color_note.io.codec import ConsoleNoteCodec
from ansi_color_note.io.reader import render_log, render_raw

from ansi_color_note.errors import (
    AnsiColorNoteError,
    ConfigurationError,
    SerializationError,
    TranscodeError,
)

__all__ = [
    # Version
    "__version__",
    # Core types
    "ColorPalette",
    "ColorSlot",
    "DEFAULT_PALETTE",
    "PRESETS",
    "get_preset",
    "StyleState",
    # Transcoding
    "AnsiTranscoder",
    "Colorized",
    "Unchanged",
    "transcode",
    "MarkupText",
    "linkify_html",
    "linkify_markup",
    # Notes
    "Applied",
    "ColorNote",
    "Degraded",
    "colorize",
    "encode_to",
    "ConsoleNoteCodec",
    "render_log",
    "render_raw",
    # Errors
    "AnsiColorNoteError",
    "ConfigurationError",
    "SerializationError",
    "TranscodeError",
]
