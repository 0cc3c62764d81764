"""
Serialize console notes so they can be stored inline with log text.

A serialized note is framed by escape sequences that a plain terminal
renders as concealed text:

    ESC[8mha:<base64(zlib(json))>ESC[0m

The payload records the palette and the length of the text the note
covers; the text itself follows the note in the log.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
import zlib
from typing import Iterator, Protocol

from ansi_color_note.core.palette import ColorPalette
from ansi_color_note.errors import ConfigurationError, SerializationError
from ansi_color_note.note import ColorNote

PREAMBLE = "\x1b[8mha:"
POSTAMBLE = "\x1b[0m"
FORMAT_VERSION = 1

NOTE_PATTERN = re.compile(
    re.escape(PREAMBLE) + r"([A-Za-z0-9+/=]*)" + re.escape(POSTAMBLE)
)


class NoteCodec(Protocol):
    """Persistence service for notes."""

    def encode(self, note: ColorNote) -> str: ...

    def decode(self, token: str, text: str) -> ColorNote: ...


class ConsoleNoteCodec:
    """Encode notes as framed, compressed JSON."""

    def __init__(self, default_palette: ColorPalette | None = None):
        self.default_palette = default_palette

    def encode(self, note: ColorNote) -> str:
        payload = {
            "v": FORMAT_VERSION,
            "len": len(note.data),
            "palette": note.palette.to_dict(),
        }
        try:
            raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize note: {e}") from e
        body = base64.b64encode(zlib.compress(raw)).decode("ascii")
        return f"{PREAMBLE}{body}{POSTAMBLE}"

    def decode_payload(self, token: str) -> dict:
        """Unframe and decompress a token into its JSON payload."""
        match = NOTE_PATTERN.fullmatch(token)
        if not match:
            raise SerializationError(f"Not a console note: {token[:40]!r}")
        try:
            raw = zlib.decompress(base64.b64decode(match.group(1), validate=True))
            payload = json.loads(raw.decode("utf-8"))
        except (binascii.Error, zlib.error, UnicodeDecodeError, ValueError) as e:
            raise SerializationError(f"Corrupt console note: {e}") from e

        if not isinstance(payload, dict) or payload.get("v") != FORMAT_VERSION:
            raise SerializationError(f"Unsupported note payload: {payload!r}")
        if not isinstance(payload.get("len"), int) or payload["len"] < 0:
            raise SerializationError(f"Invalid note length: {payload.get('len')!r}")
        return payload

    def decode(self, token: str, text: str) -> ColorNote:
        """Rebuild a note from its token and the text it was stored with."""
        payload = self.decode_payload(token)
        palette_data = payload.get("palette")
        try:
            palette = ColorPalette.from_dict(palette_data) if palette_data is not None else None
        except ConfigurationError as e:
            raise SerializationError(f"Invalid palette in note: {e}") from e
        return ColorNote(text, palette, default_palette=self.default_palette)

    def covered_length(self, token: str) -> int:
        """Length of the text a token says it covers."""
        return self.decode_payload(token)["len"]


def find_notes(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield ``(start, end, token)`` for every framed note in ``text``."""
    for match in NOTE_PATTERN.finditer(text):
        yield match.start(), match.end(), match.group()


def strip_notes(text: str) -> str:
    """Remove every framed note from ``text``."""
    return NOTE_PATTERN.sub("", text)
