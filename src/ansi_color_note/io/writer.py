"""Write console output with a note in front of every line that needs one."""

from __future__ import annotations

import logging
from typing import Iterable, TextIO

from ansi_color_note.codec.transcoder import ESC
from ansi_color_note.core.palette import ColorPalette
from ansi_color_note.io.codec import ConsoleNoteCodec, NoteCodec
from ansi_color_note.note import encode_to

logger = logging.getLogger(__name__)


def needs_note(line: str) -> bool:
    """True if ``line`` has escape sequences or file URLs worth annotating."""
    return ESC in line or "file://" in line


class NoteWriter:
    """
    Text stream wrapper that annotates console output as it is written.

    Output is split into lines; a partial line is held back until its
    newline arrives or the writer is flushed.
    """

    def __init__(
        self,
        stream: TextIO,
        palette: ColorPalette | None = None,
        codec: NoteCodec | None = None,
    ):
        self.stream = stream
        self.palette = palette
        self.codec = codec or ConsoleNoteCodec()
        self.notes_written = 0
        self._partial = ""

    def write(self, text: str) -> int:
        data = self._partial + text
        lines = data.split("\n")
        self._partial = lines.pop()
        for line in lines:
            self._write_line(line, "\n")
        return len(text)

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line if line.endswith("\n") else line + "\n")

    def flush(self) -> None:
        if self._partial:
            self._write_line(self._partial, "")
            self._partial = ""
        self.stream.flush()

    def close(self) -> None:
        self.flush()

    def __enter__(self) -> "NoteWriter":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _write_line(self, line: str, eol: str) -> None:
        if needs_note(line):
            token = encode_to(line, self.palette, self.codec)
            if token:
                self.stream.write(token)
                self.notes_written += 1
            else:
                logger.debug("Writing line without note: %r", line)
        self.stream.write(line + eol)
