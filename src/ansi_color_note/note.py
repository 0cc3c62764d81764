"""
ColorNote - annotate a chunk of console output that contains ANSI codes.

A note owns a copy of the raw text it was created for. When the host
displays that text, the note overlays colorized markup on the host's
buffer and hides the raw text, or, when there is nothing to colorize,
only hyperlinks the file URLs in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Union

from ansi_color_note.codec.transcoder import Colorized, Unchanged, transcode
from ansi_color_note.core.palette import ColorPalette, resolve_palette
from ansi_color_note.render.linkify import linkify_html, linkify_markup
from ansi_color_note.render.markup import MarkupText

if TYPE_CHECKING:
    from ansi_color_note.io.codec import NoteCodec

logger = logging.getLogger(__name__)

HIDE_OPEN = '<span style="display: none;">'
HIDE_CLOSE = '</span>'


@dataclass(frozen=True)
class Applied:
    """Markup was added to the host buffer."""
    mode: Literal["colorized", "linked"]
    links: int = 0

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Degraded:
    """Annotation failed; the host shows the original text plainly."""
    error: BaseException

    @property
    def ok(self) -> bool:
        return False


AnnotationResult = Union[Applied, Degraded]


class ColorNote:
    """
    Console note carrying raw ANSI text and the palette to render it with.

    The palette is shared, not owned; when none is given the default
    palette is used.
    """

    def __init__(
        self,
        data: str,
        palette: ColorPalette | None = None,
        default_palette: ColorPalette | None = None,
    ):
        self._data = data
        self._palette = palette
        self._default = default_palette

    @property
    def data(self) -> str:
        return self._data

    @property
    def palette(self) -> ColorPalette:
        return resolve_palette(self._palette, self._default)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ColorNote({self._data!r}, palette={self.palette.name!r})"

    def annotate(self, markup: MarkupText, char_pos: int) -> AnnotationResult:
        """
        Overlay this note's markup on ``markup`` starting at ``char_pos``.

        Never raises: any failure is logged and reported as ``Degraded``,
        leaving the buffer untouched.
        """
        try:
            if not 0 <= char_pos <= len(markup):
                raise IndexError(f"Note offset {char_pos} outside text of length {len(markup)}")
            end = min(char_pos + len(self._data), len(markup))
            result = transcode(self._data, self.palette, escape_html=True)
            if isinstance(result, Colorized):
                return self._annotate_colorized(markup, result, char_pos, end)
            return self._annotate_plain(markup, result, char_pos, end)
        except Exception as e:
            logger.warning("Failed to add markup to %r", markup.text, exc_info=True)
            return Degraded(e)

    def _annotate_colorized(
        self,
        markup: MarkupText,
        result: Colorized,
        char_pos: int,
        end: int,
    ) -> Applied:
        html, links = linkify_html(result.html)
        markup.add_markup(char_pos, html)
        markup.wrap(char_pos, end, HIDE_OPEN, HIDE_CLOSE)
        return Applied("colorized", links)

    def _annotate_plain(
        self,
        markup: MarkupText,
        result: Unchanged,
        char_pos: int,
        end: int,
    ) -> Applied:
        links = linkify_markup(markup, char_pos, end)
        return Applied("linked", links)


def colorize(data: str, palette: ColorPalette | None = None) -> str:
    """Convert ANSI codes in ``data`` to HTML, leaving plain text as-is."""
    return transcode(data, palette).text


def encode_to(
    data: str,
    palette: ColorPalette | None = None,
    codec: "NoteCodec | None" = None,
) -> str:
    """
    Serialize a note for ``data``; returns ``""`` if that fails.

    Used at write time, so a failure must never stop the output itself.
    """
    if codec is None:
        from ansi_color_note.io.codec import ConsoleNoteCodec
        codec = ConsoleNoteCodec()
    try:
        return codec.encode(ColorNote(data, palette))
    except Exception:
        logger.warning("Failed to serialize %s", ColorNote.__name__, exc_info=True)
        return ""
