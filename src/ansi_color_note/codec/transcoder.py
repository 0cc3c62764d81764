"""ANSI escape sequence transcoder producing HTML markup."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import ClassVar, Iterator, Optional, Union

from ansi_color_note.core.palette import ColorPalette, ColorSlot, resolve_palette
from ansi_color_note.core.style import Attribute, StyleState
from ansi_color_note.errors import TranscodeError

ESC = '\x1b'
BEL = '\x07'
STRAY_ESC = '&#27;'

# Longest incomplete sequence kept across feed() calls before it is
# treated as malformed.
MAX_PENDING = 4096

CLOSE_TAGS = {
    Attribute.BACKGROUND: '</span>',
    Attribute.FOREGROUND: '</span>',
    Attribute.BOLD: '</b>',
    Attribute.UNDERLINE: '</u>',
    Attribute.CONCEAL: '</span>',
}

# scan results
_INCOMPLETE = -1
_MALFORMED = -2


@dataclass(frozen=True)
class Unchanged:
    """No escape sequence was recognized; ``original`` is the decoded input."""
    original: str
    changed: ClassVar[bool] = False

    @property
    def text(self) -> str:
        return self.original

    def __iter__(self) -> Iterator[Union[str, bool]]:
        return iter((self.text, self.changed))


@dataclass(frozen=True)
class Colorized:
    """At least one escape sequence was turned into markup."""
    html: str
    changed: ClassVar[bool] = True

    @property
    def text(self) -> str:
        return self.html

    def __iter__(self) -> Iterator[Union[str, bool]]:
        return iter((self.text, self.changed))


TranscodeResult = Union[Unchanged, Colorized]


def _scan(text: str, i: int) -> int:
    """
    Find the end of the escape sequence starting at ``text[i]``.

    Returns the index just past the sequence, ``_INCOMPLETE`` if the text
    ends before the sequence does, or ``_MALFORMED``.
    """
    n = len(text)
    if i + 1 >= n:
        return _INCOMPLETE
    nxt = text[i + 1]

    if nxt == '[':
        # CSI: parameters, intermediates, final byte
        j = i + 2
        while j < n and '\x30' <= text[j] <= '\x3f':
            j += 1
        while j < n and '\x20' <= text[j] <= '\x2f':
            j += 1
        if j >= n:
            return _INCOMPLETE
        if '\x40' <= text[j] <= '\x7e':
            return j + 1
        return _MALFORMED

    if nxt == ']':
        # OSC: terminated by BEL or ESC backslash
        j = i + 2
        while j < n:
            if text[j] == BEL:
                return j + 1
            if text[j] == ESC:
                if j + 1 >= n:
                    return _INCOMPLETE
                return j + 2 if text[j + 1] == '\\' else _MALFORMED
            j += 1
        return _INCOMPLETE

    if '\x20' <= nxt <= '\x2f':
        # nF: intermediates then a final byte, e.g. ESC ( B
        j = i + 1
        while j < n and '\x20' <= text[j] <= '\x2f':
            j += 1
        if j >= n:
            return _INCOMPLETE
        return j + 1 if '\x30' <= text[j] <= '\x7e' else _MALFORMED

    if '\x30' <= nxt <= '\x7e':
        # Two-character escape (ESC 7, ESC M, ESC c...)
        return i + 2

    return _MALFORMED


def _parse_params(params_str: str) -> list[Optional[int]]:
    """Split SGR parameters; empty means 0, non-numeric means None."""
    if not params_str:
        return []
    params: list[Optional[int]] = []
    for p in params_str.split(';'):
        if not p:
            params.append(0)
        elif p.isdigit():
            params.append(int(p))
        else:
            params.append(None)
    return params


class AnsiTranscoder:
    """
    Stateful ANSI to HTML transcoder.

    Text is fed in chunks; markup for everything that can be decided is
    returned immediately while a trailing incomplete escape sequence is
    held back until the next chunk or ``finish()``. One instance handles
    one stream and must not be shared between threads.
    """

    def __init__(self, palette: ColorPalette | None = None, escape_html: bool = False):
        self.palette = resolve_palette(palette)
        self.escape_html = escape_html
        self.state = StyleState()
        self.changed = False

        self._open: list[tuple[Attribute, object]] = []
        self._pending = ''
        self._finished = False

    @property
    def open_tags(self) -> list[Attribute]:
        """Attributes whose tags are currently open, outermost first."""
        return [attr for attr, _ in self._open]

    def feed(self, text: str) -> str:
        """Transcode a chunk of text and return the markup it produced."""
        if self._finished:
            raise TranscodeError("feed() called after finish()")

        text = self._pending + text
        self._pending = ''
        out: list[str] = []

        i = 0
        n = len(text)
        while i < n:
            if text[i] != ESC:
                j = text.find(ESC, i)
                if j == -1:
                    j = n
                self._put_text(out, text[i:j])
                i = j
                continue

            end = _scan(text, i)
            if end == _INCOMPLETE and n - i <= MAX_PENDING:
                self._pending = text[i:]
                break
            if end < 0:
                # Malformed: keep the ESC as a character reference, resume
                # after it. A raw ESC next to a tag would form ESC <.
                self._sync(out)
                out.append(STRAY_ESC)
                i += 1
                continue

            self._handle_escape(text[i:end])
            i = end

        return ''.join(out)

    def finish(self) -> str:
        """Close every open tag and flush a truncated trailing sequence."""
        if self._finished:
            return ''
        self._finished = True

        out: list[str] = []
        self._close_from(0, out)
        if self._pending:
            # Truncated tail stays outside all markup
            out.append(self._escape(self._pending))
            self._pending = ''
        return ''.join(out)

    def _handle_escape(self, seq: str) -> None:
        self.changed = True
        if len(seq) < 3 or seq[1] != '[' or seq[-1] != 'm':
            # Cursor movement, erase, OSC, charset... consumed silently
            return

        params_str = seq[2:-1]
        if params_str[:1] in ('<', '=', '>', '?'):
            return
        if any('\x20' <= c <= '\x2f' for c in params_str):
            return
        self.state.apply_sgr(_parse_params(params_str))

    def _put_text(self, out: list[str], text: str) -> None:
        if not text:
            return
        self._sync(out)
        out.append(self._escape(text))

    def _escape(self, text: str) -> str:
        if not self.escape_html:
            return text
        return html.escape(text, quote=True).replace(ESC, STRAY_ESC)

    def _sync(self, out: list[str]) -> None:
        """Bring the open tags in line with the current state."""
        target = [
            (attr, self.state.value_of(attr))
            for attr in self.state.active_attributes()
        ]
        k = 0
        while k < len(self._open) and k < len(target) and self._open[k] == target[k]:
            k += 1

        self._close_from(k, out)
        for attr, value in target[k:]:
            out.append(self._open_tag(attr, value))
            self._open.append((attr, value))

    def _close_from(self, k: int, out: list[str]) -> None:
        for attr, _ in reversed(self._open[k:]):
            out.append(CLOSE_TAGS[attr])
        del self._open[k:]

    def _open_tag(self, attr: Attribute, value: object) -> str:
        if isinstance(value, ColorSlot):
            color = html.escape(self.palette.color(value), quote=True)
            if attr is Attribute.BACKGROUND:
                return f'<span style="background-color: {color};">'
            return f'<span style="color: {color};">'
        elif attr is Attribute.BOLD:
            return '<b>'
        elif attr is Attribute.UNDERLINE:
            return '<u>'
        return '<span style="display: none;">'


def transcode(
    raw: Union[bytes, bytearray, str],
    palette: ColorPalette | None = None,
    *,
    encoding: str = "utf-8",
    escape_html: bool = False,
) -> TranscodeResult:
    """
    Convert ANSI escape sequences in ``raw`` to HTML markup.

    Args:
        raw: Text or bytes; bytes are decoded with ``encoding`` and
            undecodable bytes replaced.
        palette: Palette for color slots, default palette when None.
        escape_html: HTML-escape text content so the markup can be
            inserted into a page as-is.

    Returns:
        ``Unchanged`` holding the decoded input if no escape sequence was
        recognized, otherwise ``Colorized`` holding the markup.

    Raises:
        TranscodeError: unknown encoding or an internal fault.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            text = bytes(raw).decode(encoding, errors="replace")
        except LookupError as e:
            raise TranscodeError(f"Unknown encoding: {encoding}") from e
    else:
        text = raw

    transcoder = AnsiTranscoder(palette, escape_html=escape_html)
    try:
        output = transcoder.feed(text) + transcoder.finish()
    except TranscodeError:
        raise
    except Exception as e:
        raise TranscodeError(f"Failed to transcode {text[:80]!r}") from e

    if not transcoder.changed:
        return Unchanged(text)
    return Colorized(output)
