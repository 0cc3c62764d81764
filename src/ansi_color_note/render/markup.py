"""
MarkupText - an immutable text buffer with markup overlaid by offset.

The base text is never modified. Tags are kept in an interval list and
merged into the text only when rendering, so adding markup at one offset
never shifts the meaning of any other offset.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from itertools import count
from typing import NamedTuple, Pattern, Union


class MarkupInstruction(NamedTuple):
    """One piece of markup to insert at ``offset`` of the original text."""
    offset: int
    text: str
    is_opening: bool


# Render order of tags sharing an offset
_CLOSE = 0
_POINT = 1
_OPEN = 2


@dataclass(frozen=True)
class _Tag:
    pos: int
    text: str
    kind: int
    # Start and end of the range a tag belongs to
    start: int
    end: int
    seq: int

    def sort_key(self) -> tuple[int, int, int, int]:
        if self.kind == _CLOSE:
            # innermost (latest start) range closes first
            return (self.pos, _CLOSE, -self.start, -self.seq)
        elif self.kind == _OPEN:
            # outermost (latest end) range opens first
            return (self.pos, _OPEN, -self.end, self.seq)
        return (self.pos, _POINT, 0, self.seq)


class SubText:
    """A range of a MarkupText found by ``find_tokens``."""

    def __init__(self, markup: "MarkupText", start: int, end: int, match: re.Match[str] | None = None):
        self.markup = markup
        self.start = start
        self.end = end
        self.match = match

    @property
    def text(self) -> str:
        return self.markup.text[self.start:self.end]

    def wrap(self, open_tag: str, close_tag: str) -> None:
        self.markup.wrap(self.start, self.end, open_tag, close_tag)

    def href(self, url: str) -> None:
        """Turn this range into a hyperlink to ``url``."""
        self.wrap(f'<a href="{html.escape(url, quote=True)}">', '</a>')

    def __repr__(self) -> str:
        return f"SubText({self.start}, {self.end}, {self.text!r})"


class MarkupText:
    """
    Plain text plus positioned markup.

    Offsets are always relative to the original text. Tags at the same
    offset render as: range closes (innermost first), point insertions
    (in insertion order), range opens (outermost first).
    """

    def __init__(self, text: str):
        self._text = text
        self._tags: list[_Tag] = []
        self._seq = count()

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def _check(self, pos: int) -> None:
        if not 0 <= pos <= len(self._text):
            raise IndexError(f"Offset {pos} outside text of length {len(self._text)}")

    def add_markup(self, pos: int, text: str) -> None:
        """Insert literal markup at ``pos``."""
        self._check(pos)
        self._tags.append(_Tag(pos, text, _POINT, pos, pos, next(self._seq)))

    def wrap(self, start: int, end: int, open_tag: str, close_tag: str) -> None:
        """
        Wrap ``[start, end)`` in a pair of tags.

        Ranges must nest: a range that partly overlaps an existing one
        raises ``ValueError``.
        """
        self._check(start)
        self._check(end)
        if end < start:
            raise IndexError(f"Range end {end} before start {start}")
        for tag in self._tags:
            if tag.kind == _OPEN and (
                tag.start < start < tag.end < end or start < tag.start < end < tag.end
            ):
                raise ValueError(
                    f"Range [{start}, {end}) crosses existing range [{tag.start}, {tag.end})"
                )
        seq = next(self._seq)
        self._tags.append(_Tag(start, open_tag, _OPEN, start, end, seq))
        self._tags.append(_Tag(end, close_tag, _CLOSE, start, end, seq))

    def has_markup(self) -> bool:
        return bool(self._tags)

    def find_tokens(
        self,
        pattern: Union[str, Pattern[str]],
        start: int = 0,
        end: int | None = None,
    ) -> list[SubText]:
        """All non-overlapping matches of ``pattern`` inside ``[start, end)``."""
        if end is None:
            end = len(self._text)
        self._check(start)
        self._check(end)
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return [
            SubText(self, m.start(), m.end(), m)
            for m in regex.finditer(self._text, start, end)
        ]

    def instructions(self) -> list[MarkupInstruction]:
        """Markup in render order, keyed by offset into the original text."""
        return [
            MarkupInstruction(tag.pos, tag.text, tag.kind != _CLOSE)
            for tag in sorted(self._tags, key=_Tag.sort_key)
        ]

    def to_html(self) -> str:
        """Render the text HTML-escaped with all markup merged in."""
        parts: list[str] = []
        last = 0
        for inst in self.instructions():
            if inst.offset > last:
                parts.append(html.escape(self._text[last:inst.offset], quote=True))
                last = inst.offset
            parts.append(inst.text)
        parts.append(html.escape(self._text[last:], quote=True))
        return ''.join(parts)
