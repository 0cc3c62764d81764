"""StyleState - the SGR attributes active at one point of a transcoding pass."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ansi_color_note.core.palette import ColorSlot


class Attribute(Enum):
    """Style attributes in the order their tags are opened."""
    BACKGROUND = "background"
    FOREGROUND = "foreground"
    BOLD = "bold"
    UNDERLINE = "underline"
    CONCEAL = "conceal"


ATTRIBUTE_ORDER = tuple(Attribute)


@dataclass(slots=True)
class StyleState:
    """
    Current graphic rendition of a transcoding pass.

    ``fg``/``bg`` of ``None`` mean the terminal default, which needs no tag.
    """
    fg: Optional[ColorSlot] = None
    bg: Optional[ColorSlot] = None
    bold: bool = False
    underline: bool = False
    conceal: bool = False

    def copy(self) -> "StyleState":
        return replace(self)

    def reset(self) -> None:
        self.fg = None
        self.bg = None
        self.bold = False
        self.underline = False
        self.conceal = False

    def is_plain(self) -> bool:
        """True if no attribute is active."""
        return not self.active_attributes()

    def is_active(self, attr: Attribute) -> bool:
        if attr is Attribute.BACKGROUND:
            return self.bg is not None
        elif attr is Attribute.FOREGROUND:
            return self.fg is not None
        elif attr is Attribute.BOLD:
            return self.bold
        elif attr is Attribute.UNDERLINE:
            return self.underline
        return self.conceal

    def value_of(self, attr: Attribute) -> object:
        """Value that decides whether an open tag for ``attr`` is still valid."""
        if attr is Attribute.BACKGROUND:
            return self.bg
        elif attr is Attribute.FOREGROUND:
            return self.fg
        return self.is_active(attr)

    def active_attributes(self) -> list[Attribute]:
        return [attr for attr in ATTRIBUTE_ORDER if self.is_active(attr)]

    def apply_sgr(self, params: list[Optional[int]]) -> None:
        """
        Apply SGR (Select Graphic Rendition) parameters.

        ``None`` entries are malformed parameters and are skipped, as are
        codes with no meaning here (italic, blink, 256-color values...).
        """
        if not params:
            params = [0]

        i = 0
        while i < len(params):
            p = params[i]

            if p is None:
                pass
            elif p == 0:
                self.reset()
            elif p == 1:
                self.bold = True
            elif p == 4:
                self.underline = True
            elif p == 8:
                self.conceal = True
            elif p in (21, 22):
                self.bold = False
            elif p == 24:
                self.underline = False
            elif p == 28:
                self.conceal = False
            elif 30 <= p <= 37 or 90 <= p <= 97:
                self.fg = ColorSlot.from_sgr(p)
            elif p == 39:
                self.fg = None
            elif 40 <= p <= 47 or 100 <= p <= 107:
                self.bg = ColorSlot.from_sgr(p)
            elif p == 49:
                self.bg = None
            elif p in (38, 48):
                # Extended color: skip 5;n or 2;r;g;b
                mode = params[i + 1] if i + 1 < len(params) else None
                if mode == 5:
                    i += 2
                elif mode == 2:
                    i += 4
                else:
                    i += 1

            i += 1
