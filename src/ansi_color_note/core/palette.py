"""Color palettes mapping logical ANSI color slots to CSS colors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ansi_color_note.errors import ConfigurationError


class ColorSlot(Enum):
    """
    Logical color slots addressed by SGR codes.

    The first sixteen members follow SGR order (30-37 then 90-97), the last
    two are the terminal's default foreground and background.
    """
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    BRIGHT_BLACK = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15
    DEFAULT_FG = 16
    DEFAULT_BG = 17

    @classmethod
    def from_sgr(cls, code: int) -> "ColorSlot":
        """Map an SGR color code (30-37, 40-47, 90-97, 100-107) to a slot."""
        if 30 <= code <= 37:
            return cls(code - 30)
        elif 40 <= code <= 47:
            return cls(code - 40)
        elif 90 <= code <= 97:
            return cls(code - 90 + 8)
        elif 100 <= code <= 107:
            return cls(code - 100 + 8)
        else:
            raise ValueError(f"Invalid SGR color code: {code}")

    @property
    def key(self) -> str:
        """Lowercase name used in configuration and persisted palettes."""
        return self.name.lower()


SLOT_COUNT = len(ColorSlot)


@dataclass(frozen=True)
class ColorPalette:
    """
    Immutable mapping from the 18 color slots to CSS color values.

    Palettes are validated on construction so a bad custom palette fails
    at configuration time, not in the middle of rendering a log.
    """
    name: str
    colors: tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.colors, tuple):
            object.__setattr__(self, "colors", tuple(self.colors))
        if len(self.colors) != SLOT_COUNT:
            raise ConfigurationError(
                f"Palette {self.name!r} needs {SLOT_COUNT} colors, got {len(self.colors)}"
            )
        for slot, value in zip(ColorSlot, self.colors):
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"Palette {self.name!r} has no color for slot {slot.key}"
                )

    def color(self, slot: ColorSlot) -> str:
        """Return the CSS color for a slot."""
        return self.colors[slot.value]

    def __getitem__(self, slot: ColorSlot) -> str:
        return self.color(slot)

    @property
    def default_fg(self) -> str:
        return self.colors[ColorSlot.DEFAULT_FG.value]

    @property
    def default_bg(self) -> str:
        return self.colors[ColorSlot.DEFAULT_BG.value]

    @classmethod
    def custom(cls, name: str, mapping: Mapping[str, str]) -> "ColorPalette":
        """
        Build a palette from a slot-name to color mapping.

        Every slot must be present, keyed by its lowercase name
        (``"red"``, ``"bright_red"``, ``"default_fg"``...).
        """
        normalized = {str(k).lower(): v for k, v in mapping.items()}
        unknown = sorted(set(normalized) - {slot.key for slot in ColorSlot})
        if unknown:
            raise ConfigurationError(f"Unknown color slots: {', '.join(unknown)}")
        missing = [slot.key for slot in ColorSlot if slot.key not in normalized]
        if missing:
            raise ConfigurationError(f"Missing color slots: {', '.join(missing)}")
        return cls(name, tuple(normalized[slot.key] for slot in ColorSlot))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "colors": {slot.key: self.color(slot) for slot in ColorSlot},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ColorPalette":
        try:
            name = data["name"]
            colors = data["colors"]
        except (KeyError, TypeError) as e:
            raise ConfigurationError(f"Malformed palette data: {data!r}") from e
        if not isinstance(colors, Mapping):
            raise ConfigurationError(f"Malformed palette colors: {colors!r}")
        return cls.custom(str(name), colors)


def _preset(name: str, normal: list[str], bright: list[str], fg: str, bg: str) -> ColorPalette:
    return ColorPalette(name, tuple(normal + bright + [fg, bg]))


XTERM = _preset(
    "xterm",
    ["#000000", "#CD0000", "#00CD00", "#CDCD00", "#1E90FF", "#CD00CD", "#00CDCD", "#E5E5E5"],
    ["#4C4C4C", "#FF0000", "#00FF00", "#FFFF00", "#4682B4", "#FF00FF", "#00FFFF", "#FFFFFF"],
    "#000000",
    "#FFFFFF",
)

VGA = _preset(
    "vga",
    ["#000000", "#AA0000", "#00AA00", "#AA5500", "#0000AA", "#AA00AA", "#00AAAA", "#AAAAAA"],
    ["#555555", "#FF5555", "#55FF55", "#FFFF55", "#5555FF", "#FF55FF", "#55FFFF", "#FFFFFF"],
    "#AAAAAA",
    "#000000",
)

CSS = _preset(
    "css",
    ["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"],
    ["gray", "red", "lime", "yellow", "dodgerblue", "fuchsia", "aqua", "white"],
    "black",
    "white",
)

GNOME_TERMINAL = _preset(
    "gnome-terminal",
    ["#2E3436", "#CC0000", "#4E9A06", "#C4A000", "#3465A4", "#75507B", "#06989A", "#D3D7CF"],
    ["#555753", "#EF2929", "#8AE234", "#FCE94F", "#729FCF", "#AD7FA8", "#34E2E2", "#EEEEEC"],
    "#D3D7CF",
    "#2E3436",
)

PRESETS: dict[str, ColorPalette] = {
    p.name: p for p in (XTERM, VGA, CSS, GNOME_TERMINAL)
}

DEFAULT_PALETTE = XTERM


def get_preset(name: str) -> ColorPalette:
    """Look up a named preset palette."""
    try:
        return PRESETS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise ConfigurationError(f"Unknown palette {name!r} (known: {known})") from None


def resolve_palette(
    palette: ColorPalette | None,
    default: ColorPalette | None = None,
) -> ColorPalette:
    """Return ``palette``, or ``default`` (then the xterm preset) when none was given."""
    if palette is not None:
        return palette
    return default if default is not None else DEFAULT_PALETTE
