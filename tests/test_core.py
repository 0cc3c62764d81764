"""Tests for core data structures: palettes and style state."""

import pytest

from ansi_color_note.core.palette import (
    CSS,
    DEFAULT_PALETTE,
    PRESETS,
    VGA,
    XTERM,
    ColorPalette,
    ColorSlot,
    get_preset,
    resolve_palette,
)
from ansi_color_note.core.style import Attribute, StyleState
from ansi_color_note.errors import ConfigurationError


def _full_mapping(color: str = "#123456") -> dict[str, str]:
    return {slot.key: color for slot in ColorSlot}


class TestColorSlot:
    """Tests for ColorSlot."""

    def test_slot_count(self) -> None:
        assert len(ColorSlot) == 18

    def test_from_sgr(self) -> None:
        assert ColorSlot.from_sgr(31) is ColorSlot.RED
        assert ColorSlot.from_sgr(44) is ColorSlot.BLUE
        assert ColorSlot.from_sgr(97) is ColorSlot.BRIGHT_WHITE
        assert ColorSlot.from_sgr(100) is ColorSlot.BRIGHT_BLACK

    def test_from_sgr_invalid(self) -> None:
        with pytest.raises(ValueError):
            ColorSlot.from_sgr(38)
        with pytest.raises(ValueError):
            ColorSlot.from_sgr(50)

    def test_key(self) -> None:
        assert ColorSlot.BRIGHT_RED.key == "bright_red"
        assert ColorSlot.DEFAULT_FG.key == "default_fg"


class TestColorPalette:
    """Tests for ColorPalette and the presets."""

    def test_presets_are_complete(self) -> None:
        assert set(PRESETS) == {"xterm", "vga", "css", "gnome-terminal"}
        for preset in PRESETS.values():
            assert len(preset.colors) == 18

    def test_lookup(self) -> None:
        assert XTERM.color(ColorSlot.RED) == "#CD0000"
        assert VGA[ColorSlot.BRIGHT_YELLOW] == "#FFFF55"
        assert CSS[ColorSlot.GREEN] == "green"

    def test_defaults(self) -> None:
        assert VGA.default_fg == "#AAAAAA"
        assert VGA.default_bg == "#000000"

    def test_immutable(self) -> None:
        with pytest.raises(AttributeError):
            XTERM.name = "changed"  # type: ignore[misc]

    def test_wrong_slot_count_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ColorPalette("short", ("#000000",) * 16)

    def test_empty_color_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ColorPalette("blank", ("#000000",) * 17 + ("",))

    def test_custom(self) -> None:
        mapping = _full_mapping()
        mapping["RED"] = "#FF0000"
        palette = ColorPalette.custom("mine", mapping)
        assert palette.name == "mine"
        assert palette[ColorSlot.RED] == "#FF0000"
        assert palette[ColorSlot.BLUE] == "#123456"

    def test_custom_missing_slot(self) -> None:
        mapping = _full_mapping()
        del mapping["default_bg"]
        with pytest.raises(ConfigurationError, match="default_bg"):
            ColorPalette.custom("mine", mapping)

    def test_custom_unknown_slot(self) -> None:
        mapping = _full_mapping()
        mapping["orange"] = "#FFA500"
        with pytest.raises(ConfigurationError, match="orange"):
            ColorPalette.custom("mine", mapping)

    def test_dict_round_trip(self) -> None:
        assert ColorPalette.from_dict(VGA.to_dict()) == VGA

    def test_from_dict_malformed(self) -> None:
        with pytest.raises(ConfigurationError):
            ColorPalette.from_dict({"name": "x"})
        with pytest.raises(ConfigurationError):
            ColorPalette.from_dict({"name": "x", "colors": ["#000"]})

    def test_get_preset(self) -> None:
        assert get_preset("VGA") is VGA
        with pytest.raises(ConfigurationError, match="known"):
            get_preset("solarized")

    def test_resolve_palette(self) -> None:
        assert resolve_palette(None) is DEFAULT_PALETTE
        assert resolve_palette(None, VGA) is VGA
        assert resolve_palette(CSS, VGA) is CSS


class TestStyleState:
    """Tests for StyleState."""

    def test_default_state(self) -> None:
        state = StyleState()
        assert state.fg is None
        assert state.bg is None
        assert state.is_plain()

    def test_attribute_order(self) -> None:
        state = StyleState(fg=ColorSlot.RED, bg=ColorSlot.BLUE, bold=True, underline=True, conceal=True)
        assert state.active_attributes() == [
            Attribute.BACKGROUND,
            Attribute.FOREGROUND,
            Attribute.BOLD,
            Attribute.UNDERLINE,
            Attribute.CONCEAL,
        ]

    def test_copy(self) -> None:
        state = StyleState(fg=ColorSlot.RED, bold=True)
        copy = state.copy()
        assert copy == state
        assert copy is not state

    def test_apply_sgr(self) -> None:
        state = StyleState()
        state.apply_sgr([1, 4, 8, 31, 44])
        assert state.bold and state.underline and state.conceal
        assert state.fg is ColorSlot.RED
        assert state.bg is ColorSlot.BLUE

        state.apply_sgr([22, 24, 28, 39, 49])
        assert state.is_plain()

    def test_bright_colors(self) -> None:
        state = StyleState()
        state.apply_sgr([92, 103])
        assert state.fg is ColorSlot.BRIGHT_GREEN
        assert state.bg is ColorSlot.BRIGHT_YELLOW

    def test_reset(self) -> None:
        state = StyleState(fg=ColorSlot.RED, bold=True)
        state.apply_sgr([0])
        assert state.is_plain()

        state.bold = True
        state.apply_sgr([])
        assert state.is_plain()

    def test_unknown_and_malformed_ignored(self) -> None:
        state = StyleState()
        state.apply_sgr([3, 5, None, 73, 31])
        assert state.fg is ColorSlot.RED
        assert not state.bold

    def test_extended_colors_skipped(self) -> None:
        state = StyleState()
        state.apply_sgr([38, 5, 1])
        assert state.is_plain()

        state.apply_sgr([48, 2, 0, 0, 0, 4])
        assert state.underline
        assert state.bg is None
