"""Core data structures: palettes and style state."""

from ansi_color_note.core.palette import ColorPalette, ColorSlot, DEFAULT_PALETTE, PRESETS, get_preset
from ansi_color_note.core.style import Attribute, StyleState

__all__ = ["ColorPalette", "ColorSlot", "DEFAULT_PALETTE", "PRESETS", "get_preset", "Attribute", "StyleState"]
