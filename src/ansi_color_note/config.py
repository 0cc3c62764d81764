"""Configuration read from the environment with pydantic-settings.

Consumers call ``get_settings()`` for a cached instance. Tests construct
``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ansi_color_note.core.palette import ColorPalette, get_preset
from ansi_color_note.errors import ConfigurationError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Palette and logging settings (``ANSI_NOTE_*`` environment variables)."""

    model_config = SettingsConfigDict(
        env_prefix="ANSI_NOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    palette: str = "xterm"
    custom_colors: dict[str, str] | None = None
    encoding: str = "utf-8"
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _valid_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
            raise ValueError(msg)
        return level

    def build_palette(self) -> ColorPalette:
        """Return the configured palette, a preset unless custom colors are set."""
        if self.custom_colors:
            logger.debug("Using custom palette %r", self.palette)
            return ColorPalette.custom(self.palette, self.custom_colors)
        return get_preset(self.palette)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance."""
    try:
        return Settings()
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
