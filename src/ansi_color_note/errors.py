"""Exception types raised by ansi-color-note."""


class AnsiColorNoteError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(AnsiColorNoteError, ValueError):
    """A palette or setting is invalid."""


class TranscodeError(AnsiColorNoteError):
    """Transcoding ANSI text to markup failed."""


class SerializationError(AnsiColorNoteError):
    """A console note could not be encoded or decoded."""
