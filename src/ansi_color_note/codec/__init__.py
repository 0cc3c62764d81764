"""Transcoding of ANSI escape sequences."""

from ansi_color_note.codec.transcoder import AnsiTranscoder, Colorized, Unchanged, transcode

__all__ = ["AnsiTranscoder", "Colorized", "Unchanged", "transcode"]
