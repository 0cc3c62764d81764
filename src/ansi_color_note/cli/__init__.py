"""Command line interface for ansi-color-note."""
