"""Typer CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from ansi_color_note.config import Settings, get_settings
from ansi_color_note.core.palette import PRESETS, ColorPalette, ColorSlot, get_preset
from ansi_color_note.errors import AnsiColorNoteError


def _setup_logging(level: str) -> None:
    """Send library warnings to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=False)],
        force=True,
    )


def _palette(settings: Settings, name: Optional[str]) -> ColorPalette:
    return get_preset(name) if name else settings.build_palette()


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="ansi-color-note",
        help="Render console logs containing ANSI escape sequences as HTML.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console(stderr=True)

    def fail(message: str) -> None:
        console.print(f"[red]{message}[/]")
        raise typer.Exit(1)

    @app.callback()
    def setup() -> None:
        try:
            _setup_logging(get_settings().log_level)
        except AnsiColorNoteError as e:
            fail(f"Invalid configuration: {e}")

    @app.command()
    def render(
        source: Annotated[Path, typer.Argument(help="Raw or annotated log file")],
        output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write HTML here instead of stdout")] = None,
        palette: Annotated[Optional[str], typer.Option("--palette", "-p", help="Palette preset for raw logs")] = None,
        document: Annotated[bool, typer.Option("--document/--fragment", help="Emit a full HTML page or only the markup")] = True,
    ) -> None:
        """Render a log to HTML with colors and file links."""
        from ansi_color_note.io.codec import ConsoleNoteCodec, find_notes
        from ansi_color_note.io.reader import load_log, render_log, render_raw
        from ansi_color_note.render.html import HtmlRenderer

        settings = get_settings()
        try:
            colors = _palette(settings, palette)
            text = load_log(source, settings.encoding)
        except (AnsiColorNoteError, OSError, LookupError) as e:
            fail(str(e))

        if next(find_notes(text), None) is not None:
            body = render_log(text, ConsoleNoteCodec(default_palette=colors))
        else:
            body = render_raw(text, colors)

        result = HtmlRenderer(title=source.name).render(body, colors) if document else body
        if output:
            output.write_text(result, encoding="utf-8")
            console.print(f"[green]Rendered {source} → {output}[/]")
        else:
            typer.echo(result, nl=False)

    @app.command()
    def encode(
        source: Annotated[Path, typer.Argument(help="Raw log file")],
        dest: Annotated[Path, typer.Argument(help="Annotated log to write")],
        palette: Annotated[Optional[str], typer.Option("--palette", "-p", help="Palette preset stored in the notes")] = None,
    ) -> None:
        """Store a raw log with a console note in front of every colored line."""
        from ansi_color_note.io.reader import load_log
        from ansi_color_note.io.writer import NoteWriter

        settings = get_settings()
        try:
            colors = _palette(settings, palette)
            text = load_log(source, settings.encoding)
            with open(dest, "w", encoding="utf-8") as f, NoteWriter(f, colors) as writer:
                writer.write(text)
        except (AnsiColorNoteError, OSError, LookupError) as e:
            fail(str(e))

        console.print(f"[green]Encoded {source} → {dest}[/] ({writer.notes_written} notes)")

    @app.command()
    def strip(
        source: Annotated[Path, typer.Argument(help="Annotated log file")],
    ) -> None:
        """Print a log with its console notes removed."""
        from ansi_color_note.io.codec import strip_notes
        from ansi_color_note.io.reader import load_log

        try:
            text = load_log(source, get_settings().encoding)
        except (OSError, LookupError) as e:
            fail(str(e))
        typer.echo(strip_notes(text), nl=False)

    @app.command()
    def palettes() -> None:
        """List the palette presets."""
        out = Console()
        table = Table(title="Palette presets")
        table.add_column("Slot")
        for name in PRESETS:
            table.add_column(name)

        for slot in ColorSlot:
            row: list[Text | str] = [slot.key]
            for preset in PRESETS.values():
                value = preset.color(slot)
                cell = Text(f"{value} ")
                if value.startswith("#"):
                    cell.append("  ", style=f"on {value}")
                row.append(cell)
            table.add_row(*row)

        out.print(table)

    return app
