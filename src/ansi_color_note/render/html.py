"""Wrap rendered console markup in a standalone HTML page."""

import html

from ansi_color_note.core.palette import ColorPalette, resolve_palette


class HtmlRenderer:
    """Render annotated console HTML as a page styled with a palette's defaults."""

    def __init__(
        self,
        css_class: str = "console-output",
        font_family: str = "monospace",
        title: str = "Console Output",
    ):
        self.css_class = css_class
        self.font_family = font_family
        self.title = title

    def render(self, body: str, palette: ColorPalette | None = None) -> str:
        """Render an HTML fragment (already escaped) to a full page."""
        palette = resolve_palette(palette)
        style = "; ".join([
            f"color: {palette.default_fg}",
            f"background-color: {palette.default_bg}",
            f"font-family: {self.font_family}",
            "padding: 1em",
        ])

        return f'''<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{html.escape(self.title)}</title>
</head>
<body>
<pre class="{html.escape(self.css_class, quote=True)}" style="{html.escape(style, quote=True)}">
{body}</pre>
</body>
</html>
'''
