"""Markup buffers, link detection and HTML output."""

from ansi_color_note.render.markup import MarkupText, MarkupInstruction, SubText
from ansi_color_note.render.linkify import FILE_URL_PATTERN, linkify_html, linkify_markup
from ansi_color_note.render.html import HtmlRenderer

__all__ = [
    "MarkupText",
    "MarkupInstruction",
    "SubText",
    "FILE_URL_PATTERN",
    "linkify_html",
    "linkify_markup",
    "HtmlRenderer",
]
