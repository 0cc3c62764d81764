"""Turn ``file://`` references in console output into hyperlinks."""

from __future__ import annotations

import re

from ansi_color_note.render.markup import MarkupText

# Entities the transcoder produces for characters that end an unquoted URL
_ENTITY = r'&(?:lt|gt|quot|#x27|#27);'

FILE_URL_PATTERN = re.compile(
    r'&quot;file://[^<>\n]*?&quot;'          # quoted with escaped double quotes
    r'|&#x27;file://[^<>\n]*?&#x27;'         # quoted with escaped single quotes
    r"|'file://[^'<>\n]*'"                   # single quotes
    r'|"file://[^"<>\n]*"'                   # double quotes
    # Unquoted: no whitespace or angle brackets, and not ending in
    # , . : " ' ( ) [ ] = which are most likely punctuation
    rf'|file://(?:(?!{_ENTITY})[^\s<>])*(?:(?!{_ENTITY})[^\s<>,.:"\'()\[\]=])'
)

_QUOTES = re.compile(r'"|\'|&quot;|&#x27;')


def clean_token(token: str) -> str:
    """Strip wrapping quotes (plain or entity-escaped) from a matched token."""
    return _QUOTES.sub('', token)


def linkify_html(text: str) -> tuple[str, int]:
    """
    Wrap every file URL in already-escaped HTML ``text`` in an anchor.

    ``text`` may contain markup from the transcoder; URLs never extend
    across a tag because matches cannot contain angle brackets.

    Returns:
        Tuple of (new_text, number_of_links)
    """
    parts: list[str] = []
    last = 0
    links = 0
    for match in FILE_URL_PATTERN.finditer(text):
        url = clean_token(match.group())
        parts.append(text[last:match.start()])
        # text is already HTML-escaped, so url is safe in the attribute
        parts.append(f'<a href="{url}">{url}</a>')
        last = match.end()
        links += 1
    parts.append(text[last:])
    return ''.join(parts), links


def linkify_markup(markup: MarkupText, start: int = 0, end: int | None = None) -> int:
    """
    Ask ``markup`` to hyperlink every file URL inside ``[start, end)``.

    Works on the raw text of the buffer, so URLs keep their host-native
    ranges. Returns the number of links added.
    """
    tokens = markup.find_tokens(FILE_URL_PATTERN, start, end)
    for token in tokens:
        token.href(clean_token(token.text))
    return len(tokens)
