"""Render-time syntax highlighting for analysis results."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, guess_lexer
from pygments.util import ClassNotFound

_FORMATTER = HtmlFormatter(nowrap=True)


def highlight_auto(text: str) -> str:
    """Return ``text`` as HTML with token markup for a guessed language.

    Falls back to escaped plain text when no lexer matches.
    """
    if not text:
        return ""
    try:
        lexer = guess_lexer(text)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(text, lexer, _FORMATTER)
