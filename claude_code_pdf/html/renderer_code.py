#!/usr/bin/env python3
"""Syntax highlighting for fenced code blocks (using Pygments).

Highlighted output carries CSS classes only; colors come from the theme's
stylesheet, which the document assembler embeds in the page.
"""

import functools

from pygments import highlight  # type: ignore[reportUnknownVariableType]
from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]

from ..markdown.classifier import resolve_lexer
from ..timings import timing_stat


@functools.lru_cache(maxsize=1)
def _get_formatter() -> HtmlFormatter:  # type: ignore[reportUnknownParameterType]
    """Get the shared HtmlFormatter for code blocks."""
    return HtmlFormatter(  # type: ignore[reportUnknownVariableType]
        linenos=False,  # No line numbers in markdown code blocks
        cssclass="highlight",
        wrapcode=True,
    )


def highlight_code_block(code: str, language: str = "") -> str:
    """Highlight a code block body with the lexer for ``language``.

    Unknown or empty languages are rendered with the plain text lexer, so
    the output for ``language="nonexistent"`` equals ``language="text"``.

    Args:
        code: Raw (unescaped) code block body
        language: Fence language token, may be empty

    Returns:
        HTML ``<div class="highlight">`` block with token spans
    """
    lexer = resolve_lexer(language)
    code = code.replace("\r\n", "\n").replace("\r", "\n")
    with timing_stat("pygments"):
        return str(highlight(code, lexer, _get_formatter()))  # type: ignore[reportUnknownArgumentType]
