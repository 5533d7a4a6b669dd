"""Markdown assembly and fenced code block classification."""

from .assembler import ROLE_LABELS, ROLE_MARKERS, assemble_markdown, escape_role_markers
from .classifier import find_code_blocks, language_token, resolve_language, resolve_lexer

__all__ = [
    "ROLE_LABELS",
    "ROLE_MARKERS",
    "assemble_markdown",
    "escape_role_markers",
    "find_code_blocks",
    "language_token",
    "resolve_language",
    "resolve_lexer",
]
