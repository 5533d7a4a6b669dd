"""HTML rendering: highlighted code, Markdown bodies and the page shell."""

from .document import DEFAULT_TITLE, finalize
from .renderer_code import highlight_code_block
from .utils import render_markdown

__all__ = [
    "DEFAULT_TITLE",
    "finalize",
    "highlight_code_block",
    "render_markdown",
]
