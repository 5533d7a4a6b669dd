"""Markdown to HTML rendering.

Markdown is parsed with mistune. Two plugins adapt its HTML output:

- fenced code blocks are highlighted with Pygments, via the language the
  classifier resolves from the fence info string;
- role marker lines (``## User``, ``## Assistant``...) become headings with role CSS
  classes so each message start can be styled.

Raw HTML inside messages is escaped, not passed through.
"""

import functools
import re
from typing import Any, Optional

import mistune

from .renderer_code import highlight_code_block
from ..markdown.assembler import ROLE_LABELS
from ..markdown.classifier import language_token
from ..timings import timing_stat

ROLE_MARKER_RE = re.compile(
    r"## (?P<label>"
    + "|".join(re.escape(label) for label in ROLE_LABELS.values())
    + r")[ \t]*"
)

_ROLES_BY_LABEL = {label: role.value for role, label in ROLE_LABELS.items()}


def plugin_pygments(md: Any) -> None:
    """Plugin to add Pygments syntax highlighting to code blocks."""

    def block_code(code: str, info: Optional[str] = None) -> str:
        """Render every code block through Pygments, plain text if no language."""
        return highlight_code_block(code, language_token(info))

    md.renderer.block_code = block_code


def parse_role_marker(block: Any, m: re.Match[str], state: Any) -> int:
    """Parse an ATX heading, turning top-level marker lines into role markers."""
    marker = ROLE_MARKER_RE.fullmatch(m.group(0))
    if marker is None or state.depth():
        return block.parse_atx_heading(m, state)

    label = marker.group("label")
    state.append_token(
        {
            "type": "role_marker",
            "attrs": {"role": _ROLES_BY_LABEL[label], "label": label},
        }
    )
    return m.end() + 1


def render_role_marker(renderer: Any, role: str, label: str) -> str:
    return f'<h2 class="role role-{role}">{label}</h2>\n'


def plugin_role_markers(md: Any) -> None:
    """Plugin to render role marker lines as role headings.

    Only exact, unindented marker lines at the top level of the document
    match, i.e. the lines the assembler writes. Headings inside block
    quotes or lists, setext headings and other spellings stay ordinary
    headings without role classes.
    """
    # Replaces the ATX heading parser; lists ending on a heading call it
    # directly rather than through the rule scanner
    md.block.register("atx_heading", None, parse_role_marker)
    md.renderer.register("role_marker", render_role_marker)


@functools.lru_cache(maxsize=1)
def _get_markdown_renderer() -> mistune.Markdown:
    """Get cached Mistune markdown renderer with Pygments syntax highlighting."""
    return mistune.create_markdown(
        plugins=[
            "strikethrough",
            "url",
            plugin_pygments,
            plugin_role_markers,
        ],
        escape=True,  # Messages are text, not trusted HTML
        hard_wrap=True,  # Line break for newlines, as in chat messages
    )


def render_markdown(text: str) -> str:
    """Convert markdown text to HTML using mistune with Pygments syntax highlighting."""
    with timing_stat("markdown"):
        renderer = _get_markdown_renderer()
        return str(renderer(text))
