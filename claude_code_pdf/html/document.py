"""Wrap rendered HTML in a self-contained page.

The page embeds all of its CSS, including the theme's Pygments stylesheet,
so the PDF renderer never has to fetch anything.
"""

import functools
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from ..themes import Theme, get_theme

DEFAULT_TITLE = "Conversation"


@functools.lru_cache(maxsize=1)
def get_template_environment() -> Environment:
    """Get cached Jinja2 template environment for HTML rendering.

    Templates load from the templates directory with HTML auto-escaping.
    """
    templates_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml"]),
    )


def finalize(
    body_html: str, theme: Optional[Theme] = None, title: str = DEFAULT_TITLE
) -> str:
    """Wrap an HTML body in the page template.

    Args:
        body_html: Rendered HTML for the page body (inserted as-is)
        theme: Color theme; defaults to get_theme()
        title: Document title (escaped)

    Returns:
        Complete HTML document
    """
    theme = theme or get_theme()
    template = get_template_environment().get_template("document.html")
    return template.render(
        title=title,
        theme=theme,
        highlight_css=Markup(theme.highlight_css),
        body_html=Markup(body_html),
    )
