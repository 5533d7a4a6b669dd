"""Color themes for highlighted code and the page around it.

A theme is a static table: a Pygments style (token type -> color) plus a
few page colors. Themes are built once and never mutated, so they can be
shared freely.

The theme used by a run comes from, in order: an explicit name, the
CLAUDE_CODE_PDF_THEME environment variable, DEFAULT_THEME_NAME.
"""

import functools
import os
from dataclasses import dataclass, field
from typing import Optional

from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]
from pygments.style import Style  # type: ignore[reportUnknownVariableType]
from pygments.styles import get_style_by_name  # type: ignore[reportUnknownVariableType]
from pygments.token import (  # type: ignore[reportUnknownVariableType]
    Comment,
    Error,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)
from pygments.util import ClassNotFound  # type: ignore[reportUnknownVariableType]

THEME_ENV_VAR = "CLAUDE_CODE_PDF_THEME"
DEFAULT_THEME_NAME = "base16-ocean.dark"

HIGHLIGHT_CSS_SELECTOR = ".highlight"


class UnknownThemeError(ValueError):
    """Raised when a theme name matches neither a built-in nor a Pygments style."""


# base16 "ocean" palette
BASE00 = "#2b303b"  # background
BASE01 = "#343d46"
BASE02 = "#4f5b66"
BASE03 = "#65737e"  # comments
BASE04 = "#a7adba"
BASE05 = "#c0c5ce"  # foreground
BASE06 = "#dfe1e8"
BASE07 = "#eff1f5"
BASE08 = "#bf616a"  # red
BASE09 = "#d08770"  # orange
BASE0A = "#ebcb8b"  # yellow
BASE0B = "#a3be8c"  # green
BASE0C = "#96b5b4"  # cyan
BASE0D = "#8fa1b3"  # blue
BASE0E = "#b48ead"  # purple
BASE0F = "#ab7967"  # brown


class Base16OceanDarkStyle(Style):  # type: ignore[misc]
    """base16-ocean.dark as a Pygments style."""

    name = "base16-ocean.dark"
    background_color = BASE00
    highlight_color = BASE02

    styles = {
        Text: BASE05,
        Error: BASE08,
        Comment: f"italic {BASE03}",
        Keyword: BASE0E,
        Keyword.Constant: BASE09,
        Keyword.Type: BASE0A,
        Operator: BASE05,
        Operator.Word: BASE0E,
        Punctuation: BASE05,
        Name: BASE05,
        Name.Attribute: BASE0D,
        Name.Builtin: BASE0D,
        Name.Builtin.Pseudo: BASE08,
        Name.Class: BASE0A,
        Name.Constant: BASE09,
        Name.Decorator: BASE0C,
        Name.Exception: BASE08,
        Name.Function: BASE0D,
        Name.Namespace: BASE0A,
        Name.Tag: BASE08,
        Name.Variable: BASE08,
        Number: BASE09,
        String: BASE0B,
        String.Escape: BASE0C,
        String.Regex: BASE0C,
        String.Interpol: BASE0F,
        Generic.Deleted: BASE08,
        Generic.Inserted: BASE0B,
        Generic.Heading: f"bold {BASE0D}",
        Generic.Subheading: BASE0C,
        Generic.Emph: "italic",
        Generic.Strong: "bold",
    }


@dataclass(frozen=True)
class Theme:
    """An immutable color theme.

    Attributes:
        name: Theme name as accepted by get_theme()
        version: Version of the color table; bump when colors change
        style: Pygments style class holding the token color table
        code_background: Background color of code blocks
        code_foreground: Default text color inside code blocks
        highlight_css: Pygments CSS for the ``.highlight`` container
    """

    name: str
    version: str
    style: type[Style]
    code_background: str
    code_foreground: str
    highlight_css: str = field(default="", compare=False, repr=False)

    @classmethod
    def from_style(cls, name: str, version: str, style: type[Style]) -> "Theme":
        """Build a Theme from a Pygments style class."""
        formatter = HtmlFormatter(style=style)  # type: ignore[reportUnknownVariableType]
        # Background and token rules only; get_style_defs() would also add
        # unscoped ``pre`` and line number rules to the page
        css = "\n".join(
            formatter.get_background_style_defs(HIGHLIGHT_CSS_SELECTOR)  # type: ignore[reportUnknownMemberType]
            + formatter.get_token_style_defs(HIGHLIGHT_CSS_SELECTOR)  # type: ignore[reportUnknownMemberType]
        )
        text_style = style.style_for_token(Text)  # type: ignore[reportUnknownMemberType]
        foreground = text_style.get("color")  # type: ignore[reportUnknownMemberType]
        return cls(
            name=name,
            version=version,
            style=style,
            code_background=str(style.background_color or "#ffffff"),  # type: ignore[reportUnknownMemberType]
            code_foreground=f"#{foreground}" if foreground else "#000000",
            highlight_css=css,
        )


BUILTIN_THEMES: dict[str, tuple[str, type[Style]]] = {
    # name: (version, style)
    DEFAULT_THEME_NAME: ("1", Base16OceanDarkStyle),
}


@functools.lru_cache(maxsize=None)
def load_theme(name: str) -> Theme:
    """Load a theme by name.

    Built-in themes are tried first, then Pygments' own styles (e.g.
    ``monokai``, ``github-dark``), versioned with the Pygments release.

    Raises:
        UnknownThemeError: if no theme or style has this name
    """
    if name in BUILTIN_THEMES:
        version, style = BUILTIN_THEMES[name]
        return Theme.from_style(name, version, style)

    try:
        style = get_style_by_name(name)  # type: ignore[reportUnknownVariableType]
    except ClassNotFound:
        raise UnknownThemeError(f"Unknown theme: {name}") from None

    import pygments

    return Theme.from_style(name, f"pygments-{pygments.__version__}", style)  # type: ignore[reportUnknownArgumentType]


def get_theme(name: Optional[str] = None) -> Theme:
    """Get the theme for this run (see module docstring for precedence)."""
    return load_theme(name or os.getenv(THEME_ENV_VAR) or DEFAULT_THEME_NAME)
