#!/usr/bin/env python3
"""Fenced code block detection and language resolution.

Fences are found with a single linear pass over the Markdown, line by line:
leftmost-first and non-overlapping. A fence left open runs to the end of
the text.

Language tokens are resolved against the Pygments lexer registry. Unknown
or missing languages resolve to the plain text lexer.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from pygments.lexer import Lexer  # type: ignore[reportUnknownVariableType]
from pygments.lexers import TextLexer, get_all_lexers, get_lexer_by_name  # type: ignore[reportUnknownVariableType]
from pygments.util import ClassNotFound  # type: ignore[reportUnknownVariableType]

from ..models import CodeBlock

logger = logging.getLogger(__name__)

# Up to three spaces of indentation, then three or more backticks or tildes,
# then an info string. A backtick fence's info string may not itself contain
# backticks.
OPENING_FENCE_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
CLOSING_FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*$")

PLAIN_TEXT_LANGUAGE = "text"


@dataclass
class _OpenFence:
    start: int
    fence: str
    info: str
    body_start: int


def language_token(info: Optional[str]) -> str:
    """Return the language token of a fence info string (its first word)."""
    if not info:
        return ""
    parts = info.split()
    return parts[0] if parts else ""


def _opening_fence(content: str) -> Optional[re.Match[str]]:
    match = OPENING_FENCE_RE.match(content)
    if match and match.group("fence")[0] == "`" and "`" in match.group("info"):
        return None
    return match


def _closes(match: Optional[re.Match[str]], open_fence: _OpenFence) -> bool:
    if match is None:
        return False
    fence = match.group("fence")
    return fence[0] == open_fence.fence[0] and len(fence) >= len(open_fence.fence)


def find_code_blocks(markdown: str) -> list[CodeBlock]:
    """Find all fenced code blocks in Markdown text.

    Fences are runs of backticks or tildes. A closing fence must use the
    same character as the opening one, at least as many times. An
    unterminated block extends to the end of the text and is returned with
    ``terminated=False``.
    """
    blocks: list[CodeBlock] = []
    open_fence: Optional[_OpenFence] = None
    offset = 0

    for line in markdown.splitlines(keepends=True):
        content = line.rstrip("\r\n")

        if open_fence is None:
            match = _opening_fence(content)
            if match:
                open_fence = _OpenFence(
                    start=offset,
                    fence=match.group("fence"),
                    info=match.group("info").strip(),
                    body_start=offset + len(line),
                )
        else:
            if _closes(CLOSING_FENCE_RE.match(content), open_fence):
                blocks.append(
                    CodeBlock(
                        language=language_token(open_fence.info),
                        body=markdown[open_fence.body_start : offset],
                        start=open_fence.start,
                        end=offset + len(content),
                        fence=open_fence.fence,
                        info=open_fence.info,
                    )
                )
                open_fence = None

        offset += len(line)

    if open_fence is not None:
        blocks.append(
            CodeBlock(
                language=language_token(open_fence.info),
                body=markdown[open_fence.body_start :],
                start=open_fence.start,
                end=len(markdown),
                terminated=False,
                fence=open_fence.fence,
                info=open_fence.info,
            )
        )

    return blocks


# -- Language Registry --------------------------------------------------------

# Cache for Pygments lexer alias and extension lookups
_alias_cache: Optional[set[str]] = None
_extension_cache: Optional[dict[str, str]] = None


def _init_lexer_caches() -> tuple[set[str], dict[str, str]]:
    """Initialize lexer alias and extension caches.

    Returns:
        Tuple of (known aliases, extension -> alias)
    """
    global _alias_cache, _extension_cache

    if _alias_cache is not None and _extension_cache is not None:
        return _alias_cache, _extension_cache

    alias_cache: set[str] = set()
    extension_cache: dict[str, str] = {}

    # get_all_lexers() returns (name, aliases, patterns, mimetypes) tuples
    for _name, aliases, patterns, _mimetypes in get_all_lexers():  # type: ignore[reportUnknownVariableType]
        if not aliases:
            continue
        alias_cache.update(alias.lower() for alias in aliases)  # type: ignore[reportUnknownVariableType]
        for pattern in patterns:  # type: ignore[reportUnknownVariableType]
            pattern_lower = str(pattern).lower()  # type: ignore[reportUnknownArgumentType]
            # Only simple *.ext patterns
            if (
                pattern_lower.startswith("*.")
                and "*" not in pattern_lower[2:]
                and "?" not in pattern_lower[2:]
                and "[" not in pattern_lower[2:]
            ):
                ext = pattern_lower[2:]
                # Prefer first match for each extension
                if ext not in extension_cache:
                    extension_cache[ext] = str(aliases[0])  # type: ignore[reportUnknownArgumentType]

    _alias_cache = alias_cache
    _extension_cache = extension_cache
    return alias_cache, extension_cache


def resolve_language(language: str) -> str:
    """Resolve a fence language token to a Pygments lexer alias.

    Matching is case-insensitive. Aliases are tried first, then file
    extensions (so ``tsx`` or ``.rs`` work too). Unknown and empty tokens
    resolve to PLAIN_TEXT_LANGUAGE.
    """
    token = language.strip().lower().lstrip(".")
    if not token:
        return PLAIN_TEXT_LANGUAGE

    aliases, extensions = _init_lexer_caches()
    if token in aliases:
        return token
    if token in extensions:
        return extensions[token]

    logger.debug("Unknown code block language %r, using plain text", language)
    return PLAIN_TEXT_LANGUAGE


def resolve_lexer(language: str) -> Lexer:
    """Get a Pygments lexer for a fence language token.

    Never raises: anything unresolvable gets the plain text lexer.
    """
    alias = resolve_language(language)
    if alias == PLAIN_TEXT_LANGUAGE:
        return TextLexer()  # type: ignore[reportUnknownVariableType]
    try:
        # stripall=False preserves leading whitespace (important for code indentation)
        return get_lexer_by_name(alias, stripall=False)  # type: ignore[reportUnknownVariableType]
    except ClassNotFound:
        return TextLexer()  # type: ignore[reportUnknownVariableType]
