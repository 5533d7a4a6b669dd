"""Assemble Messages into a single Markdown document.

Each message is introduced by a fixed heading line for its role. The
assembler only concatenates; Markdown is parsed downstream. The one thing
it guards is the role boundary itself: message lines that would read as a
role heading are escaped, and a fence a message leaves open is closed
before the next message starts.
"""

import re
from typing import Iterable

from ..models import Message, Role
from .classifier import find_code_blocks

ROLE_LABELS: dict[Role, str] = {
    Role.USER: "User",
    Role.ASSISTANT: "Assistant",
    Role.UNKNOWN: "Unknown",
}

ROLE_MARKERS: dict[Role, str] = {
    role: f"## {label}" for role, label in ROLE_LABELS.items()
}

_MARKER_LINE_RE = re.compile(
    r"^(?P<indent> {0,3})(?=##[ \t]+(?:"
    + "|".join(re.escape(label) for label in ROLE_LABELS.values())
    + r")\b)",
    re.MULTILINE,
)


def escape_role_markers(text: str) -> str:
    """Backslash-escape lines that start with a role marker heading.

    Any ATX spelling counts (``##  User``, ``##<TAB>User``), not only the exact
    marker line, so message text never renders as a role heading.

    Lines inside fenced code blocks are left alone.
    """
    code_spans = [(block.start, block.end) for block in find_code_blocks(text)]

    def _escape(match: re.Match[str]) -> str:
        position = match.start()
        for start, end in code_spans:
            if start <= position < end:
                return match.group(0)
        return match.group("indent") + "\\"

    return _MARKER_LINE_RE.sub(_escape, text)


def close_open_fence(text: str) -> str:
    """Append a closing fence if the text ends inside a fenced block."""
    blocks = find_code_blocks(text)
    if blocks and not blocks[-1].terminated:
        return f"{text}\n{blocks[-1].fence}"
    return text


def format_message(message: Message) -> str:
    """Format one message: marker line, blank line, body, blank line."""
    body = close_open_fence(escape_role_markers(message.text.rstrip("\n")))
    return f"{ROLE_MARKERS[message.role]}\n\n{body}\n\n"


def assemble_markdown(messages: Iterable[Message]) -> str:
    """Concatenate messages into one Markdown document, in order."""
    return "".join(format_message(message) for message in messages)
