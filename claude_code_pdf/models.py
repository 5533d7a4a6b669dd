"""Models for conversation log records and the documents built from them.

Raw JSONL lines are validated into pydantic models (LogRecord and its
content fragments); everything downstream of the extractor works on small
immutable dataclasses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Normalized speaker role.

    Using str as base class keeps plain string comparisons working.
    """

    USER = "user"
    ASSISTANT = "assistant"
    UNKNOWN = "unknown"


# =============================================================================
# Log Record Models
# =============================================================================


class TextFragment(BaseModel):
    """A text content item."""

    type: Literal["text"] = "text"
    text: str


class OtherFragment(BaseModel):
    """Any non-text content item (tool_use, tool_result, image, thinking...).

    Kept opaque: the extractor drops these.
    """

    type: str
    data: dict[str, Any] = Field(default_factory=dict)


ContentFragment = Union[TextFragment, OtherFragment]


class LogRecord(BaseModel):
    """One deserialized log line: a speaker role plus its content.

    ``content`` is either a plain string or a list of fragments; the union
    is resolved once, at validation time, so later stages never see untyped
    dicts.
    """

    role: str
    content: Union[str, list[ContentFragment]]


# =============================================================================
# Pipeline Models
# =============================================================================


@dataclass(frozen=True)
class ParseFailure:
    """A log line that could not be turned into a LogRecord."""

    line_number: int
    raw_text: str
    reason: str


@dataclass(frozen=True)
class Message:
    """A role-tagged message ready for Markdown assembly."""

    role: Role
    text: str


@dataclass(frozen=True)
class Document:
    """Messages in input order, plus the lines that were skipped."""

    messages: tuple[Message, ...] = ()
    failures: tuple[ParseFailure, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.messages


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code region found in assembled Markdown.

    ``start`` and ``end`` are offsets into the Markdown text covering the
    whole block, fences included. ``terminated`` is False when the block
    was closed implicitly at end of document.
    """

    language: str
    body: str
    start: int
    end: int
    terminated: bool = True
    fence: str = "```"
    info: str = ""
