"""Factory for turning LogRecords into role-tagged Messages.

Role strings are free-form in the log; they are normalized here into the
closed Role set so nothing downstream has to dispatch on arbitrary values.
"""

import logging
from typing import Iterable, Optional, Union

from ..models import (
    ContentFragment,
    Document,
    LogRecord,
    Message,
    ParseFailure,
    Role,
    TextFragment,
)

logger = logging.getLogger(__name__)

# Joins the text fragments of a single record. Each fragment becomes its own
# Markdown paragraph.
FRAGMENT_SEPARATOR = "\n\n"

ROLE_ALIASES: dict[str, Role] = {
    "user": Role.USER,
    "human": Role.USER,
    "assistant": Role.ASSISTANT,
    "ai": Role.ASSISTANT,
    "model": Role.ASSISTANT,
}


def normalize_role(role: str) -> Role:
    """Map a raw role string onto Role, defaulting to Role.UNKNOWN."""
    return ROLE_ALIASES.get(role.strip().lower(), Role.UNKNOWN)


def extract_text(content: Union[str, list[ContentFragment]]) -> str:
    """Extract the renderable text from record content.

    Strings are used verbatim. For fragment lists only TextFragments are
    kept, joined in order with FRAGMENT_SEPARATOR.
    """
    if isinstance(content, str):
        return content
    return FRAGMENT_SEPARATOR.join(
        item.text for item in content if isinstance(item, TextFragment)
    )


def extract_message(record: LogRecord) -> Optional[Message]:
    """Create a Message from a LogRecord.

    Returns None when the extracted text is empty, e.g. a record whose only
    content is a tool call. Whitespace-only text is kept as a message.
    """
    text = extract_text(record.content)
    if not text:
        return None
    return Message(role=normalize_role(record.role), text=text)


def build_document(results: Iterable[Union[LogRecord, ParseFailure]]) -> Document:
    """Run the extractor over a reader stream and collect a Document."""
    messages: list[Message] = []
    failures: list[ParseFailure] = []
    dropped = 0

    for result in results:
        if isinstance(result, ParseFailure):
            failures.append(result)
            continue
        message = extract_message(result)
        if message is None:
            dropped += 1
            continue
        messages.append(message)

    if dropped:
        logger.debug("Dropped %d records without text content", dropped)

    return Document(messages=tuple(messages), failures=tuple(failures))
