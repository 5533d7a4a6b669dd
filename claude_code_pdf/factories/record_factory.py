"""Factory for creating LogRecord and ContentFragment instances from raw data.

Two record shapes are accepted:

- flat records: ``{"role": "user", "content": ...}``
- Claude Code transcript entries, where the role and content live in a
  nested ``message`` object: ``{"type": "user", "message": {...}}``

Both are normalized to the flat shape before validation.
"""

from typing import Any, cast

from ..models import ContentFragment, LogRecord, OtherFragment, TextFragment


# =============================================================================
# Content Fragment Creation
# =============================================================================


def create_content_fragment(item_data: Any) -> ContentFragment:
    """Create a ContentFragment from a raw content item.

    Text items with a string ``text`` become TextFragment. Bare strings in a
    content list are treated as text. Everything else is kept opaque as an
    OtherFragment carrying the original fields.
    """
    if isinstance(item_data, str):
        return TextFragment(text=item_data)

    if not isinstance(item_data, dict):
        return OtherFragment(type=type(item_data).__name__)

    data = cast(dict[str, Any], item_data)
    content_type = data.get("type", "")
    text = data.get("text")
    if content_type == "text" and isinstance(text, str):
        return TextFragment(text=text)

    return OtherFragment(
        type=str(content_type),
        data={key: value for key, value in data.items() if key != "type"},
    )


# =============================================================================
# Log Record Creation
# =============================================================================


def unwrap_envelope(entry_dict: dict[str, Any]) -> dict[str, Any]:
    """Lift ``message.role``/``message.content`` to the top level.

    Records that already carry a top-level ``role`` are returned unchanged.
    """
    if "role" in entry_dict:
        return entry_dict

    message = entry_dict.get("message")
    if not isinstance(message, dict):
        return entry_dict

    message_dict = cast(dict[str, Any], message)
    unwrapped: dict[str, Any] = {}
    if "role" in message_dict:
        unwrapped["role"] = message_dict["role"]
    if "content" in message_dict:
        unwrapped["content"] = message_dict["content"]
    return unwrapped


def create_log_record(entry_dict: dict[str, Any]) -> LogRecord:
    """Create a LogRecord from a deserialized JSON object.

    Raises:
        pydantic.ValidationError: if ``role`` or ``content`` is missing or
            has the wrong type.
    """
    data = dict(unwrap_envelope(entry_dict))

    content = data.get("content")
    if isinstance(content, list):
        content_list = cast(list[Any], content)
        data["content"] = [create_content_fragment(item) for item in content_list]

    return LogRecord.model_validate(data)
