"""Factory modules for creating typed objects from raw data."""

from .record_factory import (
    # Record creation
    create_content_fragment,
    create_log_record,
    unwrap_envelope,
)
from .message_factory import (
    # Role normalization
    ROLE_ALIASES,
    normalize_role,
    # Message creation
    FRAGMENT_SEPARATOR,
    build_document,
    extract_message,
    extract_text,
)

__all__ = [
    # Record creation
    "create_content_fragment",
    "create_log_record",
    "unwrap_envelope",
    # Role normalization
    "ROLE_ALIASES",
    "normalize_role",
    # Message creation
    "FRAGMENT_SEPARATOR",
    "build_document",
    "extract_message",
    "extract_text",
]
