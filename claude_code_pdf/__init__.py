"""Convert Claude Code JSONL conversations to syntax-highlighted HTML and PDF."""

from .converter import (
    ConversionResult,
    convert_jsonl_to_html,
    convert_jsonl_to_pdf,
    load_document,
    render_document_html,
)

__all__ = [
    "ConversionResult",
    "convert_jsonl_to_html",
    "convert_jsonl_to_pdf",
    "load_document",
    "render_document_html",
]
