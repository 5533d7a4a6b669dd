#!/usr/bin/env python3
"""Convert conversation JSONL logs to HTML and PDF."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .factories import build_document
from .html import DEFAULT_TITLE, finalize, render_markdown
from .markdown import assemble_markdown, find_code_blocks
from .models import Document
from .parser import read_log_file, read_log_lines
from .pdf import ChromeRenderer, Renderer
from .themes import Theme, get_theme
from .timings import log_timing, report_timing_statistics

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of converting one log file."""

    output_path: Path
    message_count: int
    code_block_count: int
    skipped_lines: int
    html_path: Optional[Path] = None

    @property
    def is_empty(self) -> bool:
        return self.message_count == 0


def get_default_output_path(input_path: Path, extension: str) -> Path:
    """Derive an output path by replacing the input file's extension."""
    return input_path.with_suffix(f".{extension.lstrip('.')}")


# =============================================================================
# Pipeline
# =============================================================================


def load_document(input_path: Path) -> Document:
    """Read a JSONL log file into a Document."""
    with log_timing(f"Loading {input_path.name}"):
        document = build_document(read_log_file(input_path))

    if document.failures:
        logger.info(
            "Skipped %d unparseable lines in %s", len(document.failures), input_path
        )
        for failure in document.failures:
            logger.debug(
                "%s:%d: %s", input_path, failure.line_number, failure.reason
            )
    if document.is_empty:
        logger.info("No messages found in %s", input_path)
    return document


def load_document_from_lines(lines: Iterable[str]) -> Document:
    """Build a Document from raw JSONL lines (no file involved)."""
    return build_document(read_log_lines(lines))


def render_document_html(
    document: Document, theme: Optional[Theme] = None, title: str = DEFAULT_TITLE
) -> str:
    """Run a Document through Markdown assembly, rendering and the page shell."""
    theme = theme or get_theme()

    with log_timing("Markdown assembly"):
        markdown = assemble_markdown(document.messages)
    with log_timing("Markdown rendering"):
        body_html = render_markdown(markdown) if markdown else ""
    with log_timing("Document assembly"):
        html = finalize(body_html, theme=theme, title=title)

    report_timing_statistics()
    return html


def _write_html(document: Document, html_path: Path, theme: Theme, title: str) -> str:
    html = render_document_html(document, theme=theme, title=title)
    html_path.parent.mkdir(parents=True, exist_ok=True)
    html_path.write_text(html, encoding="utf-8")
    return html


def _count_code_blocks(document: Document) -> int:
    return len(find_code_blocks(assemble_markdown(document.messages)))


# =============================================================================
# File Conversion
# =============================================================================


def convert_jsonl_to_html(
    input_path: Path,
    output_path: Optional[Path] = None,
    theme: Optional[Theme] = None,
) -> ConversionResult:
    """Convert a JSONL log file to a standalone HTML file.

    Args:
        input_path: JSONL log file
        output_path: HTML destination (default: input path with .html)
        theme: Color theme (default: get_theme())
    """
    if not input_path.is_file():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    output_path = output_path or get_default_output_path(input_path, "html")
    document = load_document(input_path)
    _write_html(document, output_path, theme or get_theme(), input_path.stem)

    result = ConversionResult(
        output_path=output_path,
        message_count=len(document.messages),
        code_block_count=_count_code_blocks(document),
        skipped_lines=len(document.failures),
        html_path=output_path,
    )
    logger.info(
        "Rendered %d messages (%d code blocks) to %s",
        result.message_count,
        result.code_block_count,
        output_path,
    )
    return result


def convert_jsonl_to_pdf(
    input_path: Path,
    output_path: Optional[Path] = None,
    renderer: Optional[Renderer] = None,
    theme: Optional[Theme] = None,
    keep_html: bool = False,
) -> ConversionResult:
    """Convert a JSONL log file to PDF.

    The HTML is handed to ``renderer`` (headless Chrome by default). Render
    failures propagate unchanged; nothing is retried.

    Args:
        input_path: JSONL log file
        output_path: PDF destination (default: input path with .pdf)
        renderer: Renderer to use (default: ChromeRenderer())
        theme: Color theme (default: get_theme())
        keep_html: Also write the intermediate HTML next to the PDF

    Raises:
        FileNotFoundError: if the input file does not exist
        RenderFailure: if the renderer could not produce the PDF
        RenderTimeout: if the renderer timed out
    """
    if not input_path.is_file():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    output_path = output_path or get_default_output_path(input_path, "pdf")
    renderer = renderer or ChromeRenderer()
    theme = theme or get_theme()

    document = load_document(input_path)
    html_path: Optional[Path] = None
    if keep_html:
        html_path = get_default_output_path(output_path, "html")
        html = _write_html(document, html_path, theme, input_path.stem)
    else:
        html = render_document_html(document, theme=theme, title=input_path.stem)

    with log_timing("PDF rendering"):
        renderer.render(html, output_path)

    result = ConversionResult(
        output_path=output_path,
        message_count=len(document.messages),
        code_block_count=_count_code_blocks(document),
        skipped_lines=len(document.failures),
        html_path=html_path,
    )
    logger.info(
        "Rendered %d messages (%d code blocks) to %s",
        result.message_count,
        result.code_block_count,
        output_path,
    )
    return result
