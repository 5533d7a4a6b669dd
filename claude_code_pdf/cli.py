#!/usr/bin/env python3
"""CLI interface for claude-code-pdf."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import timings
from .converter import ConversionResult, convert_jsonl_to_html, convert_jsonl_to_pdf
from .pdf import DEFAULT_RENDER_TIMEOUT, ChromeRenderer, RenderFailure, RenderTimeout
from .themes import THEME_ENV_VAR, UnknownThemeError, get_theme


def _configure_logging(debug: bool) -> None:
    """Show warnings and above; timing output or everything when asked."""
    if debug:
        level = logging.DEBUG
    elif timings.DEBUG_TIMING:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("claude_code_pdf").setLevel(level)


def _report(input_path: Path, result: ConversionResult) -> None:
    if result.skipped_lines:
        click.echo(
            f"Warning: skipped {result.skipped_lines} unparseable lines", err=True
        )
    if result.is_empty:
        click.echo(f"No messages found in {input_path}; wrote an empty document")
    click.echo(f"Successfully converted {input_path} to {result.output_path}")
    if result.html_path is not None and result.html_path != result.output_path:
        click.echo(f"HTML kept at {result.html_path}")


@click.group()
@click.version_option(package_name="claude-code-pdf")
def main() -> None:
    """Convert Claude Code JSONL conversations to syntax-highlighted PDFs."""


@main.command()
@click.argument("input_path", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Output file path (default: input file with .pdf, or .html with --html)",
)
@click.option(
    "--html",
    "html_only",
    is_flag=True,
    help="Write the HTML document only; do not render a PDF",
)
@click.option(
    "--keep-html",
    is_flag=True,
    help="Also write the intermediate HTML next to the PDF",
)
@click.option(
    "--theme",
    type=str,
    default=None,
    help=f"Color theme: base16-ocean.dark (default) or any Pygments style name. Also read from {THEME_ENV_VAR}.",
)
@click.option(
    "--chrome",
    type=str,
    default=None,
    help="Chrome/Chromium executable (default: CLAUDE_CODE_PDF_CHROME, then PATH)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_RENDER_TIMEOUT,
    show_default=True,
    help="Seconds to wait for the PDF renderer",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show debug logging and full traceback on errors.",
)
def convert(
    input_path: Path,
    output: Optional[Path],
    html_only: bool,
    keep_html: bool,
    theme: Optional[str],
    chrome: Optional[str],
    timeout: float,
    debug: bool,
) -> None:
    """Convert a JSONL conversation log to PDF (or HTML)."""
    _configure_logging(debug)

    try:
        selected_theme = get_theme(theme)
        if html_only:
            result = convert_jsonl_to_html(input_path, output, theme=selected_theme)
        else:
            result = convert_jsonl_to_pdf(
                input_path,
                output,
                renderer=ChromeRenderer(executable=chrome, timeout=timeout),
                theme=selected_theme,
                keep_html=keep_html,
            )
        _report(input_path, result)

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except UnknownThemeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except RenderTimeout as e:
        click.echo(f"Error: PDF rendering timed out: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    except RenderFailure as e:
        click.echo(f"Error: PDF rendering failed: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error converting file: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
