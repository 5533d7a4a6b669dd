"""Render finished HTML documents to PDF with headless Chrome.

The conversion pipeline only produces HTML; anything that can turn an HTML
string into a file at a destination path can act as the renderer (see the
Renderer protocol). Failures are raised, never retried here.
"""

import logging
import os
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

CHROME_ENV_VAR = "CLAUDE_CODE_PDF_CHROME"
DEFAULT_RENDER_TIMEOUT = 60.0

# Executable names looked up on PATH, in order
CHROME_CANDIDATES = (
    "google-chrome",
    "google-chrome-stable",
    "chromium",
    "chromium-browser",
    "chrome",
    "msedge",
)
MACOS_CHROME_PATH = "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"


class RenderFailure(Exception):
    """The renderer could not produce a document."""

    def __init__(self, reason: str, path: Optional[Path] = None):
        self.reason = reason
        self.path = path
        message = f"{reason} ({path})" if path is not None else reason
        super().__init__(message)


class RenderTimeout(RenderFailure):
    """The renderer did not finish within its timeout."""


class Renderer(Protocol):
    """Turns a complete HTML document into a file at ``destination``."""

    def render(self, html: str, destination: Path) -> None:
        """Render ``html`` to ``destination``.

        Raises:
            RenderFailure: if no document was produced
            RenderTimeout: if rendering took too long
        """
        ...


def find_chrome_executable() -> Optional[str]:
    """Locate a Chrome/Chromium binary.

    Checks CLAUDE_CODE_PDF_CHROME, then PATH, then the default macOS
    install location.
    """
    from_env = os.getenv(CHROME_ENV_VAR)
    if from_env:
        return from_env

    for candidate in CHROME_CANDIDATES:
        found = shutil.which(candidate)
        if found:
            return found

    if sys.platform == "darwin" and Path(MACOS_CHROME_PATH).exists():
        return MACOS_CHROME_PATH

    return None


class ChromeRenderer:
    """Renderer that prints HTML to PDF with headless Chrome."""

    def __init__(
        self,
        executable: Optional[str] = None,
        timeout: float = DEFAULT_RENDER_TIMEOUT,
    ):
        """Initialize the Chrome renderer.

        Args:
            executable: Chrome binary; located with find_chrome_executable() if None
            timeout: Seconds to wait for Chrome before raising RenderTimeout
        """
        self.executable = executable
        self.timeout = timeout

    def build_command(self, executable: str, html_path: Path, destination: Path) -> list[str]:
        """Build the Chrome command line for one render."""
        return [
            executable,
            "--headless",
            "--disable-gpu",
            "--no-pdf-header-footer",
            f"--print-to-pdf={destination}",
            html_path.resolve().as_uri(),
        ]

    def render(self, html: str, destination: Path) -> None:
        """Render ``html`` to ``destination``.

        Chrome prints into a scratch directory next to the destination and
        the result is moved into place only once it exists, so a failed
        render leaves any previous file at ``destination`` untouched.
        """
        executable = self.executable or find_chrome_executable()
        if executable is None:
            raise RenderFailure(
                f"Chrome executable not found; set {CHROME_ENV_VAR}", destination
            )

        destination = destination.resolve()
        destination.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.TemporaryDirectory(
            prefix=".claude-code-pdf-", dir=destination.parent
        ) as tmp_dir:
            # Chrome needs a file:// URL to print from
            html_path = Path(tmp_dir) / "document.html"
            html_path.write_text(html, encoding="utf-8")
            pdf_path = Path(tmp_dir) / "document.pdf"

            command = self.build_command(executable, html_path, pdf_path)
            logger.debug("Running %s", " ".join(command))
            try:
                result = subprocess.run(
                    command,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except subprocess.TimeoutExpired:
                raise RenderTimeout(
                    f"Chrome did not finish within {self.timeout:g}s", destination
                ) from None
            except OSError as e:
                raise RenderFailure(f"Could not run Chrome: {e}", destination) from e

            if result.returncode != 0:
                stderr = result.stderr.strip().splitlines()
                detail = stderr[-1] if stderr else f"exit code {result.returncode}"
                raise RenderFailure(
                    f"Chrome failed to generate PDF: {detail}", destination
                )

            if not pdf_path.exists():
                raise RenderFailure("Chrome did not write a PDF", destination)

            os.replace(pdf_path, destination)
