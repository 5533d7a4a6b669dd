"""Timing utilities for profiling the conversion pipeline.

Enabled via the CLAUDE_CODE_PDF_DEBUG_TIMING environment variable; set it
to "1", "true", or "yes". Output goes to this module's logger at INFO.
"""

import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

DEBUG_TIMING = os.getenv("CLAUDE_CODE_PDF_DEBUG_TIMING", "").lower() in (
    "1",
    "true",
    "yes",
)

# Collected durations per statistic name, e.g. "pygments" -> [0.002, ...]
_timing_stats: dict[str, list[float]] = {}


@contextmanager
def log_timing(phase: str) -> Iterator[None]:
    """Log how long the wrapped block took.

    Example:
        with log_timing("Markdown rendering"):
            html = render_markdown(text)
    """
    if not DEBUG_TIMING:
        yield
        return

    t_start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - t_start
        logger.info("[TIMING] %-40s %8.3fs", phase, elapsed)


@contextmanager
def timing_stat(name: str) -> Iterator[None]:
    """Record the duration of the wrapped block under ``name``."""
    if not DEBUG_TIMING:
        yield
        return

    t_start = time.perf_counter()
    try:
        yield
    finally:
        _timing_stats.setdefault(name, []).append(time.perf_counter() - t_start)


def report_timing_statistics() -> None:
    """Log totals for every recorded statistic, then reset them."""
    for name, durations in sorted(_timing_stats.items()):
        logger.info(
            "[TIMING] %s: %d operations, total %.3fs, slowest %.1fms",
            name,
            len(durations),
            sum(durations),
            max(durations) * 1000,
        )
    _timing_stats.clear()
