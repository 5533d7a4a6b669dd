#!/usr/bin/env python3
"""Read conversation logs (JSONL) into LogRecords.

Each non-blank line is parsed on its own. A line that cannot be parsed
yields a ParseFailure instead of stopping the stream; the caller decides
what to do with it.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Union

from pydantic import ValidationError

from .factories import create_log_record
from .models import LogRecord, ParseFailure

logger = logging.getLogger(__name__)

ReadResult = Union[LogRecord, ParseFailure]


def _describe_validation_error(error: ValidationError) -> str:
    """Summarize the first validation problem, e.g. "missing field 'role'"."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if first.get("type") == "missing":
        return f"missing field '{location}'"
    return f"invalid field '{location}': {first.get('msg', 'invalid value')}"


def parse_log_line(line: str, line_number: int) -> ReadResult:
    """Parse a single JSONL line into a LogRecord or a ParseFailure."""
    raw_text = line.rstrip("\r\n")
    try:
        entry_dict: Any = json.loads(raw_text)
    except json.JSONDecodeError as e:
        return ParseFailure(line_number, raw_text, f"invalid JSON: {e.msg}")

    if not isinstance(entry_dict, dict):
        return ParseFailure(line_number, raw_text, "not a JSON object")

    try:
        return create_log_record(entry_dict)  # type: ignore[reportUnknownArgumentType]
    except ValidationError as e:
        return ParseFailure(line_number, raw_text, _describe_validation_error(e))


def read_log_lines(lines: Iterable[str]) -> Iterator[ReadResult]:
    """Lazily parse log lines.

    Blank lines are skipped but still count towards line numbers, so a
    failure's ``line_number`` matches the line in the source file.
    """
    for line_no, line in enumerate(lines, 1):  # Start counting from 1
        if not line.strip():
            continue
        result = parse_log_line(line, line_no)
        if isinstance(result, ParseFailure):
            logger.debug("Line %d skipped: %s", result.line_number, result.reason)
        yield result


def read_log_file(path: Path) -> Iterator[ReadResult]:
    """Parse a JSONL log file line by line.

    The file stays open only while the returned iterator is consumed.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        yield from read_log_lines(f)
