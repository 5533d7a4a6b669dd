"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest


class FakeRenderer:
    """Renderer stand-in that records calls and writes a placeholder file."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Path]] = []

    def render(self, html: str, destination: Path) -> None:
        self.calls.append((html, destination))
        destination.write_bytes(b"%PDF-1.4 fake")


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    """A renderer that never launches Chrome."""
    return FakeRenderer()


@pytest.fixture
def write_jsonl(tmp_path: Path) -> Callable[..., Path]:
    """Write records (dicts or raw strings) to a JSONL file and return its path."""

    def _write(records: list[Any], name: str = "conversation.jsonl") -> Path:
        path = tmp_path / name
        lines = [r if isinstance(r, str) else json.dumps(r) for r in records]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """The two-message conversation used across end-to-end tests."""
    return [
        {"role": "user", "content": "Hello"},
        {"role": "assistant", "content": "Here:\n```python\nprint(1)\n```"},
    ]


@pytest.fixture
def claude_code_records() -> list[dict[str, Any]]:
    """Transcript entries in Claude Code's envelope format."""
    return [
        {
            "type": "user",
            "uuid": "user-1",
            "timestamp": "2025-06-11T22:45:17.436Z",
            "sessionId": "session-1",
            "message": {"role": "user", "content": "Fix the bug"},
        },
        {
            "type": "assistant",
            "uuid": "assistant-1",
            "timestamp": "2025-06-11T22:45:20.000Z",
            "sessionId": "session-1",
            "message": {
                "id": "msg-1",
                "type": "message",
                "role": "assistant",
                "content": [
                    {"type": "text", "text": "Looking at it."},
                    {
                        "type": "tool_use",
                        "id": "tool-1",
                        "name": "Read",
                        "input": {"file_path": "/tmp/app.py"},
                    },
                ],
            },
        },
        {
            "type": "user",
            "uuid": "user-2",
            "timestamp": "2025-06-11T22:45:21.000Z",
            "sessionId": "session-1",
            "message": {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "tool-1",
                        "content": "def main(): ...",
                    }
                ],
            },
        },
        {"type": "summary", "summary": "Bug fixing", "leafUuid": "assistant-1"},
    ]
