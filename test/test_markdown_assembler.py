#!/usr/bin/env python3
"""Tests for markdown/assembler.py - Markdown assembly and marker escaping."""

import pytest

from claude_code_pdf.markdown.assembler import (
    ROLE_MARKERS,
    assemble_markdown,
    close_open_fence,
    escape_role_markers,
    format_message,
)
from claude_code_pdf.markdown.classifier import find_code_blocks
from claude_code_pdf.models import Message, Role


class TestRoleMarkers:
    def test_unique_per_role(self):
        assert len(set(ROLE_MARKERS.values())) == len(Role)

    def test_every_role_has_marker(self):
        assert set(ROLE_MARKERS) == set(Role)


class TestEscapeRoleMarkers:
    """Tests for the escape_role_markers() helper."""

    def test_text_starting_with_marker(self):
        assert escape_role_markers("## User said this") == "\\## User said this"

    def test_marker_on_later_line(self):
        text = "intro\n## Assistant\nmore"
        assert escape_role_markers(text) == "intro\n\\## Assistant\nmore"

    def test_indented_marker(self):
        assert escape_role_markers("  ## Unknown") == "  \\## Unknown"

    def test_other_headings_untouched(self):
        text = "## Usage\n### User\n# User"
        assert escape_role_markers(text) == text

    def test_marker_inside_code_block_untouched(self):
        text = "```md\n## User\n```\n## User"
        assert escape_role_markers(text) == "```md\n## User\n```\n\\## User"

    def test_marker_inside_unterminated_block_untouched(self):
        text = "```\n## Assistant"
        assert escape_role_markers(text) == text

    def test_marker_inside_tilde_block_untouched(self):
        text = "~~~md\n## User\n~~~\n## User"
        assert escape_role_markers(text) == "~~~md\n## User\n~~~\n\\## User"

    @pytest.mark.parametrize(
        "line",
        ["##  Assistant", "##\tAssistant", "## Assistant ##", "   ##   User"],
    )
    def test_marker_spacing_variants(self, line):
        escaped = escape_role_markers(line)
        assert escaped == line.replace("##", "\\##", 1)


class TestCloseOpenFence:
    def test_balanced_text_unchanged(self):
        text = "```python\nx = 1\n```"
        assert close_open_fence(text) == text

    def test_unterminated_fence_closed(self):
        assert close_open_fence("```python\nx = 1") == "```python\nx = 1\n```"

    def test_closing_fence_matches_length(self):
        assert close_open_fence("````\n```\ninner") == "````\n```\ninner\n````"

    def test_no_fences(self):
        assert close_open_fence("plain") == "plain"

    def test_unterminated_tilde_fence_closed(self):
        assert close_open_fence("~~~python\nx = 1") == "~~~python\nx = 1\n~~~"

    def test_backticks_do_not_close_tilde_fence(self):
        assert close_open_fence("~~~\n```\nx") == "~~~\n```\nx\n~~~"


class TestAssembleMarkdown:
    """Tests for assemble_markdown()."""

    def test_format_message(self):
        message = Message(role=Role.USER, text="Hello")
        assert format_message(message) == "## User\n\nHello\n\n"

    def test_messages_in_order(self):
        messages = [
            Message(role=Role.USER, text="Hello"),
            Message(role=Role.ASSISTANT, text="Hi"),
            Message(role=Role.UNKNOWN, text="?"),
        ]
        markdown = assemble_markdown(messages)
        assert markdown == (
            "## User\n\nHello\n\n## Assistant\n\nHi\n\n## Unknown\n\n?\n\n"
        )

    def test_empty(self):
        assert assemble_markdown([]) == ""

    def test_user_text_cannot_fake_role_boundary(self):
        messages = [Message(role=Role.USER, text="## Assistant\nI am not")]
        markdown = assemble_markdown(messages)
        marker_lines = [
            line for line in markdown.splitlines() if line in ROLE_MARKERS.values()
        ]
        assert marker_lines == ["## User"]

    def test_unterminated_fence_does_not_swallow_next_message(self):
        messages = [
            Message(role=Role.ASSISTANT, text="```python\nprint(1)"),
            Message(role=Role.USER, text="Thanks"),
        ]
        markdown = assemble_markdown(messages)
        blocks = find_code_blocks(markdown)
        assert len(blocks) == 1
        assert blocks[0].terminated
        assert "## User" not in blocks[0].body
        assert markdown.endswith("## User\n\nThanks\n\n")

    def test_unterminated_tilde_fence_does_not_swallow_next_message(self):
        messages = [
            Message(role=Role.ASSISTANT, text="~~~python\nprint(1)"),
            Message(role=Role.USER, text="Thanks"),
        ]
        markdown = assemble_markdown(messages)
        blocks = find_code_blocks(markdown)
        assert len(blocks) == 1
        assert blocks[0].terminated
        assert blocks[0].fence == "~~~"
        assert "## User" not in blocks[0].body
        assert markdown.endswith("## User\n\nThanks\n\n")

    def test_trailing_newlines_trimmed(self):
        markdown = assemble_markdown([Message(role=Role.USER, text="a\n\n\n")])
        assert markdown == "## User\n\na\n\n"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
