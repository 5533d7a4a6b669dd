#!/usr/bin/env python3
"""Tests for timing utilities."""

import importlib
import logging

import pytest

import claude_code_pdf.timings as timings


@pytest.fixture
def timing_enabled(monkeypatch: pytest.MonkeyPatch):
    """Reload the timings module with timing turned on."""
    monkeypatch.setenv("CLAUDE_CODE_PDF_DEBUG_TIMING", "1")
    importlib.reload(timings)
    yield timings
    monkeypatch.delenv("CLAUDE_CODE_PDF_DEBUG_TIMING")
    importlib.reload(timings)


class TestDebugTimingFlag:
    """Tests for the CLAUDE_CODE_PDF_DEBUG_TIMING environment variable."""

    @pytest.mark.parametrize("value", ["1", "true", "yes", "TRUE"])
    def test_enabled_values(self, monkeypatch: pytest.MonkeyPatch, value):
        monkeypatch.setenv("CLAUDE_CODE_PDF_DEBUG_TIMING", value)
        importlib.reload(timings)
        assert timings.DEBUG_TIMING is True
        monkeypatch.delenv("CLAUDE_CODE_PDF_DEBUG_TIMING")
        importlib.reload(timings)

    def test_disabled_value(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CLAUDE_CODE_PDF_DEBUG_TIMING", "0")
        importlib.reload(timings)
        assert timings.DEBUG_TIMING is False


class TestTimingHelpers:
    def test_disabled_is_noop(self, monkeypatch: pytest.MonkeyPatch, caplog):
        monkeypatch.delenv("CLAUDE_CODE_PDF_DEBUG_TIMING", raising=False)
        importlib.reload(timings)
        with caplog.at_level(logging.INFO, logger="claude_code_pdf.timings"):
            with timings.log_timing("phase"):
                pass
            with timings.timing_stat("pygments"):
                pass
            timings.report_timing_statistics()
        assert caplog.records == []

    def test_log_timing(self, timing_enabled, caplog):
        with caplog.at_level(logging.INFO, logger="claude_code_pdf.timings"):
            with timing_enabled.log_timing("Markdown rendering"):
                pass
        assert "[TIMING] Markdown rendering" in caplog.text

    def test_timing_stats_reported_and_reset(self, timing_enabled, caplog):
        with caplog.at_level(logging.INFO, logger="claude_code_pdf.timings"):
            for _ in range(3):
                with timing_enabled.timing_stat("pygments"):
                    pass
            timing_enabled.report_timing_statistics()
            assert "pygments: 3 operations" in caplog.text

            caplog.clear()
            timing_enabled.report_timing_statistics()
        assert caplog.text == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
