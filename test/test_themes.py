#!/usr/bin/env python3
"""Tests for themes.py - color theme tables."""

import dataclasses

import pytest

from claude_code_pdf.themes import (
    DEFAULT_THEME_NAME,
    THEME_ENV_VAR,
    Base16OceanDarkStyle,
    UnknownThemeError,
    get_theme,
    load_theme,
)


class TestLoadTheme:
    def test_default_theme(self):
        theme = load_theme(DEFAULT_THEME_NAME)
        assert theme.name == "base16-ocean.dark"
        assert theme.version == "1"
        assert theme.style is Base16OceanDarkStyle
        assert theme.code_background == "#2b303b"
        assert theme.code_foreground == "#c0c5ce"

    def test_highlight_css_scoped(self):
        css = load_theme(DEFAULT_THEME_NAME).highlight_css
        assert ".highlight .k " in css  # keywords
        assert "#b48ead" in css.lower()

    def test_highlight_css_has_no_unscoped_rules(self):
        css = load_theme(DEFAULT_THEME_NAME).highlight_css
        rules = [line for line in css.splitlines() if "{" in line]
        assert rules
        assert all(line.startswith(".highlight") for line in rules)
        assert "line-height" not in css

    def test_pygments_style(self):
        theme = load_theme("monokai")
        assert theme.name == "monokai"
        assert theme.version.startswith("pygments-")
        assert ".highlight" in theme.highlight_css

    def test_unknown_theme(self):
        with pytest.raises(UnknownThemeError):
            load_theme("no-such-theme")

    def test_loaded_once(self):
        assert load_theme(DEFAULT_THEME_NAME) is load_theme(DEFAULT_THEME_NAME)

    def test_immutable(self):
        theme = load_theme(DEFAULT_THEME_NAME)
        with pytest.raises(dataclasses.FrozenInstanceError):
            theme.name = "other"  # type: ignore[misc]


class TestGetTheme:
    def test_explicit_name_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(THEME_ENV_VAR, "monokai")
        assert get_theme("base16-ocean.dark").name == "base16-ocean.dark"

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(THEME_ENV_VAR, "monokai")
        assert get_theme().name == "monokai"

    def test_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv(THEME_ENV_VAR, raising=False)
        assert get_theme().name == DEFAULT_THEME_NAME


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
