"""Tests for configuration management."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from markstyle import config
from markstyle.config import Settings, get_settings, load_settings
from markstyle.elements.code import CodeElement
from markstyle.formatting.ir import Color, Font


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self, settings: Settings):
        """Test the built-in defaults."""
        assert settings.font_family == "system"
        assert settings.font_size == 12.0
        assert settings.color == "#000000"
        assert settings.link_color == "#0000ee"
        assert settings.code_font_family == "monospace"
        assert settings.automatic_link_detection is True

    def test_default_font_and_color(self, settings: Settings):
        """Test the derived Font and Color."""
        assert settings.default_font == Font(family="system", size=12.0)
        assert settings.default_color == Color(0, 0, 0)

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch):
        """Test that MARKSTYLE_* variables override defaults."""
        monkeypatch.setenv("MARKSTYLE_FONT_SIZE", "14")
        monkeypatch.setenv("MARKSTYLE_COLOR", "#333333")
        monkeypatch.setenv("MARKSTYLE_AUTOMATIC_LINKS", "false")

        settings = Settings(_env_file=None)

        assert settings.font_size == 14.0
        assert settings.default_color == Color(51, 51, 51)
        assert settings.automatic_link_detection is False

    def test_code_defaults_match_element(self, settings: Settings):
        """Test that settings and CodeElement share their defaults."""
        element = CodeElement()

        assert settings.code_font_family == element.family
        assert Color.from_hex(settings.code_color) == element.color
        assert Color.from_hex(settings.code_background) == element.background

    def test_invalid_hex_color(self):
        """Test that malformed colors are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, link_color="blue")

    def test_non_positive_font_size(self):
        """Test that the font size must be positive."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, font_size=0)


class TestGlobalSettings:
    """Tests for the cached global settings."""

    def test_get_settings_is_cached(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_reset_rereads_environment(self, monkeypatch: pytest.MonkeyPatch):
        """Test that reset_settings picks up new environment values."""
        assert get_settings().font_family == "system"

        monkeypatch.setenv("MARKSTYLE_FONT_FAMILY", "serif")
        config.reset_settings()

        assert get_settings().font_family == "serif"

    def test_load_settings_from_env_file(self, tmp_path: Path):
        """Test loading a specific .env file."""
        env_file = tmp_path / "custom.env"
        env_file.write_text(
            "MARKSTYLE_CODE_FONT_FAMILY=Fira Code\nMARKSTYLE_CODE_COLOR=\"#112233\"\n",
            encoding="utf-8",
        )

        settings = load_settings(env_file)

        assert settings.code_font_family == "Fira Code"
        assert settings.code_color == "#112233"
        assert get_settings() is settings
