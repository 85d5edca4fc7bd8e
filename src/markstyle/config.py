"""Configuration management for markstyle."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from markstyle.elements.code import CODE_BACKGROUND, CODE_COLOR, CODE_FONT_FAMILY
from markstyle.formatting.ir import BLACK, LINK_BLUE, Color, Font


class Settings(BaseSettings):
    """Parser defaults via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Base style applied to the whole text before any element runs
    font_family: str = Field(default="system", alias="MARKSTYLE_FONT_FAMILY")
    font_size: float = Field(default=12.0, gt=0, alias="MARKSTYLE_FONT_SIZE")
    color: str = Field(default=BLACK.hex, alias="MARKSTYLE_COLOR")

    # Element styling
    link_color: str = Field(default=LINK_BLUE.hex, alias="MARKSTYLE_LINK_COLOR")
    code_font_family: str = Field(
        default=CODE_FONT_FAMILY,
        alias="MARKSTYLE_CODE_FONT_FAMILY",
    )
    code_color: str = Field(default=CODE_COLOR.hex, alias="MARKSTYLE_CODE_COLOR")
    code_background: str = Field(
        default=CODE_BACKGROUND.hex,
        alias="MARKSTYLE_CODE_BACKGROUND",
    )

    automatic_link_detection: bool = Field(
        default=True,
        alias="MARKSTYLE_AUTOMATIC_LINKS",
    )

    @field_validator("color", "link_color", "code_color", "code_background")
    @classmethod
    def _validate_hex(cls, value: str) -> str:
        Color.from_hex(value)
        return value

    @property
    def default_font(self) -> Font:
        return Font(family=self.font_family, size=self.font_size)

    @property
    def default_color(self) -> Color:
        return Color.from_hex(self.color)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings
    _settings = None
