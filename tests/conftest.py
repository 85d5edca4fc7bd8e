"""Pytest fixtures for markstyle tests."""

import pytest
from pathlib import Path

from markstyle import config
from markstyle.config import Settings
from markstyle.core.parser import MarkdownParser


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's environment out of every test."""
    for name in [
        "MARKSTYLE_FONT_FAMILY",
        "MARKSTYLE_FONT_SIZE",
        "MARKSTYLE_COLOR",
        "MARKSTYLE_LINK_COLOR",
        "MARKSTYLE_CODE_FONT_FAMILY",
        "MARKSTYLE_CODE_COLOR",
        "MARKSTYLE_CODE_BACKGROUND",
        "MARKSTYLE_AUTOMATIC_LINKS",
    ]:
        monkeypatch.delenv(name, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def parser(settings: Settings) -> MarkdownParser:
    """Create a parser with default settings."""
    return MarkdownParser(settings=settings)


@pytest.fixture
def sample_markdown() -> str:
    """Sample document touching every built-in element."""
    return (
        "# Release notes\n"
        "- **Faster** parsing\n"
        "- Fixed `*ptr` handling\n"
        "> Quoted *remark*\n"
        "See [the docs](https://example.com/docs) or https://example.org.\n"
        "Literal \\*stars\\* stay."
    )


@pytest.fixture
def tmp_markdown_file(tmp_path: Path, sample_markdown: str) -> Path:
    """Create a temporary markdown file for testing."""
    file_path = tmp_path / "notes.md"
    file_path.write_text(sample_markdown, encoding="utf-8")
    return file_path
