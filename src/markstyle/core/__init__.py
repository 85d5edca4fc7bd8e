"""Core parsing pipeline for markstyle."""

from markstyle.core.registry import ElementRegistry
from markstyle.core.parser import MarkdownParser

__all__ = [
    "ElementRegistry",
    "MarkdownParser",
]
