"""markstyle - convert lightweight markdown into styled text."""

__version__ = "0.1.0"

from markstyle.core.parser import MarkdownParser
from markstyle.formatting.buffer import RangeError, StyledTextBuffer
from markstyle.elements.base import MarkdownElement

__all__ = [
    "__version__",
    "MarkdownParser",
    "StyledTextBuffer",
    "RangeError",
    "MarkdownElement",
]
