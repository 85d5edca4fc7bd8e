"""Intermediate Representation for styled text.

This module defines the value types that live inside a styled text buffer:
fonts, colors, attribute keys and attribute ranges. Elements write them,
exporters and renderers read them.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, Flag, auto
from typing import Any, Optional


class TextStyle(Flag):
    """Text styling flags (combinable with |)."""

    NONE = 0
    BOLD = auto()
    ITALIC = auto()


class AttributeKey(str, Enum):
    """Well-known attribute keys.

    Custom elements may use any other string as a key.
    """

    FONT = "font"
    COLOR = "color"
    BACKGROUND = "background"
    LINK = "link"
    # Marks inline code content that escaping must not touch
    ESCAPED = "escaped"


@dataclass(frozen=True)
class Font:
    """A font descriptor.

    Attributes:
        family: Font family name ("system", "monospace", ...)
        size: Point size
        style: Combined style flags (BOLD, ITALIC, or both)
    """

    family: str = "system"
    size: float = 12.0
    style: TextStyle = TextStyle.NONE

    @property
    def bold(self) -> bool:
        """Check if this font is bold."""
        return TextStyle.BOLD in self.style

    @property
    def italic(self) -> bool:
        """Check if this font is italic."""
        return TextStyle.ITALIC in self.style

    def with_style(self, style: TextStyle) -> "Font":
        """Return a copy with ``style`` added to the current flags."""
        return replace(self, style=self.style | style)

    def with_size(self, size: float) -> "Font":
        return replace(self, size=size)

    def with_family(self, family: str) -> "Font":
        return replace(self, family=family)


@dataclass(frozen=True)
class Color:
    """An RGBA color with 0-255 channels and a 0-1 alpha."""

    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#rrggbb`` (or ``rrggbb``) into a Color."""
        digits = value.strip().lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError as e:
            raise ValueError(f"Invalid hex color: {value!r}") from e
        return cls(red, green, blue)

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def __str__(self) -> str:
        return self.hex


BLACK = Color(0, 0, 0)
LINK_BLUE = Color(0, 0, 238)


@dataclass
class AttributeRange:
    """A half-open ``[start, end)`` span carrying one attribute.

    Attributes:
        start: Offset of the first styled character
        end: Offset one past the last styled character
        key: Attribute key (an AttributeKey or a custom string)
        value: Attribute value (Font, Color, URL string, ...)
    """

    start: int
    end: int
    key: str
    value: Any

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, start: int, end: int) -> bool:
        """Check if this range shares at least one character with ``[start, end)``."""
        return self.start < end and start < self.end


@dataclass
class TextRun:
    """A contiguous run of text with identical attributes.

    Attributes:
        text: The text content
        attributes: Mapping of attribute key to value for the whole run
    """

    text: str
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def font(self) -> Optional[Font]:
        return self.attributes.get(AttributeKey.FONT)

    @property
    def link(self) -> Optional[str]:
        return self.attributes.get(AttributeKey.LINK)

    @property
    def bold(self) -> bool:
        """Check if this run is bold."""
        return self.font is not None and self.font.bold

    @property
    def italic(self) -> bool:
        """Check if this run is italic."""
        return self.font is not None and self.font.italic

    def __str__(self) -> str:
        return self.text
