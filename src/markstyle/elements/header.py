"""Header element (``# Title`` .. ``###### Title``)."""

import re
from dataclasses import replace
from typing import Optional

from markstyle.elements.base import LevelElement, derive_font
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey, Color, Font, TextStyle


class HeaderElement(LevelElement):
    """Strip leading ``#`` markers and enlarge the header text.

    Level 1 is the largest: the font grows by ``font_increase`` points for
    every level below ``max_level + 1``, and header text is bold.
    """

    def __init__(
        self,
        font: Font = Font(),
        color: Optional[Color] = None,
        max_level: int = 6,
        font_increase: float = 2,
    ) -> None:
        super().__init__(max_level=max_level)
        self.font = font
        self.color = color
        self.font_increase = font_increase
        self._regex = re.compile(
            rf"^(?P<level>#{{1,{max_level}}})(?!#)[ \t]*(?P<content>\S.*?)[ \t]*$",
            re.MULTILINE,
        )

    @property
    def regex(self) -> re.Pattern[str]:
        return self._regex

    def font_size(self, base_size: float, level: int) -> float:
        """Get the header size for a level, given the surrounding font size."""
        return base_size + self.font_increase * (self.max_level + 1 - level)

    def add_attributes(
        self, buffer: StyledTextBuffer, start: int, end: int, level: int
    ) -> None:
        derive_font(
            buffer,
            start,
            end,
            self.font,
            lambda font: replace(
                font,
                size=self.font_size(font.size, level),
                style=font.style | TextStyle.BOLD,
            ),
        )
        if self.color is not None:
            buffer.apply_attribute(AttributeKey.COLOR, self.color, start, end)
