"""Quote element (``> quoted text``)."""

import re
from typing import Optional

from markstyle.elements.base import LevelElement, derive_font
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey, Color, Font, TextStyle


class QuoteElement(LevelElement):
    """Replace ``>`` markers with indentation and italicize the quote."""

    def __init__(
        self,
        font: Font = Font(),
        color: Optional[Color] = None,
        max_level: int = 6,
        indent: str = "  ",
    ) -> None:
        super().__init__(max_level=max_level)
        self.font = font
        self.color = color
        self.indent = indent
        self._regex = re.compile(
            rf"^(?P<level>>{{1,{max_level}}})[ \t]*(?P<content>.+)$",
            re.MULTILINE,
        )

    @property
    def regex(self) -> re.Pattern[str]:
        return self._regex

    def format_prefix(self, level: int) -> str:
        return self.indent * level

    def add_attributes(
        self, buffer: StyledTextBuffer, start: int, end: int, level: int
    ) -> None:
        derive_font(
            buffer, start, end, self.font, lambda font: font.with_style(TextStyle.ITALIC)
        )
        if self.color is not None:
            buffer.apply_attribute(AttributeKey.COLOR, self.color, start, end)
