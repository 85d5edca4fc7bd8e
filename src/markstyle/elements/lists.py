"""List element (``- item``, ``* item``, ``+ item``)."""

import re
from typing import Optional

from markstyle.elements.base import LevelElement
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey, Color, Font


class ListElement(LevelElement):
    """Replace list markers with an indented bullet.

    Repeating the marker nests the item: ``-- item`` is a second level item
    and is indented by one ``indent`` more than ``- item``.
    """

    def __init__(
        self,
        font: Font = Font(),
        color: Optional[Color] = None,
        max_level: int = 6,
        indicator: str = "•",
        indent: str = "  ",
    ) -> None:
        super().__init__(max_level=max_level)
        self.font = font
        self.color = color
        self.indicator = indicator
        self.indent = indent
        self._regex = re.compile(
            rf"^(?P<level>[*+\-]{{1,{max_level}}})[ \t]+(?P<content>.+)$",
            re.MULTILINE,
        )

    @property
    def regex(self) -> re.Pattern[str]:
        return self._regex

    def format_prefix(self, level: int) -> str:
        return f"{self.indent * (level - 1)}{self.indicator} "

    def add_attributes(
        self, buffer: StyledTextBuffer, start: int, end: int, level: int
    ) -> None:
        if self.color is not None:
            buffer.apply_attribute(AttributeKey.COLOR, self.color, start, end)
