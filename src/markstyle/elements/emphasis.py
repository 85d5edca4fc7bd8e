"""Emphasis elements: ``**bold**`` / ``__bold__`` and ``*italic*`` / ``_italic_``."""

import re

from markstyle.elements.base import DelimitedElement, derive_font
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import Font, TextStyle


def _is_word(char: str) -> bool:
    return char.isalnum() or char == "_"


class EmphasisElement(DelimitedElement):
    """Add a style flag to the font of delimited text.

    Underscore delimiters only count at word boundaries, so identifiers
    such as ``snake_case_name`` are left alone.
    """

    style: TextStyle = TextStyle.NONE

    def __init__(self, font: Font = Font()) -> None:
        self.font = font

    def parse(self, buffer: StyledTextBuffer) -> None:
        # Nested spans with the same delimiter (``*a *b* c*``) resolve one
        # level per pass; every accepted match shortens the text
        while True:
            length = len(buffer)
            super().parse(buffer)
            if len(buffer) == length:
                break

    def accepts(self, match: re.Match[str], buffer: StyledTextBuffer) -> bool:
        if not match.group("open").startswith("_"):
            return True
        text = buffer.text
        before = text[match.start() - 1] if match.start() > 0 else ""
        after = text[match.end()] if match.end() < len(text) else ""
        return not (_is_word(before) or _is_word(after))

    def add_attributes(
        self,
        buffer: StyledTextBuffer,
        start: int,
        end: int,
        match: re.Match[str],
    ) -> None:
        derive_font(
            buffer, start, end, self.font, lambda font: font.with_style(self.style)
        )


class BoldElement(EmphasisElement):
    """Bold text wrapped in ``**`` or ``__``."""

    PATTERN = re.compile(
        r"(?P<open>\*\*|__)(?=\S)(?P<content>.+?)(?<=\S)(?P<close>(?P=open))"
    )
    style = TextStyle.BOLD

    @property
    def regex(self) -> re.Pattern[str]:
        return self.PATTERN


class ItalicElement(EmphasisElement):
    """Italic text wrapped in ``*`` or ``_``."""

    PATTERN = re.compile(
        r"(?P<open>[*_])(?=\S)(?P<content>.+?)(?<![\s*_])(?P<close>(?P=open))"
    )
    style = TextStyle.ITALIC

    @property
    def regex(self) -> re.Pattern[str]:
        return self.PATTERN
