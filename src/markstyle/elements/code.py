"""Inline code element (`` `code` ``)."""

import re

from markstyle.elements.base import DelimitedElement, derive_font
from markstyle.elements.escaping import CODE_SPAN_PATTERN, is_code_span, unescape_markers
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey, Color, Font

CODE_COLOR = Color.from_hex("#c7254e")
CODE_BACKGROUND = Color.from_hex("#f9f2f4")
CODE_FONT_FAMILY = "monospace"


class CodeElement(DelimitedElement):
    """Resolve inline code spans protected by CodeEscapingElement.

    Runs after every formatting element. The escaped content is decoded,
    the backticks are removed and the span gets a monospace font (keeping
    size and style flags) plus the code colors.
    """

    def __init__(
        self,
        font: Font = Font(),
        family: str = CODE_FONT_FAMILY,
        color: Color = CODE_COLOR,
        background: Color = CODE_BACKGROUND,
    ) -> None:
        self.font = font
        self.family = family
        self.color = color
        self.background = background

    @property
    def regex(self) -> re.Pattern[str]:
        return CODE_SPAN_PATTERN

    def accepts(self, match: re.Match[str], buffer: StyledTextBuffer) -> bool:
        # Only spans protected by CodeEscapingElement are code
        return is_code_span(match) and buffer.has_attribute(
            AttributeKey.ESCAPED, *match.span("content")
        )

    def format_text(self, buffer: StyledTextBuffer, start: int, end: int) -> int:
        content = unescape_markers(buffer.text[start:end])
        buffer.replace_text(start, end, content)
        return start + len(content)

    def add_attributes(
        self,
        buffer: StyledTextBuffer,
        start: int,
        end: int,
        match: re.Match[str],
    ) -> None:
        buffer.remove_attribute(AttributeKey.ESCAPED, start, end)
        derive_font(
            buffer,
            start,
            end,
            self.font,
            lambda font: font.with_family(self.family),
        )
        buffer.apply_attribute(AttributeKey.COLOR, self.color, start, end)
        buffer.apply_attribute(AttributeKey.BACKGROUND, self.background, start, end)
