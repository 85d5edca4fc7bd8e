"""Abstract base classes for markdown elements."""

import re
from abc import ABC, abstractmethod
from typing import Callable

from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey, Font


class MarkdownElement(ABC):
    """Abstract base class for markdown elements.

    An element recognizes one markup construct and rewrites a
    StyledTextBuffer in place: it strips its own delimiters and styles the
    remaining text. Because delimiters are consumed, parsing the same buffer
    twice must not change it again. Malformed markup is left as plain text.
    """

    @abstractmethod
    def parse(self, buffer: StyledTextBuffer) -> None:
        """Apply this element to the buffer.

        Args:
            buffer: The buffer to rewrite in place
        """
        ...


class RegexElement(MarkdownElement):
    """Element driven by a regular expression.

    Matches are collected on the current text and handled from last to
    first, so handling one match never moves the offsets of the ones
    still pending.
    """

    @property
    @abstractmethod
    def regex(self) -> re.Pattern[str]:
        """Return the compiled pattern this element looks for."""
        ...

    def parse(self, buffer: StyledTextBuffer) -> None:
        for match in reversed(list(self.regex.finditer(buffer.text))):
            if self.accepts(match, buffer):
                self.match(match, buffer)

    def accepts(self, match: re.Match[str], buffer: StyledTextBuffer) -> bool:
        """Decide whether a raw match should be handled.

        Default implementation accepts every match.
        """
        return True

    @abstractmethod
    def match(self, match: re.Match[str], buffer: StyledTextBuffer) -> None:
        """Rewrite the buffer for a single match."""
        ...


class DelimitedElement(RegexElement):
    """Element for text wrapped in opening and closing delimiters.

    The pattern must define the named groups ``open``, ``content`` and
    ``close``, with ``close`` directly following ``content``.
    """

    def match(self, match: re.Match[str], buffer: StyledTextBuffer) -> None:
        open_start, open_end = match.span("open")
        content_start, content_end = match.span("content")
        close_length = len(match.group("close"))

        content_end = self.format_text(buffer, content_start, content_end)
        buffer.delete_text(content_end, content_end + close_length)
        buffer.delete_text(open_start, open_end)

        shift = open_end - open_start
        self.add_attributes(buffer, content_start - shift, content_end - shift, match)

    def format_text(self, buffer: StyledTextBuffer, start: int, end: int) -> int:
        """Rewrite the content span before the delimiters are removed.

        Default implementation leaves the content alone.

        Returns:
            The end offset of the (possibly rewritten) content
        """
        return end

    @abstractmethod
    def add_attributes(
        self,
        buffer: StyledTextBuffer,
        start: int,
        end: int,
        match: re.Match[str],
    ) -> None:
        """Style the content span once its delimiters are gone."""
        ...


class LevelElement(RegexElement):
    """Element for line prefixes whose repetition gives a nesting level.

    The pattern must define the named groups ``level`` (the repeated
    marker) and ``content`` (the rest of the line).
    """

    def __init__(self, max_level: int = 6) -> None:
        self.max_level = max_level

    def match(self, match: re.Match[str], buffer: StyledTextBuffer) -> None:
        level = len(match.group("level"))
        prefix_start = match.start("level")
        content_start, content_end = match.span("content")

        prefix = self.format_prefix(level)
        buffer.replace_text(prefix_start, content_start, prefix)

        shift = len(prefix) - (content_start - prefix_start)
        self.add_attributes(
            buffer, content_start + shift, content_end + shift, level
        )

    def format_prefix(self, level: int) -> str:
        """Return the text that replaces the level marker."""
        return ""

    def add_attributes(
        self, buffer: StyledTextBuffer, start: int, end: int, level: int
    ) -> None:
        """Style the line content. Default implementation does nothing."""
        pass


def derive_font(
    buffer: StyledTextBuffer,
    start: int,
    end: int,
    fallback: Font,
    transform: Callable[[Font], Font],
) -> None:
    """Rewrite the font over a span, keeping whatever the span already had.

    Characters without a font first get ``fallback``, then every font in
    the span is replaced by ``transform(font)``. This lets bold text inside
    a header keep the header size, and lets bold and italic combine.
    """
    position = start
    for font_range in buffer.query(start, end, AttributeKey.FONT):
        if font_range.start > position:
            buffer.apply_attribute(AttributeKey.FONT, fallback, position, font_range.start)
        position = max(position, font_range.end)
    if position < end:
        buffer.apply_attribute(AttributeKey.FONT, fallback, position, end)

    buffer.update_attribute(AttributeKey.FONT, start, end, transform)
