"""Link elements: explicit ``[text](url)`` links and bare URLs."""

import re

from markstyle.elements.base import DelimitedElement, RegexElement
from markstyle.elements.escaping import unescape_markers
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import LINK_BLUE, AttributeKey, Color, Font


class LinkElement(DelimitedElement):
    """Resolve ``[text](url)`` into ``text`` carrying a link attribute."""

    PATTERN = re.compile(
        r"(?P<open>\[)(?P<content>[^\[\]\n]+)(?P<close>\]\((?P<url>[^()\s]+)\))"
    )

    def __init__(self, font: Font = Font(), color: Color = LINK_BLUE) -> None:
        self.font = font
        self.color = color

    @property
    def regex(self) -> re.Pattern[str]:
        return self.PATTERN

    def add_attributes(
        self,
        buffer: StyledTextBuffer,
        start: int,
        end: int,
        match: re.Match[str],
    ) -> None:
        # Escaped characters in the URL are still markers at this point
        url = unescape_markers(match.group("url"))
        buffer.apply_attribute(AttributeKey.LINK, url, start, end)
        buffer.apply_attribute(AttributeKey.COLOR, self.color, start, end)


class AutomaticLinkElement(RegexElement):
    """Detect bare ``http(s)://`` and ``www.`` URLs and link them in place.

    The text is left unchanged. Trailing punctuation and emphasis delimiters
    are not part of the URL, so ``**https://example.com**`` links the URL
    and leaves the asterisks to the bold element.
    """

    # A URL may start right after an escape marker, an underscore or any
    # non-word character other than a path or address separator
    PATTERN = re.compile(
        r"(?:(?<=\\[0-9a-f]{4})|(?<![^\W_]|[/.@]))"
        r"(?:https?://|www\.)"
        r"(?:[^\s<>\"'`\\]|\\[0-9a-f]{4})+",
        re.IGNORECASE,
    )
    TRAILING = ".,;:!?*_~)]}'\""

    def __init__(self, font: Font = Font(), color: Color = LINK_BLUE) -> None:
        self.font = font
        self.color = color

    @property
    def regex(self) -> re.Pattern[str]:
        return self.PATTERN

    def match(self, match: re.Match[str], buffer: StyledTextBuffer) -> None:
        url = match.group(0).rstrip(self.TRAILING)
        start = match.start()
        end = start + len(url)
        # Escaped characters in the URL are still markers at this point
        url = unescape_markers(url)
        if "." not in url.split("//", 1)[-1] or buffer.has_attribute(
            AttributeKey.LINK, start, end
        ):
            return

        target = url if "://" in url else f"http://{url}"
        buffer.apply_attribute(AttributeKey.LINK, target, start, end)
        buffer.apply_attribute(AttributeKey.COLOR, self.color, start, end)
