"""Escaping elements.

Escaped characters and inline code content are hidden from the formatting
elements by rewriting them as markers: a backslash followed by four
lowercase hex digits per UTF-16 code unit (``*`` becomes ``\\002a``). The
unescaping phase turns every surviving marker back into its character.
"""

import re

from markstyle.elements.base import RegexElement
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey

MARKER_PATTERN = re.compile(r"(?:\\[0-9a-f]{4})+")

# Shared with CodeElement so both agree on what a code span is. Escaped
# characters and unmatched backtick runs are consumed whole, so a span only
# opens on an unescaped run and never inside a longer one.
CODE_SPAN_PATTERN = re.compile(
    r"""
    \\.
    | (?P<open>`+)(?P<content>[^`].*?)(?<!`)(?P<close>(?P=open))(?!`)
    | `+
    """,
    re.VERBOSE,
)


def is_code_span(match: re.Match[str]) -> bool:
    """Check whether a CODE_SPAN_PATTERN match is a code span."""
    return match.group("open") is not None


def escape_utf16(text: str) -> str:
    """Encode every character of ``text`` as escape markers."""
    data = text.encode("utf-16-be", errors="surrogatepass")
    return "".join(
        "\\" + data[i : i + 2].hex() for i in range(0, len(data), 2)
    )


def unescape_utf16(markers: str) -> str:
    """Decode a run of escape markers produced by :func:`escape_utf16`."""
    data = bytes.fromhex(markers.replace("\\", ""))
    return data.decode("utf-16-be", errors="surrogatepass")


def unescape_markers(text: str) -> str:
    """Decode every marker run found inside ``text``."""
    return MARKER_PATTERN.sub(lambda m: unescape_utf16(m.group(0)), text)


class CodeEscapingElement(RegexElement):
    """Hide inline code content from every later element.

    The content is encoded as markers and flagged with the ``escaped``
    attribute so EscapingElement leaves it alone.
    """

    @property
    def regex(self) -> re.Pattern[str]:
        return CODE_SPAN_PATTERN

    def accepts(self, match: re.Match[str], buffer: StyledTextBuffer) -> bool:
        return is_code_span(match)

    def match(self, match: re.Match[str], buffer: StyledTextBuffer) -> None:
        start, end = match.span("content")
        escaped = escape_utf16(match.group("content"))
        buffer.replace_text(start, end, escaped)
        buffer.apply_attribute(AttributeKey.ESCAPED, True, start, start + len(escaped))


class EscapingElement(RegexElement):
    """Turn backslash-escaped characters into markers (``\\*`` -> ``\\002a``)."""

    PATTERN = re.compile(r"\\(?P<char>.)")

    @property
    def regex(self) -> re.Pattern[str]:
        return self.PATTERN

    def accepts(self, match: re.Match[str], buffer: StyledTextBuffer) -> bool:
        return not buffer.has_attribute(AttributeKey.ESCAPED, *match.span())

    def match(self, match: re.Match[str], buffer: StyledTextBuffer) -> None:
        start, end = match.span("char")
        # The backslash stays and becomes the first character of the marker
        buffer.replace_text(start, end, escape_utf16(match.group("char"))[1:])


class UnescapingElement(RegexElement):
    """Restore the characters behind any markers that are still in the text."""

    @property
    def regex(self) -> re.Pattern[str]:
        return MARKER_PATTERN

    def parse(self, buffer: StyledTextBuffer) -> None:
        super().parse(buffer)
        buffer.remove_attribute(AttributeKey.ESCAPED)

    def match(self, match: re.Match[str], buffer: StyledTextBuffer) -> None:
        buffer.replace_text(*match.span(), unescape_utf16(match.group(0)))
