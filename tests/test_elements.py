"""Tests for the built-in markdown elements, applied one at a time."""

import pytest

from markstyle.elements import (
    AutomaticLinkElement,
    BoldElement,
    CodeElement,
    CodeEscapingElement,
    EscapingElement,
    HeaderElement,
    ItalicElement,
    LinkElement,
    ListElement,
    QuoteElement,
    UnescapingElement,
)
from markstyle.elements.escaping import escape_utf16, unescape_markers, unescape_utf16
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey, Color, Font, TextStyle


BASE = Font(family="system", size=12)


def styled(text: str) -> StyledTextBuffer:
    """Create a buffer with the base font over the whole text."""
    buffer = StyledTextBuffer(text)
    buffer.apply_attribute(AttributeKey.FONT, BASE)
    return buffer


def font_at(buffer: StyledTextBuffer, index: int) -> Font:
    return buffer.attributes_at(index)[AttributeKey.FONT]


class TestEscapeHelpers:
    """Tests for the marker encoding."""

    def test_escape_ascii(self):
        """Test that each character becomes one four-digit marker."""
        assert escape_utf16("*") == "\\002a"
        assert escape_utf16("ab") == "\\0061\\0062"

    def test_escape_astral_uses_surrogates(self):
        """Test that characters outside the BMP become two markers."""
        assert escape_utf16("\U0001f600") == "\\d83d\\de00"

    def test_unescape_inverts_escape(self):
        """Test decoding a marker run."""
        assert unescape_utf16(escape_utf16("x\U0001f600y")) == "x\U0001f600y"

    def test_unescape_markers_leaves_other_text(self):
        """Test that only marker runs are decoded."""
        assert unescape_markers("a\\002ab\\005f") == "a*b_"


class TestEscapingPhase:
    """Tests for CodeEscapingElement, EscapingElement and UnescapingElement."""

    def test_escaping_replaces_escaped_char(self):
        """Test that \\* becomes a marker."""
        buffer = styled("a \\* b")
        EscapingElement().parse(buffer)

        assert buffer.text == "a \\002a b"

    def test_escaped_backslash(self):
        """Test that an escaped backslash does not escape the next char."""
        buffer = styled("\\\\*")
        EscapingElement().parse(buffer)

        assert buffer.text == "\\005c*"

    def test_trailing_backslash_untouched(self):
        """Test that a backslash with nothing after it stays."""
        buffer = styled("end\\")
        EscapingElement().parse(buffer)

        assert buffer.text == "end\\"

    def test_code_escaping_marks_content(self):
        """Test that code content is encoded and flagged."""
        buffer = styled("x `*a*` y")
        CodeEscapingElement().parse(buffer)

        assert buffer.text == "x `\\002a\\0061\\002a` y"
        escaped = buffer.query(key=AttributeKey.ESCAPED)
        assert [(r.start, r.end) for r in escaped] == [(3, 18)]

    def test_escaping_skips_code_content(self):
        """Test that markers inside code are not escaped a second time."""
        buffer = styled("`a` \\_")
        CodeEscapingElement().parse(buffer)
        EscapingElement().parse(buffer)

        assert buffer.text == "`\\0061` \\005f"

    def test_unescaping_restores_text(self):
        """Test that the unescaping element undoes EscapingElement."""
        buffer = styled("\\*keep\\* \\#")
        EscapingElement().parse(buffer)
        UnescapingElement().parse(buffer)

        assert buffer.text == "*keep* #"
        assert buffer.query(key=AttributeKey.ESCAPED) == []

    def test_unescaped_font_intact(self):
        """Test that the round trip keeps the font covering the text."""
        buffer = styled("\\*x")
        EscapingElement().parse(buffer)
        UnescapingElement().parse(buffer)

        assert [(r.start, r.end) for r in buffer.query(key="font")] == [(0, 2)]


class TestHeaderElement:
    """Tests for HeaderElement."""

    def test_header_strips_marker(self):
        """Test that the # marker and space are removed."""
        buffer = styled("# Title")
        HeaderElement(font=BASE).parse(buffer)

        assert buffer.text == "Title"

    def test_header_font_by_level(self):
        """Test that lower levels are smaller but all are bold."""
        element = HeaderElement(font=BASE)
        first = styled("# One")
        third = styled("### Three")
        element.parse(first)
        element.parse(third)

        assert font_at(first, 0) == Font(size=24, style=TextStyle.BOLD)
        assert font_at(third, 0) == Font(size=20, style=TextStyle.BOLD)

    def test_header_only_at_line_start(self):
        """Test that # in the middle of a line is left alone."""
        buffer = styled("issue # 4")
        HeaderElement(font=BASE).parse(buffer)

        assert buffer.text == "issue # 4"

    def test_too_many_markers_is_not_header(self):
        """Test that seven # markers exceed the maximum level."""
        buffer = styled("####### Seven")
        HeaderElement(font=BASE).parse(buffer)

        assert buffer.text == "####### Seven"

    def test_header_on_second_line(self):
        """Test that only the header line is styled."""
        buffer = styled("intro\n## Part")
        HeaderElement(font=BASE).parse(buffer)

        assert buffer.text == "intro\nPart"
        assert font_at(buffer, 0) == BASE
        assert font_at(buffer, 6).size == 22

    def test_header_color(self):
        """Test the optional header color."""
        red = Color(255, 0, 0)
        buffer = styled("# Red")
        HeaderElement(font=BASE, color=red).parse(buffer)

        assert buffer.attributes_at(0)[AttributeKey.COLOR] == red


class TestListElement:
    """Tests for ListElement."""

    @pytest.mark.parametrize("marker", ["-", "*", "+"])
    def test_markers_become_bullets(self, marker: str):
        """Test each list marker."""
        buffer = styled(f"{marker} item")
        ListElement(font=BASE).parse(buffer)

        assert buffer.text == "• item"

    def test_nested_level_is_indented(self):
        """Test that repeated markers indent the item."""
        buffer = styled("-- nested")
        ListElement(font=BASE).parse(buffer)

        assert buffer.text == "  • nested"

    def test_marker_needs_space(self):
        """Test that -word is not a list item."""
        buffer = styled("-word")
        ListElement(font=BASE).parse(buffer)

        assert buffer.text == "-word"

    def test_bold_at_line_start_is_not_list(self):
        """Test that **bold** at the start of a line is left for BoldElement."""
        buffer = styled("**bold** text")
        ListElement(font=BASE).parse(buffer)

        assert buffer.text == "**bold** text"

    def test_custom_indicator(self):
        """Test configuring the bullet."""
        buffer = styled("- item")
        ListElement(font=BASE, indicator="◦").parse(buffer)

        assert buffer.text == "◦ item"


class TestQuoteElement:
    """Tests for QuoteElement."""

    def test_quote_indented_and_italic(self):
        """Test that > becomes indentation and the text is italic."""
        buffer = styled("> wise words")
        QuoteElement(font=BASE).parse(buffer)

        assert buffer.text == "  wise words"
        assert font_at(buffer, 2).italic is True

    def test_nested_quote(self):
        """Test that >> indents twice."""
        buffer = styled(">> deeper")
        QuoteElement(font=BASE).parse(buffer)

        assert buffer.text == "    deeper"


class TestLinkElement:
    """Tests for LinkElement."""

    def test_link_resolved(self):
        """Test that [text](url) becomes linked text."""
        buffer = styled("see [docs](https://example.com) now")
        LinkElement(font=BASE).parse(buffer)

        assert buffer.text == "see docs now"
        links = buffer.query(key=AttributeKey.LINK)
        assert [(r.start, r.end, r.value) for r in links] == [
            (4, 8, "https://example.com")
        ]

    def test_link_color(self):
        """Test that link text gets the link color."""
        blue = Color(0, 0, 200)
        buffer = styled("[a](b)")
        LinkElement(font=BASE, color=blue).parse(buffer)

        assert buffer.attributes_at(0)[AttributeKey.COLOR] == blue

    def test_unbalanced_link_untouched(self):
        """Test that malformed links stay plain text."""
        for text in ["[docs](https://example.com", "[docs https://x.com)", "[](x)"]:
            buffer = styled(text)
            LinkElement(font=BASE).parse(buffer)

            assert buffer.text == text
            assert buffer.query(key=AttributeKey.LINK) == []

    def test_escaped_chars_in_url_restored(self):
        """Test that markers in the URL are decoded in the link target."""
        buffer = styled("[x](https://example.com/a\\_b)")
        EscapingElement().parse(buffer)
        LinkElement(font=BASE).parse(buffer)

        assert buffer.query(key="link")[0].value == "https://example.com/a_b"


class TestAutomaticLinkElement:
    """Tests for AutomaticLinkElement."""

    def test_bare_url_linked_in_place(self):
        """Test that the URL text is kept and linked."""
        buffer = styled("Visit https://example.com today")
        AutomaticLinkElement(font=BASE).parse(buffer)

        assert buffer.text == "Visit https://example.com today"
        links = buffer.query(key=AttributeKey.LINK)
        assert [(r.start, r.end, r.value) for r in links] == [
            (6, 25, "https://example.com")
        ]

    def test_trailing_punctuation_excluded(self):
        """Test that sentence punctuation is not part of the URL."""
        buffer = styled("Go to https://example.com/path.")
        AutomaticLinkElement(font=BASE).parse(buffer)

        assert buffer.query(key="link")[0].value == "https://example.com/path"

    def test_www_gets_scheme(self):
        """Test that www. URLs link to http://."""
        buffer = styled("www.example.com")
        AutomaticLinkElement(font=BASE).parse(buffer)

        assert buffer.query(key="link")[0].value == "http://www.example.com"

    def test_existing_link_not_relinked(self):
        """Test that text already linked keeps its target."""
        buffer = styled("https://example.com")
        buffer.apply_attribute(AttributeKey.LINK, "https://other.org")
        AutomaticLinkElement(font=BASE).parse(buffer)

        assert buffer.query(key="link")[0].value == "https://other.org"

    def test_emphasis_delimiters_excluded(self):
        """Test that ** around a URL stays outside the link."""
        buffer = styled("**https://example.com**")
        AutomaticLinkElement(font=BASE).parse(buffer)

        link = buffer.query(key="link")[0]
        assert (link.start, link.end) == (2, 21)


class TestEmphasisElements:
    """Tests for BoldElement and ItalicElement."""

    def test_bold(self):
        """Test that **text** becomes bold text."""
        buffer = styled("a **b** c")
        BoldElement(font=BASE).parse(buffer)

        assert buffer.text == "a b c"
        assert font_at(buffer, 2).bold is True
        assert font_at(buffer, 0).bold is False

    def test_bold_underscores(self):
        """Test the __text__ form."""
        buffer = styled("__b__")
        BoldElement(font=BASE).parse(buffer)

        assert buffer.text == "b"
        assert font_at(buffer, 0).bold is True

    def test_italic(self):
        """Test that *text* and _text_ become italic."""
        for text in ["*i*", "_i_"]:
            buffer = styled(text)
            ItalicElement(font=BASE).parse(buffer)

            assert buffer.text == "i"
            assert font_at(buffer, 0).italic is True

    def test_bold_italic_combine(self):
        """Test that ***text*** is both bold and italic."""
        buffer = styled("***both***")
        BoldElement(font=BASE).parse(buffer)
        ItalicElement(font=BASE).parse(buffer)

        assert buffer.text == "both"
        assert font_at(buffer, 0).style == TextStyle.BOLD | TextStyle.ITALIC

    def test_bold_keeps_header_size(self):
        """Test that emphasis derives from the existing font."""
        buffer = StyledTextBuffer("**x**")
        buffer.apply_attribute(AttributeKey.FONT, Font(size=24))
        BoldElement(font=BASE).parse(buffer)

        assert font_at(buffer, 0) == Font(size=24, style=TextStyle.BOLD)

    def test_unstyled_buffer_uses_element_font(self):
        """Test that text without a font gets the element font."""
        buffer = StyledTextBuffer("*x*")
        ItalicElement(font=Font(size=9)).parse(buffer)

        assert font_at(buffer, 0) == Font(size=9, style=TextStyle.ITALIC)

    def test_unbalanced_delimiters_untouched(self):
        """Test that unmatched delimiters stay plain text."""
        for text in ["**open", "*open", "a * b * c", "** spaced **"]:
            buffer = styled(text)
            BoldElement(font=BASE).parse(buffer)
            ItalicElement(font=BASE).parse(buffer)

            assert buffer.text == text

    def test_nested_same_delimiter(self):
        """Test that nested spans with one delimiter resolve in one parse."""
        for text, expected in [
            ("*a *b* c*", "a b c"),
            ("_a _b_ c_", "a b c"),
        ]:
            buffer = styled(text)
            ItalicElement(font=BASE).parse(buffer)

            assert buffer.text == expected
            assert all(font_at(buffer, i).italic for i in range(len(expected)))

    def test_nested_bold(self):
        """Test that ****a**** is fully consumed by the bold element."""
        buffer = styled("****a****")
        BoldElement(font=BASE).parse(buffer)

        assert buffer.text == "a"
        assert font_at(buffer, 0).bold is True

    def test_intraword_underscores_ignored(self):
        """Test that snake_case identifiers are not emphasized."""
        buffer = styled("call snake_case_name and __dunder__x")
        BoldElement(font=BASE).parse(buffer)
        ItalicElement(font=BASE).parse(buffer)

        assert buffer.text == "call snake_case_name and __dunder__x"


class TestCodeElement:
    """Tests for CodeElement."""

    def test_code_decoded_and_styled(self):
        """Test that escaped code is restored with a monospace font."""
        buffer = styled("run `*x*` now")
        CodeEscapingElement().parse(buffer)
        CodeElement(font=BASE, family="courier").parse(buffer)

        assert buffer.text == "run *x* now"
        assert font_at(buffer, 4).family == "courier"
        assert font_at(buffer, 0).family == "system"
        assert buffer.query(key=AttributeKey.ESCAPED) == []

    def test_code_colors(self):
        """Test foreground and background colors on code."""
        color = Color(1, 2, 3)
        background = Color(4, 5, 6)
        buffer = styled("`c`")
        CodeEscapingElement().parse(buffer)
        CodeElement(font=BASE, color=color, background=background).parse(buffer)

        attributes = buffer.attributes_at(0)
        assert attributes[AttributeKey.COLOR] == color
        assert attributes[AttributeKey.BACKGROUND] == background

    def test_double_backtick_code(self):
        """Test that `` delimiters allow a backtick inside."""
        buffer = styled("``a`b``")
        CodeEscapingElement().parse(buffer)
        CodeElement(font=BASE).parse(buffer)

        assert buffer.text == "a`b"

    def test_code_keeps_size(self):
        """Test that code inside a header keeps the header size."""
        buffer = StyledTextBuffer("`h`")
        buffer.apply_attribute(AttributeKey.FONT, Font(size=24, style=TextStyle.BOLD))
        CodeEscapingElement().parse(buffer)
        CodeElement(font=BASE).parse(buffer)

        assert font_at(buffer, 0) == Font(
            family="monospace", size=24, style=TextStyle.BOLD
        )

    def test_unclosed_backtick_untouched(self):
        """Test that a lone backtick is plain text."""
        buffer = styled("a `b")
        CodeEscapingElement().parse(buffer)
        CodeElement(font=BASE).parse(buffer)

        assert buffer.text == "a `b"

    def test_unprotected_span_left_alone(self):
        """Test that backticks never seen by CodeEscapingElement stay text."""
        buffer = styled("`x`")
        CodeElement(font=BASE).parse(buffer)

        assert buffer.text == "`x`"
        assert font_at(buffer, 1).family == "system"

    def test_escaped_backtick_does_not_open(self):
        """Test that an escaped backtick is skipped when looking for code."""
        buffer = styled("\\`a` b")
        CodeEscapingElement().parse(buffer)

        assert buffer.text == "\\`a` b"
        assert buffer.query(key=AttributeKey.ESCAPED) == []
