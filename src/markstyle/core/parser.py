"""Markdown parser: applies markdown elements to a styled text buffer."""

import logging
from typing import Iterable, Optional, Union

from markstyle.config import Settings, get_settings
from markstyle.core.registry import ElementRegistry
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
    MarkdownElement,
    QuoteElement,
    UnescapingElement,
)
from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey, Color, Font

logger = logging.getLogger(__name__)


class MarkdownParser:
    """Convert lightweight markdown into a StyledTextBuffer.

    Pipeline:
    1. Wrap the input in a fresh buffer
    2. Apply the default font and color over the whole text
    3. Escaping phase: protect inline code content and escaped characters
    4. Formatting phase: header, list, quote, link, automatic link, bold,
       italic, then any custom elements in the order they were added
    5. Unescaping phase: resolve inline code, restore escaped characters

    The built-in elements are exposed as attributes (``parser.header``,
    ``parser.code``, ...) so callers can tune them after construction.
    """

    def __init__(
        self,
        font: Optional[Font] = None,
        color: Optional[Color] = None,
        automatic_link_detection_enabled: Optional[bool] = None,
        custom_elements: Optional[Iterable[MarkdownElement]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """Initialize the parser.

        Args:
            font: Default font for the whole text
            color: Default text color
            automatic_link_detection_enabled: Whether bare URLs become links
            custom_elements: Elements to run after the built-in formatting
            settings: Settings to read unset options from (default: global)
        """
        settings = settings or get_settings()
        self.font = font or settings.default_font
        self.color = color or settings.default_color
        if automatic_link_detection_enabled is None:
            automatic_link_detection_enabled = settings.automatic_link_detection
        self.automatic_link_detection_enabled = automatic_link_detection_enabled

        link_color = Color.from_hex(settings.link_color)
        self.header = HeaderElement(font=self.font)
        self.list = ListElement(font=self.font)
        self.quote = QuoteElement(font=self.font)
        self.link = LinkElement(font=self.font, color=link_color)
        self.automatic_link = AutomaticLinkElement(font=self.font, color=link_color)
        self.bold = BoldElement(font=self.font)
        self.italic = ItalicElement(font=self.font)
        self.code = CodeElement(
            font=self.font,
            family=settings.code_font_family,
            color=Color.from_hex(settings.code_color),
            background=Color.from_hex(settings.code_background),
        )

        self.registry = ElementRegistry(
            escaping=[CodeEscapingElement(), EscapingElement()],
            formatting=[
                self.header,
                self.list,
                self.quote,
                self.link,
                self.automatic_link,
                self.bold,
                self.italic,
            ],
            unescaping=[self.code, UnescapingElement()],
            custom=custom_elements,
        )

    @property
    def custom_elements(self) -> list[MarkdownElement]:
        return self.registry.custom_elements

    def add_custom_element(self, element: MarkdownElement) -> None:
        """Add an element that runs after the built-in formatting elements."""
        self.registry.add_custom_element(element)

    def remove_custom_element(self, element: MarkdownElement) -> None:
        """Remove a previously added custom element (no-op if absent)."""
        self.registry.remove_custom_element(element)

    def elements(self) -> list[MarkdownElement]:
        """Get the formatting elements: built-in ones, then custom ones."""
        return self.registry.formatting_elements()

    def parse(self, markdown: Union[str, StyledTextBuffer]) -> StyledTextBuffer:
        """Convert markdown into styled text.

        Args:
            markdown: Raw markdown text, or a pre-styled buffer (which is
                copied, not modified)

        Returns:
            A new StyledTextBuffer with markup resolved into attributes
        """
        if isinstance(markdown, StyledTextBuffer):
            buffer = markdown.copy()
        else:
            buffer = StyledTextBuffer(markdown)

        buffer.apply_attribute(AttributeKey.FONT, self.font)
        buffer.apply_attribute(AttributeKey.COLOR, self.color)

        for element in self.registry.all_elements():
            if not self.automatic_link_detection_enabled and isinstance(
                element, AutomaticLinkElement
            ):
                logger.debug("Skipping %s", type(element).__name__)
                continue
            logger.debug("Applying %s", type(element).__name__)
            element.parse(buffer)

        return buffer
