"""Markdown elements applied by the parser, one markup construct each."""

from markstyle.elements.base import (
    MarkdownElement,
    RegexElement,
    DelimitedElement,
    LevelElement,
)
from markstyle.elements.escaping import (
    CodeEscapingElement,
    EscapingElement,
    UnescapingElement,
)
from markstyle.elements.header import HeaderElement
from markstyle.elements.lists import ListElement
from markstyle.elements.quote import QuoteElement
from markstyle.elements.link import LinkElement, AutomaticLinkElement
from markstyle.elements.emphasis import BoldElement, ItalicElement
from markstyle.elements.code import CodeElement

__all__ = [
    "MarkdownElement",
    "RegexElement",
    "DelimitedElement",
    "LevelElement",
    "CodeEscapingElement",
    "EscapingElement",
    "UnescapingElement",
    "HeaderElement",
    "ListElement",
    "QuoteElement",
    "LinkElement",
    "AutomaticLinkElement",
    "BoldElement",
    "ItalicElement",
    "CodeElement",
]
