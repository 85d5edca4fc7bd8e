"""Styled text model and export utilities."""

from markstyle.formatting.ir import (
    TextStyle,
    AttributeKey,
    AttributeRange,
    Font,
    Color,
    TextRun,
)
from markstyle.formatting.buffer import StyledTextBuffer, RangeError
from markstyle.formatting.export import (
    ExportError,
    ExportFormat,
    export,
    to_dict,
    to_json,
    to_plain_text,
    to_rich_text,
)

__all__ = [
    "TextStyle",
    "AttributeKey",
    "AttributeRange",
    "Font",
    "Color",
    "TextRun",
    "StyledTextBuffer",
    "RangeError",
    "ExportError",
    "ExportFormat",
    "export",
    "to_dict",
    "to_json",
    "to_plain_text",
    "to_rich_text",
]
