"""Export styled text buffers to JSON, plain text, or rich Text."""

import json
from enum import Enum
from typing import Any, Union

from rich.style import Style
from rich.text import Text

from markstyle.formatting.buffer import StyledTextBuffer
from markstyle.formatting.ir import AttributeKey, Color, Font


class ExportError(Exception):
    """Requested export format is not supported."""

    pass


class ExportFormat(str, Enum):
    """Supported export formats."""

    JSON = "json"
    TEXT = "text"
    RICH = "rich"


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Font):
        return {
            "family": value.family,
            "size": value.size,
            "bold": value.bold,
            "italic": value.italic,
        }
    if isinstance(value, Color):
        return value.hex
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def to_dict(buffer: StyledTextBuffer) -> dict[str, Any]:
    """Convert a buffer into JSON-compatible data."""
    return {
        "text": buffer.text,
        "ranges": [
            {
                "start": r.start,
                "end": r.end,
                "key": r.key,
                "value": _serialize_value(r.value),
            }
            for r in buffer.ranges
        ],
    }


def to_json(buffer: StyledTextBuffer, indent: int = 2) -> str:
    return json.dumps(to_dict(buffer), indent=indent, ensure_ascii=False)


def to_plain_text(buffer: StyledTextBuffer) -> str:
    """Get the text content without styling."""
    return buffer.text


def to_rich_text(buffer: StyledTextBuffer) -> Text:
    """Convert a buffer into a rich Text for terminal display.

    Fonts map to bold/italic, colors to foreground/background, and link
    targets to terminal hyperlinks. Font family and size have no terminal
    equivalent and are dropped.
    """
    text = Text()
    for run in buffer.runs():
        color = run.attributes.get(AttributeKey.COLOR)
        background = run.attributes.get(AttributeKey.BACKGROUND)
        style = Style(
            bold=run.bold or None,
            italic=run.italic or None,
            color=color.hex if isinstance(color, Color) else None,
            bgcolor=background.hex if isinstance(background, Color) else None,
            link=run.link,
        )
        text.append(run.text, style=style)
    return text


def export(
    buffer: StyledTextBuffer,
    export_format: Union[ExportFormat, str],
) -> Union[str, Text]:
    """Export a buffer in the requested format.

    Raises:
        ExportError: If the format is not supported
    """
    try:
        export_format = ExportFormat(export_format)
    except ValueError as e:
        raise ExportError(
            f"Unsupported export format: {export_format}. "
            f"Supported formats: {', '.join(f.value for f in ExportFormat)}"
        ) from e

    if export_format is ExportFormat.JSON:
        return to_json(buffer)
    if export_format is ExportFormat.RICH:
        return to_rich_text(buffer)
    return to_plain_text(buffer)
