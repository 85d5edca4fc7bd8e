"""Mutable styled text buffer.

A StyledTextBuffer owns a string and a list of attribute ranges over it.
Elements mutate it in place: they write attributes over spans and replace
spans of text, and the buffer keeps every stored range consistent with the
current text.
"""

from dataclasses import replace
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Optional

from markstyle.formatting.ir import AttributeRange, TextRun


class RangeError(IndexError):
    """A buffer operation referenced offsets outside the current text."""

    pass


def _normalize_key(key: str) -> str:
    if isinstance(key, Enum):
        return key.value
    return key


class StyledTextBuffer:
    """Text plus attribute ranges.

    Ranges are half-open ``[start, end)`` character offsets. Ranges sharing
    a key never overlap; writing a key over a span replaces whatever value
    that key had there (last write wins).
    """

    def __init__(
        self,
        text: str = "",
        ranges: Optional[Iterable[AttributeRange]] = None,
    ) -> None:
        """Initialize the buffer.

        Args:
            text: Initial text content
            ranges: Optional attribute ranges, applied in order

        Raises:
            RangeError: If a range lies outside ``text``
        """
        self._text = text
        self._ranges: list[AttributeRange] = []
        for attribute_range in ranges or []:
            self.apply_attribute(
                attribute_range.key,
                attribute_range.value,
                attribute_range.start,
                attribute_range.end,
            )

    @property
    def text(self) -> str:
        return self._text

    @property
    def ranges(self) -> list[AttributeRange]:
        """Get a sorted copy of all attribute ranges."""
        return [replace(r) for r in sorted(self._ranges, key=_sort_key)]

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"StyledTextBuffer({self._text!r}, ranges={len(self._ranges)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyledTextBuffer):
            return NotImplemented
        return self._text == other._text and self.ranges == other.ranges

    def copy(self) -> "StyledTextBuffer":
        """Return an independent copy of this buffer."""
        duplicate = StyledTextBuffer(self._text)
        duplicate._ranges = [replace(r) for r in self._ranges]
        return duplicate

    # -------------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------------

    def apply_attribute(
        self,
        key: str,
        value: Any,
        start: int = 0,
        end: Optional[int] = None,
    ) -> None:
        """Set ``key`` to ``value`` over ``[start, end)``.

        Any existing value for ``key`` inside the span is overwritten.
        An empty span is a no-op.

        Raises:
            RangeError: If the span exceeds the current text
        """
        end = len(self._text) if end is None else end
        self._check_range(start, end)
        if start == end:
            return
        key = _normalize_key(key)
        self._clear(key, start, end)
        self._ranges.append(AttributeRange(start, end, key, value))
        self._coalesce()

    def remove_attribute(
        self,
        key: str,
        start: int = 0,
        end: Optional[int] = None,
    ) -> None:
        """Remove ``key`` from ``[start, end)``, truncating ranges as needed."""
        end = len(self._text) if end is None else end
        self._check_range(start, end)
        if start == end:
            return
        self._clear(_normalize_key(key), start, end)

    def update_attribute(
        self,
        key: str,
        start: int,
        end: int,
        transform: Callable[[Any], Any],
    ) -> None:
        """Replace each existing value of ``key`` in the span with ``transform(value)``.

        Parts of the span where ``key`` is absent stay untouched.
        """
        for attribute_range in self.query(start, end, key):
            self.apply_attribute(
                key,
                transform(attribute_range.value),
                max(attribute_range.start, start),
                min(attribute_range.end, end),
            )

    def query(
        self,
        start: int = 0,
        end: Optional[int] = None,
        key: Optional[str] = None,
    ) -> list[AttributeRange]:
        """Get copies of the ranges overlapping ``[start, end)``.

        Args:
            start: Span start offset
            end: Span end offset (defaults to the text length)
            key: Only return ranges for this key

        Returns:
            Matching ranges sorted by position
        """
        end = len(self._text) if end is None else end
        self._check_range(start, end)
        key = _normalize_key(key) if key is not None else None
        return [
            r
            for r in self.ranges
            if r.overlaps(start, end) and (key is None or r.key == key)
        ]

    def has_attribute(self, key: str, start: int, end: int) -> bool:
        """Check if ``key`` is set anywhere inside ``[start, end)``."""
        return bool(self.query(start, end, key))

    def attributes_at(self, index: int) -> dict[str, Any]:
        """Get all attributes set on the character at ``index``."""
        if not 0 <= index < len(self._text):
            raise RangeError(
                f"Index {index} outside text of length {len(self._text)}"
            )
        return {
            r.key: r.value for r in self._ranges if r.start <= index < r.end
        }

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    def replace_text(self, start: int, end: int, new_text: str) -> None:
        """Replace ``[start, end)`` with ``new_text`` and shift ranges.

        Ranges before the span are kept, ranges after it shift by the length
        delta. A range that covers the whole span also covers the new text.
        Ranges that partially overlap are cut back to their part outside the
        span, and ranges strictly inside the span are dropped.

        Raises:
            RangeError: If the span exceeds the current text
        """
        self._check_range(start, end)
        new_end = start + len(new_text)
        delta = new_end - end
        self._text = self._text[:start] + new_text + self._text[end:]

        updated: list[AttributeRange] = []
        for r in self._ranges:
            if r.end <= start:
                updated.append(r)
            elif r.start >= end:
                updated.append(replace(r, start=r.start + delta, end=r.end + delta))
            elif r.start <= start and r.end >= end:
                updated.append(replace(r, end=r.end + delta))
            elif r.start < start:
                updated.append(replace(r, end=start))
            elif r.end > end:
                updated.append(replace(r, start=new_end, end=r.end + delta))
            # Otherwise the range lay inside the replaced span

        self._ranges = [r for r in updated if r.start < r.end]
        self._coalesce()

    def insert_text(self, index: int, text: str) -> None:
        self.replace_text(index, index, text)

    def delete_text(self, start: int, end: int) -> None:
        self.replace_text(start, end, "")

    def runs(self) -> Iterator[TextRun]:
        """Iterate over contiguous runs of text with identical attributes."""
        boundaries = {0, len(self._text)}
        for r in self._ranges:
            boundaries.update((r.start, r.end))
        points = sorted(boundaries)

        current: Optional[TextRun] = None
        for start, end in zip(points, points[1:]):
            attributes = {
                r.key: r.value for r in self._ranges if r.start <= start < r.end
            }
            if current is not None and current.attributes == attributes:
                current.text += self._text[start:end]
                continue
            if current is not None:
                yield current
            current = TextRun(text=self._text[start:end], attributes=attributes)
        if current is not None:
            yield current

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_range(self, start: int, end: int) -> None:
        if start < 0 or end > len(self._text) or start > end:
            raise RangeError(
                f"Range [{start}, {end}) outside text of length {len(self._text)}"
            )

    def _clear(self, key: str, start: int, end: int) -> None:
        kept: list[AttributeRange] = []
        for r in self._ranges:
            if r.key != key or not r.overlaps(start, end):
                kept.append(r)
                continue
            if r.start < start:
                kept.append(replace(r, end=start))
            if r.end > end:
                kept.append(replace(r, start=end))
        self._ranges = kept

    def _coalesce(self) -> None:
        """Merge touching ranges of the same key and equal value."""
        merged: list[AttributeRange] = []
        for r in sorted(self._ranges, key=lambda r: (r.key, r.start, r.end)):
            previous = merged[-1] if merged else None
            if (
                previous is not None
                and previous.key == r.key
                and previous.end == r.start
                and previous.value == r.value
            ):
                previous.end = r.end
            else:
                merged.append(replace(r))
        self._ranges = merged


def _sort_key(r: AttributeRange) -> tuple[int, int, str]:
    return (r.start, r.end, r.key)
