"""Ordered element registry for the markdown parser."""

from typing import Iterable, Optional

from markstyle.elements.base import MarkdownElement


class ElementRegistry:
    """Holds the elements of a parser in their three fixed phases.

    Phases run in order: escaping, formatting (built-in elements followed by
    custom elements), unescaping. Only the custom element list changes after
    construction.
    """

    def __init__(
        self,
        escaping: Iterable[MarkdownElement],
        formatting: Iterable[MarkdownElement],
        unescaping: Iterable[MarkdownElement],
        custom: Optional[Iterable[MarkdownElement]] = None,
    ) -> None:
        self._escaping = tuple(escaping)
        self._formatting = tuple(formatting)
        self._unescaping = tuple(unescaping)
        self.custom_elements: list[MarkdownElement] = list(custom or [])

    @property
    def escaping_elements(self) -> tuple[MarkdownElement, ...]:
        return self._escaping

    @property
    def default_elements(self) -> tuple[MarkdownElement, ...]:
        """Get the built-in formatting elements."""
        return self._formatting

    @property
    def unescaping_elements(self) -> tuple[MarkdownElement, ...]:
        return self._unescaping

    def add_custom_element(self, element: MarkdownElement) -> None:
        """Append a custom element; duplicates are allowed."""
        self.custom_elements.append(element)

    def remove_custom_element(self, element: MarkdownElement) -> None:
        """Remove the first custom element that *is* ``element``.

        Elements are compared by identity, not equality. Removing an element
        that was never added does nothing.
        """
        for index, candidate in enumerate(self.custom_elements):
            if candidate is element:
                del self.custom_elements[index]
                return

    def formatting_elements(self) -> list[MarkdownElement]:
        """Get the formatting phase: built-in elements, then custom ones."""
        return [*self._formatting, *self.custom_elements]

    def all_elements(self) -> list[MarkdownElement]:
        """Get every element in the order a single parse applies them."""
        return [*self._escaping, *self.formatting_elements(), *self._unescaping]
