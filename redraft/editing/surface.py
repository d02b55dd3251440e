"""
Editable surface boundary.

The live editable region is reached only through this interface: read the
current snapshot, replace it, and move the cursor to the end after a fresh
population.
"""

from abc import ABC, abstractmethod

from bs4.element import NavigableString, Tag

from ..conversion.walker import parse_markup


class EditableSurface(ABC):
    """
    Abstract base class for the live editable region.
    """

    @abstractmethod
    def read(self) -> str:
        """
        Return the current markup snapshot.

        Returns:
            The surface content as an HTML string
        """
        pass

    @abstractmethod
    def write(self, markup: str) -> None:
        """
        Replace the surface content with a markup snapshot.

        Args:
            markup: The new content as an HTML string
        """
        pass

    def place_cursor_at_end(self) -> None:
        """Collapse the selection to the end of the content, where supported."""


class MarkupSurface(EditableSurface):
    """
    In-memory editable surface.

    Holds the snapshot as a string. Used headless and in tests in place of a
    browser contentEditable region.
    """

    def __init__(self, markup: str = ""):
        self._markup = markup
        self.cursor_at_end = False

    def read(self) -> str:
        return self._markup

    def write(self, markup: str) -> None:
        self._markup = markup
        self.cursor_at_end = False

    def place_cursor_at_end(self) -> None:
        self.cursor_at_end = True

    def insert_text(self, text: str) -> None:
        """
        Type text at the end of the last block, as a user would with the
        cursor at the end of the content.
        """
        soup = parse_markup(self._markup)
        blocks = [child for child in soup.children if isinstance(child, Tag)]
        target = blocks[-1] if blocks else soup
        # an empty paragraph holds a placeholder <br> until the first keystroke
        if target.find("br") is not None and not target.get_text():
            target.clear()
        target.append(NavigableString(text))
        self._markup = str(soup)
