"""
Persistence contract for canonical Markdown.
"""

from abc import ABC, abstractmethod
from typing import Optional


class DocumentStore(ABC):
    """
    Abstract key/value store for canonical Markdown.

    Keys are derived from a per-conversation identifier. Callers treat every
    failure as non-fatal.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Read a stored document.

        Args:
            key: Storage key

        Returns:
            The stored Markdown, or None if nothing is stored under the key
        """
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """
        Store a document, replacing any previous value.

        Args:
            key: Storage key
            value: Canonical Markdown
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove a stored document, if present.

        Args:
            key: Storage key
        """
        pass
