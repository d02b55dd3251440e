"""Storage for canonical Markdown and archived documents."""

from .manager import DatabaseManager
from .store import DocumentStore

__all__ = ["DatabaseManager", "DocumentStore"]
