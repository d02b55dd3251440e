"""Data models for Redraft."""

from .documents import ArchivedDocument, DocumentStats, SummaryMessage
from .templates import DocumentTemplate

__all__ = [
    "ArchivedDocument",
    "DocumentStats",
    "DocumentTemplate",
    "SummaryMessage"
]
