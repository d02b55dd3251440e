"""
Redraft: review, edit and export AI-generated documents.

Converts canonical Markdown into editable rich text and back, with undo/redo,
debounced autosave and print/PDF/Word export.
"""

__version__ = "0.1.0"
__author__ = "Redraft Project"

# Import main components
from .conversion import MarkdownToMarkupCompiler, MarkupTreeWalker, ExportProfile, render
from .database import DatabaseManager, DocumentStore
from .editing import DocumentSyncController, EditHistorySession, MarkupSurface, ViewMode
from .generators import DocumentGenerator, MockGenerator
from .models import ArchivedDocument, DocumentStats, DocumentTemplate, SummaryMessage
from .surfaces import ChatSummarySurface, DocumentPreparationSurface

__all__ = [
    "MarkdownToMarkupCompiler",
    "MarkupTreeWalker",
    "ExportProfile",
    "render",
    "DatabaseManager",
    "DocumentStore",
    "DocumentSyncController",
    "EditHistorySession",
    "MarkupSurface",
    "ViewMode",
    "DocumentGenerator",
    "MockGenerator",
    "ArchivedDocument",
    "DocumentStats",
    "DocumentTemplate",
    "SummaryMessage",
    "ChatSummarySurface",
    "DocumentPreparationSurface"
]
