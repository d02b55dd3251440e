"""Live editing: surface boundary, undo/redo history and Markdown sync."""

from .debounce import Debouncer
from .history import EditHistorySession
from .surface import EditableSurface, MarkupSurface
from .sync import DocumentSyncController, ViewMode

__all__ = [
    "Debouncer",
    "EditHistorySession",
    "EditableSurface",
    "MarkupSurface",
    "DocumentSyncController",
    "ViewMode"
]
