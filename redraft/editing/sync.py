"""
Keeps canonical Markdown and the live editable surface in step.

The controller moves a document between a read-only preview and an editable
surface. Entering edit mode compiles the Markdown into the surface and starts a
fresh undo history; edits flow back through the walker on a trailing autosave
debounce, on leaving edit mode, and synchronously on close.
"""

import logging
from enum import Enum
from typing import Any, Callable, List, Optional

from ..config import config
from ..conversion.compiler import MarkdownToMarkupCompiler
from ..conversion.walker import MarkupTreeWalker
from ..database.store import DocumentStore
from .debounce import Debouncer
from .history import EditHistorySession
from .surface import EditableSurface, MarkupSurface

CommitListener = Callable[[str], None]
SurfaceCommand = Callable[[EditableSurface], None]


class ViewMode(str, Enum):
    PREVIEW = "preview"
    EDIT = "edit"


class DocumentSyncController:
    """
    Orchestrates preview/edit transitions, autosave and close-time commits
    for one document surface instance.
    """

    def __init__(
        self,
        surface: Optional[EditableSurface] = None,
        store: Optional[DocumentStore] = None,
        storage_key: Optional[str] = None,
        markdown: str = "",
        scheduler: Optional[Any] = None,
        autosave_delay: Optional[float] = None,
        history_capacity: Optional[int] = None,
        walker: Optional[MarkupTreeWalker] = None,
        compiler: Optional[MarkdownToMarkupCompiler] = None,
    ):
        """
        Initialize the controller in preview mode.

        Args:
            surface: Editable surface to populate (an in-memory one by default)
            store: Persistence collaborator; None keeps the document in memory only
            storage_key: Key for the store (defaults to the configured default key)
            markdown: Initial canonical Markdown
            scheduler: call_later provider for the autosave timer
            autosave_delay: Quiet period before autosave, in seconds (defaults to config value)
            history_capacity: Undo/redo depth (defaults to config value)
            walker: Markup → Markdown serializer
            compiler: Markdown → markup compiler
        """
        self.surface = surface or MarkupSurface()
        self.store = store
        self.storage_key = storage_key or config.default_storage_key
        self.history_capacity = history_capacity
        self.walker = walker or MarkupTreeWalker()
        self.compiler = compiler or MarkdownToMarkupCompiler()

        self.mode = ViewMode.PREVIEW
        self.history: Optional[EditHistorySession] = None
        self.closed = False

        self._markdown = markdown
        self._listeners: List[CommitListener] = []
        delay = config.autosave_delay if autosave_delay is None else autosave_delay
        self._autosave = Debouncer(delay, self._on_quiet_period, scheduler)

    @property
    def markdown(self) -> str:
        """Canonical Markdown as of the last commit."""
        return self._markdown

    @property
    def is_editing(self) -> bool:
        return self.mode is ViewMode.EDIT

    @property
    def autosave_pending(self) -> bool:
        return self._autosave.pending

    def add_listener(self, listener: CommitListener) -> None:
        """Register a callback run with the new Markdown after every change."""
        self._listeners.append(listener)

    # Persistence

    def load(self) -> bool:
        """
        Read canonical Markdown from the store.

        Returns:
            True if a non-empty document was found
        """
        if self.store is None:
            return False
        try:
            stored = self.store.load(self.storage_key)
        except Exception as e:
            logging.warning(f"Could not load document '{self.storage_key}': {e}")
            return False

        if not stored:
            return False

        self._markdown = stored
        if self.is_editing:
            self._populate()
        logging.info(f"Loaded document '{self.storage_key}' ({len(stored)} characters)")
        return True

    def _save(self, markdown: str) -> None:
        if self.store is None:
            return
        try:
            self.store.save(self.storage_key, markdown)
        except Exception as e:
            logging.warning(f"Could not persist document '{self.storage_key}': {e}")

    def commit(self, markdown: str) -> bool:
        """
        Replace canonical Markdown, persisting and notifying on change.

        Returns:
            True if the Markdown changed
        """
        if markdown == self._markdown:
            return False
        self._markdown = markdown
        self._save(markdown)
        for listener in self._listeners:
            listener(markdown)
        return True

    # Mode transitions

    def enter_edit(self) -> None:
        """Compile canonical Markdown into the surface and start a fresh history."""
        if self.closed or self.is_editing:
            return
        self.mode = ViewMode.EDIT
        self._populate()

    def enter_preview(self) -> None:
        """Commit the live surface and leave edit mode."""
        if self.closed:
            return
        if self.is_editing:
            self._autosave.cancel()
            self.commit(self.walker.serialize(self.surface.read()))
        self.mode = ViewMode.PREVIEW
        self.history = None

    def toggle(self) -> ViewMode:
        if self.is_editing:
            self.enter_preview()
        else:
            self.enter_edit()
        return self.mode

    def _populate(self) -> None:
        self.surface.write(self.compiler.compile(self._markdown))
        self.history = EditHistorySession(self.surface, self.history_capacity)
        self.surface.place_cursor_at_end()

    # Editing events

    def handle_input(self) -> None:
        """Record a raw input event and restart the autosave quiet period."""
        if self.closed or not self.is_editing or self.history is None:
            return
        self.history.record_if_changed()
        self._autosave.trigger()

    def exec_command(self, command: SurfaceCommand) -> None:
        """
        Run a formatting command against the surface.

        The pre-command state is recorded first so the command can be undone.
        """
        if self.closed or not self.is_editing or self.history is None:
            return
        self.history.record_if_changed()
        command(self.surface)
        self.handle_input()

    def undo(self) -> bool:
        if self.closed or not self.is_editing or self.history is None:
            return False
        changed = self.history.undo()
        if changed:
            self._autosave.trigger()
        return changed

    def redo(self) -> bool:
        if self.closed or not self.is_editing or self.history is None:
            return False
        changed = self.history.redo()
        if changed:
            self._autosave.trigger()
        return changed

    def _on_quiet_period(self) -> None:
        if self.closed or not self.is_editing:
            return
        self.commit(self.walker.serialize(self.surface.read()))

    # Outside collaborators

    def latest_markdown(self) -> str:
        """
        Return up-to-date Markdown, committing the live surface when editing.
        """
        if self.is_editing and not self.closed:
            self.commit(self.walker.serialize(self.surface.read()))
        return self._markdown

    def replace_markdown(self, markdown: str) -> None:
        """
        Swap in a whole new document, such as a generation or refinement result.

        In edit mode the surface is repopulated, which also resets history.
        """
        self._autosave.cancel()
        self.commit(markdown)
        if self.is_editing and not self.closed:
            self._populate()

    def close(self) -> None:
        """
        Commit and persist the live surface synchronously, then stop the autosave timer.
        """
        if self.closed:
            return
        if self.is_editing:
            markdown = self.walker.serialize(self.surface.read())
            if not self.commit(markdown):
                self._save(markdown)
        self._autosave.cancel()
        self.closed = True
        self.history = None
        logging.debug(f"Closed document '{self.storage_key}' in {self.mode.value} mode")
