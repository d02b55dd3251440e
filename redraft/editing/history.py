"""
Undo/redo history for an editable surface.
"""

import logging
from collections import deque
from typing import Deque, Optional

from ..config import config
from .surface import EditableSurface


class EditHistorySession:
    """
    Bounded undo and redo stacks of surface snapshots.

    A session belongs to one population of one surface: it is created when the
    surface is filled from canonical Markdown and thrown away when that content
    is replaced or the surface leaves edit mode. When a stack is full the oldest
    entry is dropped.
    """

    def __init__(self, surface: EditableSurface, capacity: Optional[int] = None):
        """
        Initialize the session from the surface's current content.

        Args:
            surface: The editable surface whose snapshots are tracked
            capacity: Maximum entries per stack (defaults to config value)
        """
        self.surface = surface
        self.capacity = config.history_capacity if capacity is None else capacity
        self._undo: Deque[str] = deque(maxlen=self.capacity)
        self._redo: Deque[str] = deque(maxlen=self.capacity)
        self.last_committed = surface.read()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def record_if_changed(self, current_snapshot: Optional[str] = None) -> bool:
        """
        Record a mutation if the surface moved away from the last committed snapshot.

        Args:
            current_snapshot: The live snapshot; read from the surface when omitted

        Returns:
            True if a history entry was recorded
        """
        snapshot = self.surface.read() if current_snapshot is None else current_snapshot
        if snapshot == self.last_committed:
            return False

        self._undo.append(self.last_committed)
        self._redo.clear()
        self.last_committed = snapshot
        return True

    def undo(self) -> bool:
        """
        Restore the previous snapshot.

        Returns:
            True if the surface changed, False when there is nothing to undo
        """
        if not self._undo:
            return False

        self._redo.append(self.surface.read())
        previous = self._undo.pop()
        self.surface.write(previous)
        self.last_committed = previous
        logging.debug(f"Undo applied ({len(self._undo)} left, {len(self._redo)} redoable)")
        return True

    def redo(self) -> bool:
        """
        Re-apply the most recently undone snapshot.

        Returns:
            True if the surface changed, False when there is nothing to redo
        """
        if not self._redo:
            return False

        self._undo.append(self.surface.read())
        following = self._redo.pop()
        self.surface.write(following)
        self.last_committed = following
        logging.debug(f"Redo applied ({len(self._undo)} undoable, {len(self._redo)} left)")
        return True
