"""Snapshot ring used for undo."""

from __future__ import annotations

from typing import List, Optional

from ue_engine.config import UNDO_LEVELS

from .document import Document


class UndoLog:
    """Fixed ring of whole-document snapshots.

    Pushing into a full ring overwrites the oldest snapshot. There is no
    redo: popping hands the stored value back and forgets it.
    """

    def __init__(self, levels: int = UNDO_LEVELS) -> None:
        if levels < 1:
            raise ValueError("levels must be positive")
        self.levels = levels
        self._slots: List[Optional[Document]] = [None] * levels
        self._history = 0
        self._available = 0

    def __len__(self) -> int:
        return self._available

    def can_undo(self) -> bool:
        return self._available > 0

    def push(self, document: Document) -> None:
        self._slots[self._history % self.levels] = document.copy()
        self._history += 1
        if self._available < self.levels:
            self._available += 1

    def pop(self) -> Optional[Document]:
        if not self.can_undo():
            return None
        self._available -= 1
        self._history -= 1
        index = self._history % self.levels
        document, self._slots[index] = self._slots[index], None
        return document
