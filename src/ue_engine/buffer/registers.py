"""Clipboard storage shared by every document an editor opens."""

from __future__ import annotations

from ue_engine.config import DATA_SIZE


class Clipboard:
    """Holds the last copied block, truncated to ``capacity`` bytes."""

    def __init__(self, capacity: int = DATA_SIZE) -> None:
        self.capacity = capacity
        self._data = b""

    def __len__(self) -> int:
        return len(self._data)

    @property
    def contents(self) -> bytes:
        return self._data

    def yank(self, data: bytes) -> None:
        self._data = bytes(data[: self.capacity])
