"""View origin tracking with a ring of recently seen row starts."""

from __future__ import annotations

from typing import List

from ue_engine.buffer import Document

from .wrap import wrapped_row_length, wrapped_row_start


class ScrollCache:
    """``2 * height`` column-0 offsets from the last downward scan.

    Only a lookup aid: anything it holds can be recomputed with
    ``wrapped_row_start``.
    """

    def __init__(self, height: int) -> None:
        self.resize(height)

    def resize(self, height: int) -> None:
        if height < 2:
            raise ValueError("height must be at least 2")
        self.height = height
        self._slots: List[int] = [0] * (2 * height)

    def __len__(self) -> int:
        return len(self._slots)

    def prime(self, offset: int) -> None:
        for index in range(self.height):
            self._slots[index] = offset

    def store(self, index: int, offset: int) -> None:
        self._slots[index % len(self._slots)] = offset

    def recall(self, index: int) -> int:
        return self._slots[index % len(self._slots)]


def recompute_view(document: Document, width: int, cache: ScrollCache) -> int:
    """Move ``document.view_origin`` so the cursor row is on screen.

    Above the view the origin jumps straight to the cursor's row. Otherwise
    rows are walked down from the current origin, each start recorded
    ``height - 2`` slots ahead in the ring, and the origin becomes the start
    recorded for the cursor's row, which trails it by ``height - 2`` rows.
    """

    cursor = document.cursor
    origin = document.view_origin
    if cursor < origin:
        origin = wrapped_row_start(document, width, cursor)
    else:
        height = cache.height
        cache.prime(origin)
        row = 0
        while True:
            cache.store(row + height - 2, origin)
            step = wrapped_row_length(document, width, origin) + 1
            if origin <= cursor <= origin + step:
                break
            origin += step
            row += 1
        origin = cache.recall(row)

    document.view_origin = origin
    return origin


__all__ = ["ScrollCache", "recompute_view"]
