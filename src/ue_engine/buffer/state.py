"""Selection marks tied to a document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Span = Tuple[int, int]


@dataclass(slots=True)
class Selection:
    """Two-press block mark.

    The first ``mark`` drops ``start``, the second closes the block with
    ``end``. Only a closed block is active; the bounds are kept ordered.
    """

    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def span(self) -> Optional[Span]:
        if self.start is None or self.end is None:
            return None
        return (self.start, self.end)

    def mark(self, offset: int) -> bool:
        if self.start is None:
            self.start = offset
            return True
        if self.end is None:
            self.start, self.end = sorted((self.start, offset))
            return True
        return False

    def clear(self) -> None:
        self.start = None
        self.end = None

    def clamp(self, size: int) -> None:
        if self.start is not None:
            self.start = min(self.start, size)
        if self.end is not None:
            self.end = min(self.end, size)

    def contains(self, offset: int) -> bool:
        span = self.span
        return span is not None and span[0] <= offset < span[1]
