"""Turn the visible part of a document into fixed-width rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ue_engine.buffer import BLANK, NEWLINE, Document
from ue_engine.codec import to_unicode
from ue_engine.layout import wrapped_row_length

from .base import Status, Viewport

ColumnSpan = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Frame:
    """One screenful: ``height`` rows of ``width`` internal bytes each.

    ``highlights[i]`` is the half-open column span of row ``i`` inside the
    selection, if any. The cursor coordinates are ``None`` when the cursor
    cell falls outside the painted area.
    """

    rows: Tuple[bytes, ...]
    highlights: Tuple[Optional[ColumnSpan], ...]
    cursor_column: Optional[int]
    cursor_row: Optional[int]
    status: Status = Status.NORMAL

    @property
    def cursor(self) -> Optional[Tuple[int, int]]:
        if self.cursor_column is None or self.cursor_row is None:
            return None
        return (self.cursor_column, self.cursor_row)

    def lines(self) -> List[str]:
        return [to_unicode(row) for row in self.rows]


def render_rows(
    document: Document, viewport: Viewport, status: Status = Status.NORMAL
) -> Frame:
    width, height = viewport.width, viewport.height
    rows: List[bytes] = []
    highlights: List[Optional[ColumnSpan]] = []
    cursor_column: Optional[int] = None
    cursor_row: Optional[int] = None

    pos = document.view_origin
    for row in range(height):
        cells = bytearray()
        lit: Optional[ColumnSpan] = None
        if pos <= document.size:
            length = wrapped_row_length(document, width, pos)
            for column in range(length + 1):
                if pos == document.cursor:
                    # a full row's separator byte has no cell of its own
                    cursor_column, cursor_row = min(column, width - 1), row
                if column < width:
                    byte = document.byte_at(pos) if pos < document.size else BLANK
                    cells.append(BLANK if byte == NEWLINE else byte)
                    if document.selection.contains(pos):
                        lit = (lit[0] if lit else column, column + 1)
                pos += 1
        cells.extend(bytes([BLANK]) * (width - len(cells)))
        rows.append(bytes(cells))
        highlights.append(lit)

    return Frame(
        rows=tuple(rows),
        highlights=tuple(highlights),
        cursor_column=cursor_column,
        cursor_row=cursor_row,
        status=status,
    )


__all__ = ["Frame", "ColumnSpan", "render_rows"]
