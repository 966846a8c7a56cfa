"""Word-wrapped row geometry over a document.

All three queries are pure: they read the document and the terminal width
and never touch the cursor or the view.
"""

from __future__ import annotations

from ue_engine.buffer import BLANK, NEWLINE, Document


def find_line_start(document: Document, pos: int) -> int:
    """Offset of the line break that opens the real line holding ``pos`` (or 0).

    A ``pos`` sitting on a line break belongs to the line it ends, so the
    scan steps back once before looking.
    """

    if pos and document.is_newline(pos):
        pos -= 1
    while pos and not document.is_newline(pos):
        pos -= 1
    return pos


def wrapped_row_length(document: Document, width: int, pos: int) -> int:
    """Length of the wrapped row starting at ``pos``, never more than ``width``.

    A row that fills the whole width breaks at its last blank, if it has one.
    """

    data = document.data
    end = document.size
    size = 0
    blank = -1
    while pos < end and data[pos] != NEWLINE and size < width:
        if data[pos] == BLANK:
            blank = size
        size += 1
        pos += 1

    if size == width and blank != -1:
        return blank
    return size


def wrapped_row_start(document: Document, width: int, pos: int) -> int:
    """Column 0 of the wrapped row containing ``pos``."""

    col0 = find_line_start(document, pos)
    while col0 < document.size:
        step = wrapped_row_length(document, width, col0) + 1
        if col0 <= pos < col0 + step:
            break
        col0 += step
    return col0


__all__ = ["find_line_start", "wrapped_row_length", "wrapped_row_start"]
