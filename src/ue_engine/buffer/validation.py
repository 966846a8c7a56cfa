"""Bounds checks shared by every buffer accessor."""

from __future__ import annotations


class BufferValidationError(RuntimeError):
    """Raised when an offset falls outside the valid part of a document."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


def ensure_offset(offset: int, size: int, *, allow_end: bool = True) -> int:
    """Return ``offset`` if it lies in ``[0, size]`` (``[0, size)`` without ``allow_end``)."""

    limit = size if allow_end else size - 1
    if offset < 0 or offset > limit:
        raise BufferValidationError(
            f"Offset {offset} out of range for size {size}", offset=offset
        )
    return offset


def ensure_span(start: int, end: int, size: int) -> tuple[int, int]:
    ensure_offset(start, size)
    ensure_offset(end, size)
    if start > end:
        raise BufferValidationError(
            f"Span start {start} is past its end {end}", offset=start
        )
    return start, end
