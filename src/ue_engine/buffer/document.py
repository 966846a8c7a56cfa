"""Fixed-capacity document storage."""

from __future__ import annotations

from dataclasses import dataclass, field

from ue_engine.config import DATA_SIZE

from .state import Selection
from .validation import BufferValidationError, ensure_offset, ensure_span

NEWLINE = 0x0A
BLANK = 0x20


@dataclass(slots=True)
class Document:
    """A whole editing state as one copyable value.

    ``data`` always holds ``capacity`` bytes; only ``data[:size]`` is text.
    Every field, marks included, is part of an undo snapshot.
    """

    capacity: int = DATA_SIZE
    data: bytearray = field(default_factory=bytearray)
    size: int = 0
    cursor: int = 0
    view_origin: int = 0
    selection: Selection = field(default_factory=Selection)
    modified: bool = False
    is_new: bool = False

    def __post_init__(self) -> None:
        if len(self.data) < self.capacity:
            self.data.extend(bytes(self.capacity - len(self.data)))
        elif len(self.data) > self.capacity:
            raise BufferValidationError(
                f"Data of {len(self.data)} bytes exceeds capacity {self.capacity}"
            )
        ensure_offset(self.size, self.capacity)
        ensure_offset(self.cursor, self.size)
        ensure_offset(self.view_origin, self.size)

    @classmethod
    def from_bytes(cls, text: bytes, *, capacity: int = DATA_SIZE) -> "Document":
        """Build a document holding ``text`` (already in internal form)."""

        if len(text) > capacity:
            raise BufferValidationError(
                f"Text of {len(text)} bytes exceeds capacity {capacity}"
            )
        return cls(capacity=capacity, data=bytearray(text), size=len(text))

    def copy(self) -> "Document":
        return Document(
            capacity=self.capacity,
            data=bytearray(self.data),
            size=self.size,
            cursor=self.cursor,
            view_origin=self.view_origin,
            selection=Selection(self.selection.start, self.selection.end),
            modified=self.modified,
            is_new=self.is_new,
        )

    @property
    def text(self) -> bytes:
        return bytes(self.data[: self.size])

    def byte_at(self, offset: int) -> int:
        return self.data[ensure_offset(offset, self.size, allow_end=False)]

    def is_newline(self, offset: int) -> bool:
        """True if ``offset`` holds a line break; offsets past the text never do."""

        return 0 <= offset < self.size and self.data[offset] == NEWLINE

    def read(self, start: int, end: int) -> bytes:
        start, end = ensure_span(start, end, self.size)
        return bytes(self.data[start:end])

    def write(self, offset: int, chunk: bytes) -> None:
        """Overwrite ``len(chunk)`` bytes already inside the text."""

        ensure_span(offset, offset + len(chunk), self.size)
        self.data[offset : offset + len(chunk)] = chunk

    def set_cursor(self, offset: int) -> None:
        self.cursor = ensure_offset(offset, self.size)

    def close_gap(self, offset: int, count: int) -> None:
        """Shift ``[offset + count, size)`` down onto ``offset``."""

        ensure_span(offset, offset + count, self.size)
        tail = self.data[offset + count : self.size]
        self.data[offset : offset + len(tail)] = tail
        self.size -= count

    def open_gap(self, offset: int, count: int) -> None:
        """Shift ``[offset, size)`` up by ``count``; the gap keeps stale bytes."""

        ensure_offset(offset, self.size)
        if self.size + count > self.capacity:
            raise BufferValidationError(
                f"Gap of {count} bytes does not fit", offset=offset
            )
        tail = self.data[offset : self.size]
        self.data[offset + count : offset + count + len(tail)] = tail
        self.size += count
