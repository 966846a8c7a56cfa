"""Buffer facade: document editing, selection, and undo snapshots."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from ue_engine.config import EditorConfig
from ue_engine.runtime import telemetry

from .document import NEWLINE, Document
from .state import Span
from .undo import UndoLog

CARRIAGE_RETURN = 0x0D


@dataclass(slots=True)
class BufferView:
    text: bytes
    cursor: int
    selection: Optional[Span]
    modified: bool


class Buffer:
    """Owns the working document and the undo ring behind it.

    Mutations report success with a ``bool`` and never leave a half-applied
    change behind: a refused ``expand`` touches nothing.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        undo: Optional[UndoLog] = None,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.name = name
        self.config = config or EditorConfig()
        if document is None:
            document = Document(capacity=self.config.data_size)
        self.document = document
        self.undo_log = undo if undo is not None else UndoLog(self.config.undo_levels)

    @classmethod
    def from_bytes(
        cls,
        text: bytes,
        *,
        name: str = "default",
        config: Optional[EditorConfig] = None,
    ) -> "Buffer":
        config = config or EditorConfig()
        document = Document.from_bytes(text, capacity=config.data_size)
        return cls(name=name, document=document, config=config)

    @property
    def size(self) -> int:
        return self.document.size

    @property
    def cursor(self) -> int:
        return self.document.cursor

    @property
    def contents(self) -> bytes:
        return self.document.text

    def view(self) -> BufferView:
        return BufferView(
            text=self.document.text,
            cursor=self.document.cursor,
            selection=self.document.selection.span,
            modified=self.document.modified,
        )

    def move_to(self, offset: int) -> None:
        self.document.set_cursor(offset)

    # undo

    def snapshot(self) -> None:
        self.undo_log.push(self.document)

    def undo(self) -> bool:
        previous = self.undo_log.pop()
        if previous is None:
            return False
        self.document = previous
        telemetry.record_event(
            "buffer.undo",
            level="debug",
            data={"buffer": self.name, "remaining": len(self.undo_log)},
        )
        return True

    # editing

    def delete(self, count: int) -> bool:
        """Delete ``count`` bytes at the cursor, or the whole active selection.

        An active selection wins over ``count``: it is removed in full, the
        cursor lands on its start and the marks are cleared.
        """

        document = self.document
        selection = document.selection
        span = selection.span
        if span is not None:
            start, end = span
            document.set_cursor(start)
            count = end - start
            selection.clear()

        count = min(max(count, 0), document.size - document.cursor)
        if count == 0:
            return False
        document.close_gap(document.cursor, count)
        document.modified = True
        selection.clamp(document.size)
        return True

    def expand(self, count: int) -> bool:
        """Open a ``count``-byte gap at the cursor if the capacity allows it."""

        document = self.document
        if document.size + count >= document.capacity:
            telemetry.record_event(
                "buffer.capacity",
                level="warning",
                data={"buffer": self.name, "size": document.size, "request": count},
            )
            return False
        if count > 0:
            document.open_gap(document.cursor, count)
            document.modified = True
        return True

    def insert(self, byte: int) -> bool:
        if not self.expand(1):
            return False
        document = self.document
        document.write(document.cursor, bytes((byte,)))
        document.cursor += 1
        return True

    def insert_text(self, text: bytes) -> bool:
        """Insert internal bytes in order, turning carriage returns into newlines."""

        for byte in text:
            if byte == CARRIAGE_RETURN:
                byte = NEWLINE
            if not self.insert(byte):
                return False
        return True

    def put(self, chunk: bytes) -> bool:
        """Insert ``chunk`` as one block, or nothing if it does not fit."""

        if not self.expand(len(chunk)):
            return False
        document = self.document
        document.write(document.cursor, chunk)
        document.cursor += len(chunk)
        return True

    def replace_selection(self) -> bool:
        if not self.document.selection.active:
            return False
        return self.delete(0)

    # selection

    def mark(self) -> bool:
        return self.document.selection.mark(self.document.cursor)

    def unmark(self) -> None:
        self.document.selection.clear()

    def selected(self) -> bytes:
        span = self.document.selection.span
        if span is None:
            return b""
        return self.document.read(*span)


class Transaction(AbstractContextManager["Transaction"]):
    """Snapshot the buffer, then run one destructive edit inside a span."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self.buffer.snapshot()
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def rollback(self) -> None:
        """Put back the document exactly as it was when the transaction began."""

        previous = self.buffer.undo_log.pop()
        if previous is not None:
            self.buffer.document = previous

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
