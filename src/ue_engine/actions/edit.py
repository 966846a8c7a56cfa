"""Destructive edits and undo."""

from __future__ import annotations

from typing import Optional

from ue_engine.buffer import BLANK, Transaction
from ue_engine.codec import decode
from ue_engine.editor.base import CommandResult, EditorContext
from ue_engine.layout import wrapped_row_length, wrapped_row_start


def _changed(context: EditorContext, label: str, ok: bool = True) -> CommandResult:
    if not ok:
        return CommandResult(status="capacity", message=label)
    context.bus.emit("buffer.change", label)
    return CommandResult(status="ok", message=label)


def delete_char(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    buffer = context.buffer
    with Transaction(buffer, "delete_char"):
        changed = buffer.delete(1)
    if not changed:
        return CommandResult(status="noop")
    return _changed(context, "delete_char")


def backspace(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    buffer = context.buffer
    if buffer.cursor == 0:
        return CommandResult(status="noop")
    with Transaction(buffer, "backspace"):
        buffer.move_to(buffer.cursor - 1)
        buffer.delete(1)
    return _changed(context, "backspace")


def delete_line(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    buffer = context.buffer
    document = buffer.document
    width = context.width
    with Transaction(buffer, "delete_line"):
        document.set_cursor(wrapped_row_start(document, width, document.cursor))
        changed = buffer.delete(wrapped_row_length(document, width, document.cursor) + 1)
    if not changed:
        return CommandResult(status="noop")
    return _changed(context, "delete_line")


def insert_tab(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    buffer = context.buffer
    with Transaction(buffer, "tab") as transaction:
        replaced = buffer.replace_selection()
        document = buffer.document
        column = document.cursor - wrapped_row_start(document, context.width, document.cursor)
        count = context.config.tab_size - column % context.config.tab_size
        ok = buffer.insert_text(bytes([BLANK]) * count)
        if replaced and not ok:
            transaction.rollback()
    return _changed(context, "tab", ok)


def insert_text(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    """Decode raw UTF-8 key bytes and insert them, replacing any selection."""

    if not text:
        return CommandResult(status="noop")
    internal, _ = decode(text.replace(b"\r", b"\n"))
    buffer = context.buffer
    with Transaction(buffer, "insert_text") as transaction:
        replaced = buffer.replace_selection()
        ok = buffer.insert_text(internal)
        if replaced and not ok:
            transaction.rollback()
    return _changed(context, "insert_text", ok)


def undo(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    buffer = context.buffer
    if not buffer.undo():
        return CommandResult(status="undo_empty")
    context.bus.emit("buffer.undo", len(buffer.undo_log))
    return CommandResult(status="ok", message="undo")


__all__ = [
    "delete_char",
    "backspace",
    "delete_line",
    "insert_tab",
    "insert_text",
    "undo",
]
