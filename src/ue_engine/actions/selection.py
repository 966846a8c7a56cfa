"""Block marks and the clipboard."""

from __future__ import annotations

from typing import Optional

from ue_engine.buffer import Transaction
from ue_engine.editor.base import CommandResult, EditorContext


def _emit_selection(context: EditorContext) -> None:
    context.bus.emit("selection.change", context.buffer.document.selection.span)


def mark(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    if not context.buffer.mark():
        return CommandResult(status="noop")
    _emit_selection(context)
    return CommandResult(status="ok", message="mark")


def unmark(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    context.buffer.unmark()
    _emit_selection(context)
    return CommandResult(status="ok", message="unmark")


def _yank(context: EditorContext) -> Optional[bytes]:
    buffer = context.buffer
    if not buffer.document.selection.active:
        return None
    block = buffer.selected()
    context.clipboard.yank(block)
    context.bus.emit("clipboard.yank", len(context.clipboard))
    return block


def copy(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    block = _yank(context)
    context.buffer.unmark()
    _emit_selection(context)
    if block is None:
        return CommandResult(status="no_selection")
    return CommandResult(status="ok", message="copy")


def cut(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    buffer = context.buffer
    with Transaction(buffer, "cut"):
        block = _yank(context)
        if block is not None:
            buffer.delete(0)
        buffer.unmark()
    _emit_selection(context)
    if block is None:
        return CommandResult(status="no_selection")
    context.bus.emit("buffer.change", "cut")
    return CommandResult(status="ok", message="cut")


def paste(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    buffer = context.buffer
    with Transaction(buffer, "paste") as transaction:
        buffer.replace_selection()
        ok = buffer.put(context.clipboard.contents)
        if not ok:
            transaction.rollback()
    if not ok:
        return CommandResult(status="capacity", message="paste")
    context.bus.emit("buffer.change", "paste")
    return CommandResult(status="ok", message="paste")


__all__ = ["mark", "unmark", "copy", "cut", "paste"]
