"""Cursor motion over wrapped rows."""

from __future__ import annotations

from typing import Optional

from ue_engine.editor.base import CommandResult, EditorContext
from ue_engine.layout import wrapped_row_length, wrapped_row_start


def _moved(context: EditorContext, before: int) -> CommandResult:
    after = context.buffer.cursor
    if after == before:
        return CommandResult(status="noop")
    context.bus.emit("cursor.move", {"from": before, "to": after})
    return CommandResult(status="ok")


def move_left(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    before = context.buffer.cursor
    if before > 0:
        context.buffer.move_to(before - 1)
    return _moved(context, before)


def move_right(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    buffer = context.buffer
    before = buffer.cursor
    if before < buffer.size:
        buffer.move_to(before + 1)
    return _moved(context, before)


def line_home(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    document = context.buffer.document
    before = document.cursor
    document.set_cursor(wrapped_row_start(document, context.width, before))
    return _moved(context, before)


def line_end(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    document = context.buffer.document
    before = document.cursor
    col0 = wrapped_row_start(document, context.width, before)
    document.set_cursor(col0 + wrapped_row_length(document, context.width, col0))
    return _moved(context, before)


def _step_up(context: EditorContext) -> None:
    document = context.buffer.document
    width = context.width
    col0 = wrapped_row_start(document, width, document.cursor)
    if not col0:
        return
    column = document.cursor - col0
    col0 = wrapped_row_start(document, width, col0 - 1)
    document.set_cursor(col0 + min(column, wrapped_row_length(document, width, col0)))


def _step_down(context: EditorContext) -> None:
    document = context.buffer.document
    width = context.width
    col0 = wrapped_row_start(document, width, document.cursor)
    column = document.cursor - col0
    length = wrapped_row_length(document, width, col0)
    if col0 + length >= document.size:
        return
    col0 += length + 1
    document.set_cursor(col0 + min(column, wrapped_row_length(document, width, col0)))


def move_up(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    before = context.buffer.cursor
    _step_up(context)
    return _moved(context, before)


def move_down(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    before = context.buffer.cursor
    _step_down(context)
    return _moved(context, before)


def page_up(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    before = context.buffer.cursor
    for _ in range(context.height - 1):
        _step_up(context)
    return _moved(context, before)


def page_down(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    before = context.buffer.cursor
    for _ in range(context.height - 1):
        _step_down(context)
    return _moved(context, before)


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "line_home",
    "line_end",
    "page_up",
    "page_down",
]
