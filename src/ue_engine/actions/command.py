"""Save, quit, and the command dispatch table."""

from __future__ import annotations

from typing import Dict, Optional

from ue_engine.codec import save_document
from ue_engine.editor.base import (
    Command,
    CommandHandler,
    CommandResult,
    EditorContext,
    Status,
)
from ue_engine.runtime import telemetry

from . import edit, motion, selection


def save(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    del text
    if context.path is None:
        return CommandResult(status="save_failed", message="no file name")
    try:
        written = save_document(context.path, context.buffer.document)
    except OSError as exc:
        telemetry.record_event(
            "document.save_failed",
            level="error",
            data={"path": str(context.path), "error": str(exc)},
        )
        return CommandResult(status="save_failed", message=str(exc))
    context.bus.emit("document.save", {"path": str(context.path), "bytes": written})
    return CommandResult(status="saved", message=str(context.path))


def quit_editor(context: EditorContext, text: Optional[bytes] = None) -> CommandResult:
    """Quit, asking for a second request when there are unsaved changes."""

    del text
    if not context.buffer.document.modified or context.quit_pending:
        context.bus.emit("editor.quit", None)
        return CommandResult(running=False, status="quit")
    context.quit_pending = True
    context.notice = Status.CONFIRM_QUIT
    telemetry.record_event("editor.quit_pending", data={"path": str(context.path)})
    return CommandResult(status="confirm_quit", message="quit again to discard changes")


COMMAND_HANDLERS: Dict[Command, CommandHandler] = {
    Command.MOVE_LEFT: motion.move_left,
    Command.MOVE_RIGHT: motion.move_right,
    Command.MOVE_UP: motion.move_up,
    Command.MOVE_DOWN: motion.move_down,
    Command.LINE_HOME: motion.line_home,
    Command.LINE_END: motion.line_end,
    Command.PAGE_UP: motion.page_up,
    Command.PAGE_DOWN: motion.page_down,
    Command.DELETE_CHAR: edit.delete_char,
    Command.BACKSPACE: edit.backspace,
    Command.DELETE_LINE: edit.delete_line,
    Command.TAB: edit.insert_tab,
    Command.INSERT_TEXT: edit.insert_text,
    Command.UNDO: edit.undo,
    Command.MARK: selection.mark,
    Command.UNMARK: selection.unmark,
    Command.COPY: selection.copy,
    Command.CUT: selection.cut,
    Command.PASTE: selection.paste,
    Command.SAVE: save,
    Command.QUIT: quit_editor,
}


__all__ = ["save", "quit_editor", "COMMAND_HANDLERS"]
