"""Command vocabulary, shared editor context, and frame rendering."""

from .base import (
    Command,
    CommandHandler,
    CommandResult,
    EditorBus,
    EditorContext,
    Status,
    Viewport,
)
from .render import ColumnSpan, Frame, render_rows

__all__ = [
    "Command",
    "CommandHandler",
    "CommandResult",
    "EditorBus",
    "EditorContext",
    "Status",
    "Viewport",
    "ColumnSpan",
    "Frame",
    "render_rows",
]
