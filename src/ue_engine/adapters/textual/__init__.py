"""Textual host for the editor core."""

from .controller import KEY_COMMANDS, NOTICES, TextualEditorAdapter, TextualUIHooks

__all__ = ["KEY_COMMANDS", "NOTICES", "TextualEditorAdapter", "TextualUIHooks"]
