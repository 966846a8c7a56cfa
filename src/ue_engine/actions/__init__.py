"""Command handlers, one function per editor command."""

from .command import COMMAND_HANDLERS, quit_editor, save
from .edit import backspace, delete_char, delete_line, insert_tab, insert_text, undo
from .motion import (
    line_end,
    line_home,
    move_down,
    move_left,
    move_right,
    move_up,
    page_down,
    page_up,
)
from .selection import copy, cut, mark, paste, unmark

__all__ = [
    "COMMAND_HANDLERS",
    "save",
    "quit_editor",
    "backspace",
    "delete_char",
    "delete_line",
    "insert_tab",
    "insert_text",
    "undo",
    "line_end",
    "line_home",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "page_down",
    "page_up",
    "copy",
    "cut",
    "mark",
    "paste",
    "unmark",
]
