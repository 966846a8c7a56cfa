"""Command vocabulary and the shared state every command handler sees."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from os import PathLike
from typing import Callable, Dict, Optional, Union

from ue_engine.buffer import Buffer, Clipboard
from ue_engine.config import DEFAULT_HEIGHT, DEFAULT_WIDTH, EditorConfig
from ue_engine.layout import ScrollCache


class Command(str, Enum):
    """Editor commands the host can issue."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    LINE_HOME = "line_home"
    LINE_END = "line_end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    DELETE_CHAR = "delete_char"
    BACKSPACE = "backspace"
    DELETE_LINE = "delete_line"
    TAB = "tab"
    MARK = "mark"
    UNMARK = "unmark"
    COPY = "copy"
    CUT = "cut"
    PASTE = "paste"
    UNDO = "undo"
    SAVE = "save"
    QUIT = "quit"
    INSERT_TEXT = "insert_text"


class Status(str, Enum):
    """Transient notice a frame carries for the host to show."""

    NORMAL = "normal"
    NEW_FILE = "new_file"
    CONFIRM_QUIT = "confirm_quit"


@dataclass(slots=True)
class CommandResult:
    """Outcome of one command."""

    running: bool = True
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class Viewport:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ValueError("width must be positive")
        if self.height < 2:
            raise ValueError("height must be at least 2")


class EditorBus:
    """Minimal event bus so hosts can observe editor signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class EditorContext:
    """Everything a command handler may read or change."""

    buffer: Buffer
    clipboard: Clipboard
    bus: EditorBus
    config: EditorConfig
    viewport: Viewport = field(default_factory=Viewport)
    cache: ScrollCache = field(default_factory=lambda: ScrollCache(DEFAULT_HEIGHT))
    path: Optional[Union[str, PathLike[str]]] = None
    quit_pending: bool = False
    notice: Status = Status.NORMAL

    @property
    def width(self) -> int:
        return self.viewport.width

    @property
    def height(self) -> int:
        return self.viewport.height


CommandHandler = Callable[[EditorContext, Optional[bytes]], CommandResult]

__all__ = [
    "Command",
    "CommandHandler",
    "CommandResult",
    "EditorBus",
    "EditorContext",
    "Status",
    "Viewport",
]
