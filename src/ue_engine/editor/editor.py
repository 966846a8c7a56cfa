"""Editor: owns one document, the clipboard, and the view over them."""

from __future__ import annotations

from os import PathLike, fspath
from typing import Dict, Optional, Union

from ue_engine.actions import COMMAND_HANDLERS
from ue_engine.buffer import Buffer, Clipboard, Document
from ue_engine.codec import LoadResult, load_document
from ue_engine.config import EditorConfig
from ue_engine.layout import recompute_view, wrapped_row_start
from ue_engine.runtime import telemetry

from .base import (
    Command,
    CommandHandler,
    CommandResult,
    EditorBus,
    EditorContext,
    Status,
    Viewport,
)
from .render import Frame, render_rows

PathArg = Union[str, "PathLike[str]"]


class FileTooLargeError(RuntimeError):
    """Raised when a file does not fit the document capacity."""

    def __init__(self, path: PathArg, capacity: int) -> None:
        super().__init__(f"{fspath(path)}: file too big (capacity {capacity} bytes)")
        self.path = path
        self.capacity = capacity


class Editor:
    """Runs commands against a single document and renders the visible rows.

    The host feeds ``handle_command`` with command ids (plus raw UTF-8 bytes
    for ``insert_text``), keeps the geometry current with ``set_viewport``,
    and paints whatever ``render`` returns.
    """

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        path: Optional[PathArg] = None,
        config: Optional[EditorConfig] = None,
        clipboard: Optional[Clipboard] = None,
        bus: Optional[EditorBus] = None,
        handlers: Optional[Dict[Command, CommandHandler]] = None,
    ) -> None:
        if config is None:
            config = buffer.config if buffer is not None else EditorConfig()
        if buffer is None:
            # a buffer with no file behind it stays new until it is saved
            buffer = Buffer(
                config=config,
                document=Document(capacity=config.data_size, is_new=path is None),
            )
        if clipboard is None:
            clipboard = Clipboard(config.data_size)
        self.context = EditorContext(
            buffer=buffer,
            clipboard=clipboard,
            bus=bus if bus is not None else EditorBus(),
            config=config,
            path=path,
        )
        self._handlers: Dict[Command, CommandHandler] = dict(
            COMMAND_HANDLERS if handlers is None else handlers
        )
        self.running = True
        self._adopt(buffer)

    @classmethod
    def from_file(
        cls,
        path: PathArg,
        *,
        config: Optional[EditorConfig] = None,
        clipboard: Optional[Clipboard] = None,
        bus: Optional[EditorBus] = None,
    ) -> "Editor":
        editor = cls(path=path, config=config, clipboard=clipboard, bus=bus)
        editor.load(path)
        return editor

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    @property
    def document(self) -> Document:
        return self.context.buffer.document

    @property
    def clipboard(self) -> Clipboard:
        return self.context.clipboard

    @property
    def bus(self) -> EditorBus:
        return self.context.bus

    @property
    def viewport(self) -> Viewport:
        return self.context.viewport

    def load(self, path: PathArg) -> LoadResult:
        """Replace the document with the contents of ``path``.

        The clipboard survives; the undo ring starts empty.
        """

        config = self.context.config
        result = load_document(path, capacity=config.data_size)
        if result.too_large:
            raise FileTooLargeError(path, config.data_size)
        self.context.path = path
        self._adopt(Buffer(name=fspath(path), document=result.document, config=config))
        return result

    def _adopt(self, buffer: Buffer) -> None:
        context = self.context
        context.buffer = buffer
        context.quit_pending = False
        context.notice = Status.NEW_FILE if buffer.document.is_new else Status.NORMAL
        buffer.unmark()
        buffer.document.view_origin = 0
        self._settle_view(realign=True)

    def set_viewport(self, width: int, height: int) -> None:
        """Adopt new terminal geometry; the scroll ring is rebuilt for it."""

        context = self.context
        context.viewport = Viewport(width=width, height=height)
        context.cache.resize(height)
        self._settle_view(realign=True)
        telemetry.record_event(
            "editor.viewport", level="debug", data={"width": width, "height": height}
        )

    def _settle_view(self, *, realign: bool = False) -> None:
        context = self.context
        document = context.buffer.document
        if realign:
            # text or width changed under the origin; snap it back to a row start
            origin = min(document.view_origin, document.size)
            document.view_origin = wrapped_row_start(document, context.width, origin)
        recompute_view(document, context.width, context.cache)

    def _resolve(self, command: Union[Command, str]) -> Command:
        try:
            resolved = Command(command)
        except ValueError as exc:
            raise KeyError(f"Unknown command '{command}'") from exc
        if resolved not in self._handlers:
            raise KeyError(f"No handler for command '{resolved.value}'")
        return resolved

    def execute(
        self, command: Union[Command, str], text: Optional[bytes] = None
    ) -> CommandResult:
        """Run one command and return its full outcome."""

        resolved = self._resolve(command)
        context = self.context
        if context.quit_pending and resolved is not Command.QUIT:
            context.quit_pending = False
            if context.notice is Status.CONFIRM_QUIT:
                context.notice = Status.NORMAL

        with telemetry.span(
            name=f"editor::{resolved.value}",
            component=True,
            metadata={"command": resolved.value, "buffer": self.buffer.name},
        ) as handle:
            result = self._handlers[resolved](context, text)
            handle.add_metadata("status", result.status)

        # any edit may move the row breaks above the origin
        self._settle_view(realign=True)
        if not result.running:
            self.running = False
        return result

    def handle_command(
        self, command: Union[Command, str], text: Optional[bytes] = None
    ) -> bool:
        """Run one command; return whether the editor keeps running."""

        return self.execute(command, text).running

    def render(self) -> Frame:
        """Paint the current view. Pending notices are reported once, then dropped."""

        context = self.context
        self._settle_view()
        status, context.notice = context.notice, Status.NORMAL
        return render_rows(context.buffer.document, context.viewport, status)


__all__ = ["Editor", "FileTooLargeError"]
