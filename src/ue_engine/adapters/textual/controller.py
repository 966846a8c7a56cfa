"""Key translation and frame delivery between a Textual host and the Editor."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from ue_engine.editor import Command, CommandResult, Frame, Status
from ue_engine.editor.editor import Editor


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


KEY_COMMANDS: Mapping[str, Command] = MappingProxyType(
    {
        "left": Command.MOVE_LEFT,
        "ctrl+h": Command.MOVE_LEFT,
        "right": Command.MOVE_RIGHT,
        "ctrl+l": Command.MOVE_RIGHT,
        "up": Command.MOVE_UP,
        "ctrl+k": Command.MOVE_UP,
        "down": Command.MOVE_DOWN,
        "ctrl+j": Command.MOVE_DOWN,
        "home": Command.LINE_HOME,
        "ctrl+a": Command.LINE_HOME,
        "end": Command.LINE_END,
        "ctrl+e": Command.LINE_END,
        "pageup": Command.PAGE_UP,
        "ctrl+p": Command.PAGE_UP,
        "pagedown": Command.PAGE_DOWN,
        "ctrl+n": Command.PAGE_DOWN,
        "delete": Command.DELETE_CHAR,
        "ctrl+d": Command.DELETE_CHAR,
        "backspace": Command.BACKSPACE,
        "ctrl+y": Command.DELETE_LINE,
        "tab": Command.TAB,
        "ctrl+b": Command.MARK,
        "ctrl+u": Command.UNMARK,
        "ctrl+c": Command.COPY,
        "ctrl+x": Command.CUT,
        "ctrl+v": Command.PASTE,
        "ctrl+z": Command.UNDO,
        "ctrl+s": Command.SAVE,
        "ctrl+q": Command.QUIT,
    }
)

TEXT_KEYS: Mapping[str, bytes] = MappingProxyType({"enter": b"\r", "space": b" "})

NOTICES: Mapping[Status, str] = MappingProxyType(
    {
        Status.NEW_FILE: "<new file>",
        Status.CONFIRM_QUIT: "ctrl-q again to force quit",
    }
)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Turns Textual key names into editor commands and pushes frames back."""

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self._refresh()

    @property
    def running(self) -> bool:
        return self.editor.running

    def handle_textual_key(
        self, key: str, *, text: Optional[str] = None
    ) -> Optional[CommandResult]:
        """Dispatch one key; unknown keys without printable text are ignored."""

        self._log_state("key ->", key=key, text=text)
        command = KEY_COMMANDS.get(key)
        payload: Optional[bytes] = None
        if command is None:
            raw = TEXT_KEYS.get(key)
            if raw is None and text and text.isprintable():
                raw = text.encode("utf-8")
            if raw is None:
                return None
            command, payload = Command.INSERT_TEXT, raw

        result = self.editor.execute(command, payload)
        if result.status not in {"ok", "noop"}:
            self.hooks.update_status(result.message or result.status)
        self._log_state(
            "result <-",
            command=command.value,
            status=result.status,
            running=result.running,
        )
        if result.running:
            self._refresh()
        return result

    def resize(self, width: int, height: int) -> None:
        self.editor.set_viewport(width, height)
        self._log_state("resize ->", width=width, height=height)
        self._refresh()

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in (
            "document.save",
            "editor.quit",
            "clipboard.yank",
            "selection.change",
            "buffer.undo",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        if name == "document.save" and isinstance(payload, dict):
            self.hooks.update_status(f"saved {payload.get('path')}")

    def _refresh(self) -> None:
        frame = self.editor.render()
        notice = NOTICES.get(frame.status)
        if notice:
            self.hooks.update_status(notice)
        self.hooks.update_frame(frame)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        view = self.editor.buffer.view()
        return {
            "cursor": view.cursor,
            "size": len(view.text),
            "selection": view.selection,
            "modified": view.modified,
            "buffer": self.editor.buffer.name,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "KEY_COMMANDS", "NOTICES"]
