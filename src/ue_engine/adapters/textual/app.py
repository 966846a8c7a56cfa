"""Executable Textual app hosting the editor core."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use ue_engine.adapters.textual.app"
    ) from exc

from ue_engine.config import EditorConfig
from ue_engine.editor import Frame
from ue_engine.editor.editor import Editor, FileTooLargeError

from .controller import TextualEditorAdapter, TextualUIHooks


def _printable(line: str) -> str:
    return "".join(ch if ch.isprintable() else "?" for ch in line)


def frame_to_text(frame: Frame) -> Text:
    """Build a Rich ``Text`` with the selection and cursor in reverse video."""

    text = Text(no_wrap=True, overflow="crop")
    for index, line in enumerate(frame.lines()):
        row = Text(_printable(line))
        highlight = frame.highlights[index]
        if highlight is not None:
            row.stylize("reverse", *highlight)
        if frame.cursor_row == index and frame.cursor_column is not None:
            row.stylize("reverse underline", frame.cursor_column, frame.cursor_column + 1)
        if index:
            text.append("\n")
        text.append_text(row)
    return text


class UeApp(App[None]):
    """Full-screen editor: one document view plus a status line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "editor_key('ctrl+q')", "Quit", show=False, priority=True),
        Binding("ctrl+c", "editor_key('ctrl+c')", "Copy", show=False, priority=True),
        Binding("tab", "editor_key('tab')", "Tab", show=False, priority=True),
    ]

    def __init__(self, editor: Editor) -> None:
        super().__init__()
        self.editor = editor
        self.adapter: TextualEditorAdapter | None = None
        self._document_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._document_widget = Static("", id="document-view")
        self._status_widget = Static("", id="status-line")
        yield self._document_widget
        yield self._status_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            update_status=self._update_status,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        self._resize(self.size.width, self.size.height)

    def on_resize(self, event: events.Resize) -> None:
        self._resize(event.size.width, event.size.height)

    def _resize(self, width: int, height: int) -> None:
        if self.adapter:
            # last line belongs to the status bar
            self.adapter.resize(max(1, width), max(2, height - 1))

    async def on_key(self, event: events.Key) -> None:
        self._dispatch(event.key, event.character)
        event.stop()

    def action_editor_key(self, key: str) -> None:
        self._dispatch(key, None)

    def _dispatch(self, key: str, text: Optional[str]) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(key, text=text)
        if not self.adapter.running:
            self.exit()

    def _update_frame(self, frame: Frame) -> None:
        if self._document_widget:
            self._document_widget.update(frame_to_text(frame))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="ue", description="Edit one text file.")
    parser.add_argument("file", help="file to edit (created on first save)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        editor = Editor.from_file(args.file, config=EditorConfig.from_env())
    except FileTooLargeError:
        print("ERROR: file too big")
        return 1
    UeApp(editor).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
