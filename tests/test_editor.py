from __future__ import annotations

import random
from pathlib import Path
from typing import List, Optional

import pytest

from ue_engine.buffer import Buffer, Clipboard
from ue_engine.config import EditorConfig
from ue_engine.editor import Command, EditorBus, Status
from ue_engine.editor.editor import Editor, FileTooLargeError
from ue_engine.layout import wrapped_row_start


def make_editor(
    text: bytes = b"",
    *,
    data_size: int = 64,
    width: int = 10,
    height: int = 5,
    path: Optional[Path] = None,
    bus: Optional[EditorBus] = None,
) -> Editor:
    config = EditorConfig(data_size=data_size, undo_levels=8, tab_size=4)
    editor = Editor(Buffer.from_bytes(text, config=config), path=path, bus=bus)
    editor.set_viewport(width, height)
    return editor


def run(editor: Editor, *commands: Command) -> None:
    for command in commands:
        editor.handle_command(command)


def test_typing_inserts_decoded_text() -> None:
    editor = make_editor()

    assert editor.handle_command(Command.INSERT_TEXT, "héllo—".encode("utf-8")) is True

    assert editor.buffer.contents == b"h\xe9llo\x97"
    assert editor.document.cursor == 6
    assert editor.document.modified is True


def test_enter_key_carriage_return_becomes_newline() -> None:
    editor = make_editor()

    editor.handle_command(Command.INSERT_TEXT, b"a\rb")

    assert editor.buffer.contents == b"a\nb"


def test_command_ids_may_be_plain_strings() -> None:
    editor = make_editor(b"abc")

    editor.handle_command("move_right")

    assert editor.document.cursor == 1


def test_unknown_command_raises_key_error() -> None:
    editor = make_editor()

    with pytest.raises(KeyError):
        editor.handle_command("launch_rockets")


def test_horizontal_motion_is_bounded() -> None:
    editor = make_editor(b"ab")

    result = editor.execute(Command.MOVE_LEFT)
    assert result.status == "noop"

    run(editor, Command.MOVE_RIGHT, Command.MOVE_RIGHT, Command.MOVE_RIGHT)
    assert editor.document.cursor == 2


def test_home_and_end_work_on_wrapped_rows() -> None:
    editor = make_editor(b"the quick fox")
    editor.buffer.move_to(11)

    editor.handle_command(Command.LINE_HOME)
    assert editor.document.cursor == 10

    editor.handle_command(Command.LINE_END)
    assert editor.document.cursor == 13

    editor.buffer.move_to(2)
    editor.handle_command(Command.LINE_END)
    assert editor.document.cursor == 9


def test_vertical_motion_keeps_column_when_possible() -> None:
    editor = make_editor(b"abcdef\nxy\nlonger")
    editor.buffer.move_to(4)

    editor.handle_command(Command.MOVE_DOWN)
    assert editor.document.cursor == 9  # end of "xy"

    editor.handle_command(Command.MOVE_DOWN)
    assert editor.document.cursor == 12

    editor.handle_command(Command.MOVE_UP)
    assert editor.document.cursor == 9

    run(editor, Command.MOVE_UP, Command.MOVE_UP)
    assert editor.document.cursor == 2


def test_move_down_on_last_row_does_nothing() -> None:
    editor = make_editor(b"abc")
    editor.buffer.move_to(1)

    assert editor.execute(Command.MOVE_DOWN).status == "noop"
    assert editor.document.cursor == 1


def test_paging_moves_height_minus_one_rows() -> None:
    text = b"".join(b"%d\n" % (i % 10) for i in range(20))
    editor = make_editor(text, height=5)

    editor.handle_command(Command.PAGE_DOWN)
    assert editor.document.cursor == 8

    editor.handle_command(Command.PAGE_DOWN)
    assert editor.document.cursor == 16

    editor.handle_command(Command.PAGE_UP)
    assert editor.document.cursor == 8


def test_backspace_and_delete() -> None:
    editor = make_editor(b"abc")

    assert editor.execute(Command.BACKSPACE).status == "noop"
    assert len(editor.buffer.undo_log) == 0

    editor.handle_command(Command.DELETE_CHAR)
    assert editor.buffer.contents == b"bc"

    editor.buffer.move_to(2)
    editor.handle_command(Command.BACKSPACE)
    assert editor.buffer.contents == b"b"
    assert editor.document.cursor == 1


def test_delete_line_removes_row_and_separator() -> None:
    editor = make_editor(b"abc\ndef\nghi")
    editor.buffer.move_to(5)

    editor.handle_command(Command.DELETE_LINE)
    assert editor.buffer.contents == b"abc\nghi"
    assert editor.document.cursor == 4

    editor.handle_command(Command.DELETE_LINE)
    assert editor.buffer.contents == b"abc\n"


def test_tab_pads_to_next_stop() -> None:
    editor = make_editor()

    editor.handle_command(Command.TAB)
    assert editor.buffer.contents == b"    "

    editor.handle_command(Command.INSERT_TEXT, b"ab")
    editor.handle_command(Command.TAB)
    assert editor.buffer.contents == b"    ab  "


def test_mark_mark_cut_moves_block_to_clipboard() -> None:
    editor = make_editor(b"0123456789")
    run(editor, Command.MOVE_RIGHT, Command.MOVE_RIGHT, Command.MARK)
    run(editor, Command.MOVE_RIGHT, Command.MOVE_RIGHT, Command.MOVE_RIGHT, Command.MARK)

    result = editor.execute(Command.CUT)

    assert result.status == "ok"
    assert editor.clipboard.contents == b"234"
    assert editor.buffer.contents == b"0156789"
    assert editor.document.size == 7
    assert editor.document.cursor == 2
    assert editor.document.selection.span is None


def test_copy_then_paste_elsewhere() -> None:
    editor = make_editor(b"abc")
    run(editor, Command.MARK, Command.MOVE_RIGHT, Command.MOVE_RIGHT, Command.MARK)

    editor.handle_command(Command.COPY)
    assert editor.clipboard.contents == b"ab"
    assert editor.document.selection.span is None
    assert editor.buffer.contents == b"abc"

    editor.handle_command(Command.LINE_END)
    editor.handle_command(Command.PASTE)
    assert editor.buffer.contents == b"abcab"
    assert editor.document.cursor == 5


def test_copy_without_selection_reports_it() -> None:
    editor = make_editor(b"abc")

    assert editor.execute(Command.COPY).status == "no_selection"
    assert editor.execute(Command.CUT).status == "no_selection"
    assert editor.buffer.contents == b"abc"


def test_typing_replaces_the_selection() -> None:
    editor = make_editor(b"hello world")
    editor.buffer.move_to(6)
    editor.handle_command(Command.MARK)
    editor.handle_command(Command.LINE_END)
    editor.handle_command(Command.MARK)

    editor.handle_command(Command.INSERT_TEXT, b"there")

    assert editor.buffer.contents == b"hello there"


def test_unmark_clears_both_marks() -> None:
    editor = make_editor(b"abc")
    run(editor, Command.MARK, Command.MOVE_RIGHT, Command.MARK, Command.UNMARK)

    assert editor.document.selection.start is None
    assert editor.document.selection.end is None


def test_paste_that_does_not_fit_changes_nothing() -> None:
    editor = make_editor(b"abcdef", data_size=8)
    run(editor, Command.MARK, Command.LINE_END, Command.MARK, Command.COPY)

    result = editor.execute(Command.PASTE)

    assert result.status == "capacity"
    assert editor.buffer.contents == b"abcdef"


def test_typing_past_capacity_reports_it() -> None:
    editor = make_editor(data_size=8)

    result = editor.execute(Command.INSERT_TEXT, b"abcdefghij")

    assert result.status == "capacity"
    assert editor.document.size == 7


def test_undo_reverts_one_command_at_a_time() -> None:
    editor = make_editor(b"abc")
    editor.handle_command(Command.INSERT_TEXT, b"x")
    editor.handle_command(Command.DELETE_CHAR)
    assert editor.buffer.contents == b"xbc"

    editor.handle_command(Command.UNDO)
    assert editor.buffer.contents == b"xabc"

    editor.handle_command(Command.UNDO)
    assert editor.buffer.contents == b"abc"
    assert editor.document.cursor == 0
    assert editor.document.modified is False

    assert editor.execute(Command.UNDO).status == "undo_empty"


def test_cut_takes_a_single_snapshot() -> None:
    editor = make_editor(b"abcdef")
    run(editor, Command.MARK, Command.MOVE_RIGHT, Command.MARK, Command.CUT)

    assert len(editor.buffer.undo_log) == 1
    editor.handle_command(Command.UNDO)
    assert editor.buffer.contents == b"abcdef"
    assert editor.document.selection.span == (0, 1)


def test_quit_without_changes_stops_immediately() -> None:
    editor = make_editor(b"abc")

    assert editor.handle_command(Command.QUIT) is False
    assert editor.running is False


def test_quit_with_changes_needs_confirmation() -> None:
    editor = make_editor()
    editor.handle_command(Command.INSERT_TEXT, b"x")

    assert editor.handle_command(Command.QUIT) is True
    frame = editor.render()
    assert frame.status is Status.CONFIRM_QUIT
    assert editor.render().status is Status.NORMAL

    assert editor.handle_command(Command.QUIT) is False


def test_other_command_cancels_pending_quit_but_still_runs() -> None:
    editor = make_editor()
    editor.handle_command(Command.INSERT_TEXT, b"xy")

    editor.handle_command(Command.QUIT)
    assert editor.handle_command(Command.MOVE_LEFT) is True
    assert editor.document.cursor == 1

    assert editor.handle_command(Command.QUIT) is True
    assert editor.handle_command(Command.QUIT) is False


def test_render_wraps_rows_and_blanks_the_rest() -> None:
    editor = make_editor(b"the quick fox", width=10, height=3)

    frame = editor.render()

    assert frame.rows == (b"the quick ", b"fox       ", b"          ")
    assert frame.cursor == (0, 0)
    assert frame.lines()[1] == "fox       "


def test_render_shows_newlines_as_blanks_and_tracks_cursor() -> None:
    editor = make_editor(b"ab\ncd", width=6, height=3)
    editor.buffer.move_to(5)

    frame = editor.render()

    assert frame.rows[0] == b"ab    "
    assert frame.rows[1] == b"cd    "
    assert (frame.cursor_column, frame.cursor_row) == (2, 1)


def test_render_reports_selected_columns() -> None:
    editor = make_editor(b"abcdef\nghij", width=8, height=3)
    editor.buffer.move_to(4)
    editor.handle_command(Command.MARK)
    editor.buffer.move_to(9)
    editor.handle_command(Command.MARK)

    frame = editor.render()

    assert frame.highlights[0] == (4, 7)
    assert frame.highlights[1] == (0, 2)
    assert frame.highlights[2] is None


def test_render_scrolls_to_keep_cursor_visible() -> None:
    text = b"".join(b"%d\n" % (i % 10) for i in range(30))
    editor = make_editor(text, height=4)

    for _ in range(15):
        editor.handle_command(Command.MOVE_DOWN)
        frame = editor.render()
        assert frame.cursor is not None
        assert frame.rows[frame.cursor_row][0:1] == b"%d" % (editor.document.cursor // 2 % 10)


def test_viewport_validation() -> None:
    editor = make_editor()

    with pytest.raises(ValueError):
        editor.set_viewport(0, 10)
    with pytest.raises(ValueError):
        editor.set_viewport(10, 1)


def test_resize_realigns_view_origin() -> None:
    editor = make_editor(b"aaaa bbbb cccc dddd " * 4, data_size=128, width=10, height=3)
    editor.buffer.move_to(len(editor.buffer.contents))
    editor.render()

    editor.set_viewport(7, 3)

    origin = editor.document.view_origin
    assert wrapped_row_start(editor.document, 7, origin) == origin


def test_editing_after_the_origin_keeps_it_a_row_start() -> None:
    editor = make_editor(b"aaaa bbbbbbbbbb\n" + b"z\n" * 10, width=10, height=3)
    editor.buffer.move_to(5)
    editor.document.view_origin = 5
    for _ in range(6):
        editor.handle_command(Command.DELETE_CHAR)

    origin = editor.document.view_origin
    assert wrapped_row_start(editor.document, 10, origin) == origin


def test_invariants_hold_under_random_commands() -> None:
    rng = random.Random(20240611)
    editor = make_editor(b"some words here\nand a second line\n", data_size=48, width=7)
    commands: List[Command] = [c for c in Command if c not in {Command.QUIT, Command.SAVE}]

    for _ in range(600):
        command = rng.choice(commands)
        text = bytes(rng.choice(b"ab \r") for _ in range(rng.randint(1, 4)))
        editor.handle_command(command, text if command is Command.INSERT_TEXT else None)

        document = editor.document
        assert 0 <= document.size < document.capacity
        assert 0 <= document.cursor <= document.size
        for bound in (document.selection.start, document.selection.end):
            assert bound is None or 0 <= bound <= document.size
        origin = document.view_origin
        assert 0 <= origin <= document.cursor
        assert wrapped_row_start(document, 7, origin) == origin
        assert editor.render().cursor is not None


def test_save_command_writes_utf8_and_clears_modified(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    events: List[object] = []
    bus = EditorBus()
    bus.subscribe("document.save", events.append)
    editor = make_editor(path=target, bus=bus)
    editor.handle_command(Command.INSERT_TEXT, "a—b".encode("utf-8"))

    result = editor.execute(Command.SAVE)

    assert result.status == "saved"
    assert target.read_bytes() == "a—b".encode("utf-8")
    assert editor.document.modified is False
    assert events and events[0]["bytes"] == 5
    assert editor.handle_command(Command.QUIT) is False


def test_save_failure_is_reported_not_raised(tmp_path: Path) -> None:
    editor = make_editor(path=tmp_path)
    editor.handle_command(Command.INSERT_TEXT, b"x")

    result = editor.execute(Command.SAVE)

    assert result.status == "save_failed"
    assert result.running is True
    assert editor.document.modified is True


def test_save_without_path_is_reported() -> None:
    editor = make_editor(b"abc")

    assert editor.execute(Command.SAVE).status == "save_failed"


def test_from_file_marks_new_files(tmp_path: Path) -> None:
    editor = Editor.from_file(tmp_path / "fresh.txt")

    assert editor.render().status is Status.NEW_FILE
    assert editor.render().status is Status.NORMAL
    assert editor.document.size == 0


def test_from_file_round_trips_em_dash(tmp_path: Path) -> None:
    source = tmp_path / "dash.txt"
    source.write_bytes(b"\xe2\x80\x94")

    editor = Editor.from_file(source)

    assert editor.buffer.contents == b"\x97"
    assert editor.render().status is Status.NORMAL
    editor.handle_command(Command.SAVE)
    assert source.read_bytes() == b"\xe2\x80\x94"


def test_from_file_refuses_oversized_files(tmp_path: Path) -> None:
    source = tmp_path / "big.txt"
    source.write_bytes(b"x" * 16)

    with pytest.raises(FileTooLargeError) as excinfo:
        Editor.from_file(source, config=EditorConfig(data_size=16))

    assert excinfo.value.capacity == 16


def test_clipboard_survives_loading_another_file(tmp_path: Path) -> None:
    first = tmp_path / "one.txt"
    first.write_bytes(b"hello")
    second = tmp_path / "two.txt"
    second.write_bytes(b"world")
    clipboard = Clipboard()
    editor = Editor.from_file(first, clipboard=clipboard)
    run(editor, Command.MARK, Command.LINE_END, Command.MARK, Command.COPY)

    editor.load(second)
    editor.handle_command(Command.PASTE)

    assert editor.buffer.contents == b"helloworld"
    assert editor.clipboard is clipboard


def test_cursor_on_consumed_separator_stays_on_its_row() -> None:
    editor = make_editor(b"abcdefghij", width=7, height=3)
    editor.buffer.move_to(7)

    frame = editor.render()

    assert frame.rows[0] == b"abcdefg"
    assert frame.rows[1] == b"ij     "
    assert frame.cursor == (6, 0)


def test_same_size_replacement_above_origin_realigns_view() -> None:
    editor = make_editor(b"ab\n\ncd", width=10, height=2)
    editor.buffer.move_to(2)
    editor.handle_command(Command.MARK)
    editor.buffer.move_to(4)
    editor.handle_command(Command.MARK)
    assert editor.document.view_origin == 3

    editor.handle_command(Command.INSERT_TEXT, b"xy")

    assert editor.buffer.contents == b"abxycd"
    assert editor.document.view_origin == 0
    frame = editor.render()
    assert frame.rows[0] == b"abxycd    "
    assert frame.cursor == (4, 0)


def test_tab_over_selection_keeps_origin_on_a_row_start() -> None:
    editor = make_editor(b"abcdefgh ijkl\nmn\nop", width=10, height=2)
    editor.buffer.move_to(2)
    editor.handle_command(Command.MARK)
    editor.buffer.move_to(6)
    editor.handle_command(Command.MARK)

    editor.handle_command(Command.TAB)

    origin = editor.document.view_origin
    assert wrapped_row_start(editor.document, 10, origin) == origin
    assert editor.render().cursor is not None


def test_empty_clipboard_passed_in_is_kept() -> None:
    shared = Clipboard(64)
    config = EditorConfig(data_size=64)

    first = Editor(Buffer.from_bytes(b"one", config=config), clipboard=shared)
    second = Editor(Buffer.from_bytes(b"two", config=config), clipboard=shared)
    run(first, Command.MARK, Command.LINE_END, Command.MARK, Command.COPY)
    second.handle_command(Command.PASTE)

    assert first.clipboard is shared
    assert second.buffer.contents == b"onetwo"


def test_editor_without_a_file_starts_as_new() -> None:
    editor = Editor()

    assert editor.document.is_new is True
    assert editor.render().status is Status.NEW_FILE


def test_typing_over_selection_that_does_not_fit_changes_nothing() -> None:
    editor = make_editor(b"abcdef", data_size=8)
    run(editor, Command.MARK, Command.MOVE_RIGHT, Command.MOVE_RIGHT, Command.MARK)

    result = editor.execute(Command.INSERT_TEXT, b"wxyz")

    assert result.status == "capacity"
    assert editor.buffer.contents == b"abcdef"
    assert editor.document.selection.span == (0, 2)
    assert len(editor.buffer.undo_log) == 0


def test_paste_over_selection_that_does_not_fit_changes_nothing() -> None:
    editor = make_editor(b"abcdef", data_size=8)
    run(editor, Command.MARK, Command.LINE_END, Command.MARK, Command.COPY)
    run(editor, Command.LINE_HOME, Command.MARK, Command.MOVE_RIGHT, Command.MARK)

    result = editor.execute(Command.PASTE)

    assert result.status == "capacity"
    assert editor.buffer.contents == b"abcdef"
    assert editor.document.selection.span == (0, 1)
    assert editor.document.cursor == 1
