from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import pytest

from edit_engine.adapters.textual import TextualTerminal
from edit_engine.buffer import NoFilenameError, TextBuffer
from edit_engine.controller import EditorController, EditorState
from edit_engine.input import (
    CTRL_Q,
    ArrowDown,
    ArrowLeft,
    ArrowRight,
    ArrowUp,
    Backspace,
    Char,
    Delete,
    End,
    Enter,
    Home,
    RawKey,
    RawMouse,
)
from edit_engine.runtime import EditorConfig


def make_controller(
    lines: Sequence[bytes],
    *,
    path: Optional[Path] = None,
    rows: int = 24,
    cols: int = 80,
    config: Optional[EditorConfig] = None,
) -> EditorController:
    buffer = TextBuffer(
        lines=lines, path=str(path) if path is not None else None, config=config
    )
    return EditorController(buffer, TextualTerminal(rows=rows, cols=cols))


def at(controller: EditorController, line: int, offset: int) -> EditorController:
    controller.cursor.move_to(line, offset)
    return controller


def test_enter_splits_line_and_moves_cursor() -> None:
    controller = at(make_controller([b"hello", b"world"]), 0, 5)
    controller.dispatch(Enter())

    assert controller.buffer.lines() == (b"hello", b"", b"world")
    assert controller.cursor.as_tuple() == (1, 0)


def test_backspace_at_document_start_does_nothing() -> None:
    controller = make_controller([b"ab"])
    controller.dispatch(Backspace())

    assert controller.buffer.lines() == (b"ab",)
    assert controller.cursor.as_tuple() == (0, 0)
    assert controller.buffer.is_dirty() is False


def test_backspace_at_line_start_joins_lines() -> None:
    controller = at(make_controller([b"a", b"b"]), 1, 0)
    controller.dispatch(Backspace())

    assert controller.buffer.lines() == (b"ab",)
    assert controller.cursor.as_tuple() == (0, 1)


def test_backspace_removes_whole_multibyte_codepoint() -> None:
    controller = at(make_controller(["a€".encode()]), 0, 4)
    controller.dispatch(Backspace())

    assert controller.buffer.lines() == (b"a",)
    assert controller.cursor.as_tuple() == (0, 1)


def test_char_inserts_and_advances_by_encoded_length() -> None:
    controller = make_controller([b""])
    for codepoint in (ord("x"), 0xE9, 0x4E2D, 0x1F600):
        controller.dispatch(Char(codepoint))

    expected = "xé中😀".encode()
    assert controller.buffer.lines() == (expected,)
    assert controller.cursor.as_tuple() == (0, len(expected))
    assert controller.buffer.is_dirty() is True


def test_tab_inserts_configured_spaces() -> None:
    controller = make_controller([b"ab"], config=EditorConfig(tab_stop=2))
    controller.cursor.move_to(0, 1)
    controller.dispatch(Char(9))

    assert controller.buffer.lines() == (b"a  b",)
    assert controller.cursor.as_tuple() == (0, 3)


def test_out_of_range_codepoint_is_ignored() -> None:
    controller = make_controller([b"ab"])
    controller.dispatch(Char(0x110000))
    assert controller.buffer.lines() == (b"ab",)
    assert controller.cursor.as_tuple() == (0, 0)


def test_enter_at_capacity_keeps_cursor() -> None:
    controller = at(make_controller([b"ab"], config=EditorConfig(max_lines=1)), 0, 1)
    controller.dispatch(Enter())

    assert controller.buffer.lines() == (b"ab",)
    assert controller.cursor.as_tuple() == (0, 1)


def test_horizontal_moves_step_over_codepoints_and_wrap_lines() -> None:
    controller = make_controller(["a€b".encode(), b"xy"])

    for expected in [(0, 1), (0, 4), (0, 5), (1, 0), (1, 1), (1, 2), (1, 2)]:
        controller.dispatch(ArrowRight())
        assert controller.cursor.as_tuple() == expected

    for expected in [(1, 1), (1, 0), (0, 5), (0, 4), (0, 1), (0, 0), (0, 0)]:
        controller.dispatch(ArrowLeft())
        assert controller.cursor.as_tuple() == expected


def test_vertical_moves_reclamp_onto_a_boundary() -> None:
    controller = at(make_controller(["a€b".encode(), b"wxyz", b"q"]), 1, 2)

    controller.feed(RawKey(name="up"))
    assert controller.cursor.as_tuple() == (0, 1)

    controller.cursor.move_to(1, 4)
    controller.feed(RawKey(name="down"))
    assert controller.cursor.as_tuple() == (2, 1)

    controller.dispatch(ArrowDown())
    controller.dispatch(ArrowDown())
    assert controller.cursor.line == 2

    controller.dispatch(ArrowUp())
    controller.dispatch(ArrowUp())
    controller.dispatch(ArrowUp())
    assert controller.cursor.line == 0


def test_home_and_end_jump_within_line() -> None:
    controller = at(make_controller(["a€b".encode()]), 0, 1)
    controller.dispatch(End())
    assert controller.cursor.as_tuple() == (0, 5)
    controller.dispatch(Home())
    assert controller.cursor.as_tuple() == (0, 0)


def test_page_moves_use_visible_text_rows() -> None:
    controller = make_controller([b"line"] * 10, rows=5, cols=20)
    controller.refresh()

    for expected in (4, 8, 9):
        controller.feed(RawKey(name="pagedown"))
        assert controller.cursor.line == expected

    controller.feed(RawKey(name="pageup"))
    assert controller.cursor.line == 5


def test_delete_removes_codepoint_after_cursor() -> None:
    controller = at(make_controller(["a€b".encode(), b"next"]), 0, 1)
    controller.dispatch(Delete())
    assert controller.buffer.lines() == (b"ab", b"next")
    assert controller.cursor.as_tuple() == (0, 1)

    controller.dispatch(End())
    controller.dispatch(Delete())
    assert controller.buffer.lines() == (b"abnext",)
    assert controller.cursor.as_tuple() == (0, 2)

    controller.dispatch(End())
    controller.dispatch(Delete())
    assert controller.buffer.lines() == (b"abnext",)


def test_mouse_click_places_cursor_through_gutter() -> None:
    controller = make_controller([b"hello", "w中rld".encode()])
    controller.refresh()

    controller.feed(RawMouse(row=1, col=3))
    assert controller.cursor.as_tuple() == (1, 1)

    controller.feed(RawMouse(row=1, col=4))
    assert controller.cursor.as_tuple() == (1, 4)

    controller.feed(RawMouse(row=0, col=0))
    assert controller.cursor.as_tuple() == (0, 0)

    controller.feed(RawMouse(row=20, col=70))
    assert controller.cursor.as_tuple() == (1, len("w中rld".encode()))


def test_quit_saves_and_stops(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    controller = make_controller([b"draft"], path=target)
    controller.dispatch(End())
    controller.dispatch(Char(ord("!")))

    state = controller.feed(RawKey(code=CTRL_Q))

    assert state is EditorState.QUITTING
    assert controller.running is False
    assert target.read_bytes() == b"draft!"
    assert controller.buffer.is_dirty() is False


def test_quit_without_filename_reports_error_and_stops() -> None:
    controller = make_controller([b"draft"])

    with pytest.raises(NoFilenameError):
        controller.feed(RawKey(code=27))

    assert controller.state is EditorState.QUITTING


def test_events_after_quit_are_ignored(tmp_path: Path) -> None:
    controller = make_controller([b""], path=tmp_path / "a.txt")
    controller.feed(RawKey(code=CTRL_Q))
    controller.dispatch(Char(ord("x")))
    assert controller.buffer.lines() == (b"",)


def test_interrupt_saves_at_next_checkpoint(tmp_path: Path) -> None:
    target = tmp_path / "interrupted.txt"
    controller = make_controller([b"keep me"], path=target)
    controller.dispatch(Char(ord(">")))

    controller.request_interrupt(2, None)
    assert controller.running is True

    assert controller.checkpoint() is False
    assert controller.state is EditorState.QUITTING
    assert target.read_bytes() == b">keep me"


def test_interrupt_without_filename_still_stops() -> None:
    controller = make_controller([b"text"])
    controller.request_interrupt()

    state = controller.feed(RawKey(code=ord("x")))

    assert state is EditorState.QUITTING
    assert controller.buffer.lines() == (b"xtext",)


def test_run_processes_queued_events_until_quit(tmp_path: Path) -> None:
    target = tmp_path / "run.txt"
    controller = make_controller([b""], path=target)
    terminal = controller.terminal
    assert isinstance(terminal, TextualTerminal)
    for code in (ord("h"), ord("i"), 13, ord("!")):
        terminal.push(RawKey(code=code))
    terminal.push(RawKey(code=CTRL_Q))

    controller.run()

    assert terminal.raw_mode is True
    assert terminal.mouse_reporting is True
    assert controller.state is EditorState.QUITTING
    assert target.read_bytes() == b"hi\n!"


def test_feed_renders_following_frame() -> None:
    controller = make_controller([b""], rows=6, cols=60)
    controller.feed(RawKey(code=ord("x")))

    terminal = controller.terminal
    assert isinstance(terminal, TextualTerminal)
    assert terminal.row_text(0).startswith("1 x")
    assert terminal.row_text(1).strip() == ""
    assert terminal.row_text(5).startswith("[No Name] - 1 lines (Modified)")
    assert terminal.row_text(5).endswith("Ln 1, Col 2 ")
    assert terminal.cursor == (0, 3)
