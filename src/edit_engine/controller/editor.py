"""Editor state machine: owns the cursor and turns events into edits."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

from edit_engine.buffer import CursorPosition, SaveError, TextBuffer, clamp, clamp_cursor
from edit_engine.display import Renderer, TerminalBackend
from edit_engine.input import (
    TAB,
    ArrowDown,
    ArrowLeft,
    ArrowRight,
    ArrowUp,
    Backspace,
    Char,
    Delete,
    EditorEvent,
    End,
    Enter,
    Home,
    InputDecoder,
    MouseClick,
    PageDown,
    PageUp,
    Quit,
    RawEvent,
)
from edit_engine.runtime import telemetry
from edit_engine.text.codec import encode, next_boundary, prev_boundary
from edit_engine.viewport import ViewportMapper


class EditorState(str, Enum):
    RUNNING = "running"
    QUITTING = "quitting"


class EditorController:
    """Single-threaded loop: clamp, scroll, render, read one event, dispatch.

    ``run`` drives the loop for terminals that block on input. Hosts that
    push events instead (such as the Textual app) call ``refresh`` once and
    then ``feed`` for every raw event they receive.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        terminal: TerminalBackend,
        *,
        decoder: Optional[InputDecoder] = None,
        mapper: Optional[ViewportMapper] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.buffer = buffer
        self.terminal = terminal
        self.decoder = decoder or InputDecoder()
        self.mapper = mapper or ViewportMapper()
        self.renderer = renderer or Renderer()
        self.cursor = CursorPosition()
        self.state = EditorState.RUNNING
        self._interrupt_requested = False
        self._handlers: Dict[type, Callable[[EditorEvent], None]] = {
            Char: self._insert_char,
            Enter: self._split_line,
            Backspace: self._delete_backward,
            Delete: self._delete_forward,
            ArrowLeft: self._move_left,
            ArrowRight: self._move_right,
            ArrowUp: lambda _event: self._move_lines(-1),
            ArrowDown: lambda _event: self._move_lines(1),
            Home: self._move_home,
            End: self._move_end,
            PageUp: lambda _event: self._move_lines(-self.mapper.text_rows),
            PageDown: lambda _event: self._move_lines(self.mapper.text_rows),
            MouseClick: self._click,
            Quit: self._quit,
        }

    @property
    def running(self) -> bool:
        return self.state is EditorState.RUNNING

    def request_interrupt(self, *_signal_args: object) -> None:
        """Ask the loop to save and stop at its next checkpoint.

        Safe to install directly as a signal handler: it only sets a flag.
        """

        self._interrupt_requested = True

    def start(self) -> None:
        self.terminal.set_raw_mode()
        self.terminal.enable_mouse_reporting()

    def run(self) -> None:
        self.start()
        while self.checkpoint():
            self.refresh()
            self.dispatch(self.decoder.decode(self.terminal.read_raw_event()))

    def feed(self, raw: RawEvent) -> EditorState:
        """Process one pushed event and draw the following frame."""

        self.dispatch(self.decoder.decode(raw))
        if self.checkpoint():
            self.refresh()
        return self.state

    def checkpoint(self) -> bool:
        """Act on a pending interrupt; return whether the loop keeps going."""

        if not self.running:
            return False
        if self._interrupt_requested:
            self._save_on_interrupt()
            self.state = EditorState.QUITTING
            return False
        return True

    def refresh(self) -> None:
        clamp_cursor(self.buffer, self.cursor)
        rows, cols = self.terminal.get_size()
        self.mapper.scroll(self.cursor, self.buffer, rows, cols)
        self.renderer.render(self.terminal, self.buffer, self.cursor, self.mapper)

    def dispatch(self, event: EditorEvent) -> None:
        handler = self._handlers.get(type(event))
        if handler is None or not self.running:
            return
        clamp_cursor(self.buffer, self.cursor)
        with telemetry.span(
            f"controller::{event.name}",
            component="controller",
            metadata={"cursor": self.cursor.as_tuple()},
        ):
            handler(event)

    def _insert_char(self, event: EditorEvent) -> None:
        assert isinstance(event, Char)
        line, offset = self.cursor.as_tuple()
        if event.codepoint == TAB:
            data = self.buffer.config.tab_expansion
            self.buffer.insert_string(line, offset, data)
        elif event.codepoint < 0x80:
            data = encode(event.codepoint)
            self.buffer.insert_codepoint(line, offset, event.codepoint)
        else:
            data = encode(event.codepoint)
            if not data:
                return
            self.buffer.insert_string(line, offset, data)
        self.cursor.offset += len(data)

    def _split_line(self, _event: EditorEvent) -> None:
        line, offset = self.cursor.as_tuple()
        count = self.buffer.line_count()
        self.buffer.split_line(line, offset)
        if self.buffer.line_count() > count:
            self.cursor.move_to(line + 1, 0)

    def _delete_backward(self, _event: EditorEvent) -> None:
        line, offset = self.cursor.as_tuple()
        if offset > 0:
            target = prev_boundary(self.buffer.get_line(line), offset)
            self.buffer.delete_at(line, offset)
            self.cursor.offset = target
        elif line > 0:
            merge_offset = len(self.buffer.get_line(line - 1))
            self.buffer.delete_at(line, 0)
            self.cursor.move_to(line - 1, merge_offset)

    def _delete_forward(self, _event: EditorEvent) -> None:
        line, offset = self.cursor.as_tuple()
        text = self.buffer.get_line(line)
        if offset < len(text):
            self.buffer.delete_at(line, next_boundary(text, offset))
        elif line < self.buffer.line_count() - 1:
            self.buffer.delete_at(line + 1, 0)

    def _move_left(self, _event: EditorEvent) -> None:
        line, offset = self.cursor.as_tuple()
        if offset > 0:
            self.cursor.offset = prev_boundary(self.buffer.get_line(line), offset)
        elif line > 0:
            self.cursor.move_to(line - 1, len(self.buffer.get_line(line - 1)))

    def _move_right(self, _event: EditorEvent) -> None:
        line, offset = self.cursor.as_tuple()
        text = self.buffer.get_line(line)
        if offset < len(text):
            self.cursor.offset = next_boundary(text, offset)
        elif line < self.buffer.line_count() - 1:
            self.cursor.move_to(line + 1, 0)

    def _move_lines(self, delta: int) -> None:
        self.cursor.line = clamp(
            self.cursor.line + delta, 0, self.buffer.line_count() - 1
        )

    def _move_home(self, _event: EditorEvent) -> None:
        self.cursor.offset = 0

    def _move_end(self, _event: EditorEvent) -> None:
        self.cursor.offset = len(self.buffer.get_line(self.cursor.line))

    def _click(self, event: EditorEvent) -> None:
        assert isinstance(event, MouseClick)
        view = self.mapper.viewport
        self.cursor.move_to(
            *self.mapper.screen_to_buffer(
                event.row,
                event.col,
                view.row_offset,
                view.col_offset,
                view.gutter_width,
                self.buffer,
            )
        )

    def _quit(self, _event: EditorEvent) -> None:
        try:
            self.buffer.save()
        finally:
            self.state = EditorState.QUITTING
            telemetry.record_event(
                "controller.quit", data={"dirty": self.buffer.is_dirty()}
            )

    def _save_on_interrupt(self) -> None:
        try:
            self.buffer.save()
        except SaveError as exc:
            telemetry.record_event(
                "controller.interrupt_save_failed",
                level="warning",
                data={"kind": exc.kind, "reason": str(exc)},
            )
        else:
            telemetry.record_event("controller.interrupt_saved")


__all__ = ["EditorController", "EditorState"]
