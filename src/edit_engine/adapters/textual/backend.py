"""In-memory cell grid implementing ``TerminalBackend`` for Textual hosts."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Tuple

from rich.text import Text

from edit_engine.input.events import RawEvent
from edit_engine.text.codec import iter_units, width_of

CURSOR_STYLE = "reverse"


class TextualTerminal:
    """Collects drawn cells into rows and queues raw events pushed by the app.

    Textual owns the real terminal (raw mode, mouse reporting, painting), so
    this backend only records what the editor asked for and exposes the
    finished frame as a ``rich.text.Text``.
    """

    def __init__(self, rows: int = 24, cols: int = 80) -> None:
        self._rows = rows
        self._cols = cols
        self._cells: List[List[str]] = []
        self._cursor: Tuple[int, int] = (0, 0)
        self._events: Deque[RawEvent] = deque()
        self.raw_mode = False
        self.mouse_reporting = False
        self._reset_cells()

    def _reset_cells(self) -> None:
        self._cells = [[" "] * self._cols for _ in range(self._rows)]

    def resize(self, rows: int, cols: int) -> None:
        self._rows = max(1, rows)
        self._cols = max(1, cols)
        self._reset_cells()

    def get_size(self) -> Tuple[int, int]:
        return self._rows, self._cols

    def set_raw_mode(self) -> None:
        self.raw_mode = True

    def enable_mouse_reporting(self) -> None:
        self.mouse_reporting = True

    def draw_cells_at(self, row: int, col: int, data: bytes) -> None:
        if not 0 <= row < self._rows or col < 0:
            return
        cells = self._cells[row]
        column = col
        for offset, codepoint, length in iter_units(data):
            if codepoint is None:
                break
            glyph = data[offset : offset + length].decode("utf-8", errors="replace")
            width = width_of(codepoint)
            if width == 0:
                if 0 < column <= self._cols:
                    cells[column - 1] += glyph
                continue
            if column + width > self._cols:
                break
            cells[column] = glyph
            if width == 2:
                cells[column + 1] = ""
            column += width

    def move_cursor_to(self, row: int, col: int) -> None:
        self._cursor = (row, col)

    @property
    def cursor(self) -> Tuple[int, int]:
        return self._cursor

    def push(self, event: RawEvent) -> None:
        self._events.append(event)

    def has_pending(self) -> bool:
        return bool(self._events)

    def read_raw_event(self) -> RawEvent:
        if not self._events:
            raise LookupError("no pending input event")
        return self._events.popleft()

    def row_text(self, row: int) -> str:
        return "".join(self._cells[row])

    def to_text(self) -> Text:
        frame = Text(no_wrap=True, overflow="crop")
        cursor_row, cursor_col = self._cursor
        for row, cells in enumerate(self._cells):
            if row:
                frame.append("\n")
            for col, cell in enumerate(cells):
                if (row, col) == (cursor_row, cursor_col):
                    frame.append(cell or " ", style=CURSOR_STYLE)
                else:
                    frame.append(cell)
        return frame


__all__ = ["CURSOR_STYLE", "TextualTerminal"]
