"""Scroll bookkeeping and screen <-> buffer coordinate translation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from edit_engine.buffer.state import Cursor, CursorPosition
from edit_engine.buffer.validation import LineSource, clamp
from edit_engine.text.codec import column_to_offset, visual_width

STATUS_ROWS = 1


def gutter_width_for(line_count: int) -> int:
    """Digits of the largest line number plus one separator column."""

    return len(str(max(line_count, 1))) + 1


@dataclass(slots=True)
class Viewport:
    """Top-left corner of the visible text area, in rows and visual columns."""

    row_offset: int = 0
    col_offset: int = 0
    gutter_width: int = 2
    screen_rows: int = 24
    screen_cols: int = 80

    @property
    def text_rows(self) -> int:
        return max(1, self.screen_rows - STATUS_ROWS)

    @property
    def text_cols(self) -> int:
        return max(1, self.screen_cols - self.gutter_width)


class ViewportMapper:
    """Keeps the cursor on screen and maps terminal cells to byte offsets."""

    def __init__(self, viewport: Viewport | None = None) -> None:
        self.viewport = viewport or Viewport()

    @property
    def text_rows(self) -> int:
        return self.viewport.text_rows

    @property
    def text_cols(self) -> int:
        return self.viewport.text_cols

    def scroll(
        self,
        cursor: CursorPosition,
        document: LineSource,
        screen_rows: int,
        screen_cols: int,
    ) -> Viewport:
        view = self.viewport
        view.screen_rows = screen_rows
        view.screen_cols = screen_cols
        view.gutter_width = gutter_width_for(document.line_count())

        rows = view.text_rows
        if cursor.line < view.row_offset:
            view.row_offset = cursor.line
        if cursor.line >= view.row_offset + rows:
            view.row_offset = cursor.line - rows + 1

        visual_x = self.cursor_column(cursor, document)
        cols = view.text_cols
        if visual_x < view.col_offset:
            view.col_offset = visual_x
        if visual_x >= view.col_offset + cols:
            view.col_offset = visual_x - cols + 1
        return view

    def screen_to_buffer(
        self,
        screen_row: int,
        screen_col: int,
        row_offset: int,
        col_offset: int,
        gutter_width: int,
        document: LineSource,
    ) -> Cursor:
        line_index = clamp(screen_row + row_offset, 0, document.line_count() - 1)
        target_column = max(0, screen_col - gutter_width + col_offset)
        line = document.get_line(line_index)
        return line_index, column_to_offset(line, target_column)

    @staticmethod
    def cursor_column(cursor: CursorPosition, document: LineSource) -> int:
        line = document.get_line(cursor.line)
        return visual_width(line, 0, cursor.offset)

    def cursor_screen_position(
        self, cursor: CursorPosition, document: LineSource
    ) -> Tuple[int, int]:
        view = self.viewport
        row = cursor.line - view.row_offset
        col = view.gutter_width + self.cursor_column(cursor, document) - view.col_offset
        return row, col


__all__ = ["STATUS_ROWS", "Viewport", "ViewportMapper", "gutter_width_for"]
