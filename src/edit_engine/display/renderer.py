"""Frame composition: gutter, visible text and the status bar."""

from __future__ import annotations

from edit_engine.buffer.buffer import TextBuffer
from edit_engine.buffer.state import CursorPosition
from edit_engine.text.codec import trim_to_visual, visual_width
from edit_engine.viewport.mapper import STATUS_ROWS, ViewportMapper

from .terminal import TerminalBackend

NO_NAME = "[No Name]"


class Renderer:
    """Draws one full frame per call; every row is painted edge to edge."""

    def render(
        self,
        terminal: TerminalBackend,
        buffer: TextBuffer,
        cursor: CursorPosition,
        mapper: ViewportMapper,
    ) -> None:
        view = mapper.viewport
        for screen_row in range(view.text_rows):
            terminal.draw_cells_at(
                screen_row, 0, self.compose_row(buffer, mapper, screen_row)
            )
        if view.screen_rows > STATUS_ROWS:
            terminal.draw_cells_at(
                view.screen_rows - STATUS_ROWS,
                0,
                self.compose_status(buffer, cursor, mapper),
            )
        terminal.move_cursor_to(*mapper.cursor_screen_position(cursor, buffer))

    def compose_row(
        self, buffer: TextBuffer, mapper: ViewportMapper, screen_row: int
    ) -> bytes:
        view = mapper.viewport
        file_row = screen_row + view.row_offset
        if file_row >= buffer.line_count():
            return b" " * (view.gutter_width + view.text_cols)

        gutter = f"{file_row + 1:>{view.gutter_width - 1}} ".encode("ascii")
        text = trim_to_visual(buffer.get_line(file_row), view.col_offset, view.text_cols)
        padding = b" " * (view.text_cols - visual_width(text))
        return gutter + text + padding

    def compose_status(
        self, buffer: TextBuffer, cursor: CursorPosition, mapper: ViewportMapper
    ) -> bytes:
        cols = mapper.viewport.screen_cols
        name = buffer.path or NO_NAME
        modified = " (Modified)" if buffer.is_dirty() else ""
        left = f"{name} - {buffer.line_count()} lines{modified}".encode("utf-8")
        left = trim_to_visual(left, 0, cols)
        column = mapper.cursor_column(cursor, buffer)
        right = f"Ln {cursor.line + 1}, Col {column + 1} ".encode("ascii")

        used = visual_width(left)
        if cols > used + len(right):
            return left + b" " * (cols - used - len(right)) + right
        return left + b" " * (cols - used)


__all__ = ["NO_NAME", "Renderer"]
