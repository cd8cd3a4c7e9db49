"""Capability boundary between the editor core and a concrete terminal."""

from __future__ import annotations

from typing import Protocol, Tuple

from edit_engine.input.events import RawEvent


class TerminalBackend(Protocol):
    """Minimal set of terminal operations the editor core relies on."""

    def get_size(self) -> Tuple[int, int]:
        """Return ``(rows, cols)`` of the drawable area."""
        ...

    def set_raw_mode(self) -> None:
        ...

    def enable_mouse_reporting(self) -> None:
        ...

    def draw_cells_at(self, row: int, col: int, data: bytes) -> None:
        """Paint UTF-8 ``data`` starting at the given cell."""
        ...

    def move_cursor_to(self, row: int, col: int) -> None:
        ...

    def read_raw_event(self) -> RawEvent:
        """Block until the next key or mouse event arrives."""
        ...


__all__ = ["TerminalBackend"]
