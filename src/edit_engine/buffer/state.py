"""Cursor position tracking for the editor controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (line_index, byte_offset)


@dataclass(slots=True)
class CursorPosition:
    """Mutable ``(line, offset)`` pair; ``offset`` counts bytes, not columns."""

    line: int = 0
    offset: int = 0

    def move_to(self, line: int, offset: int) -> None:
        self.line = line
        self.offset = offset

    def as_tuple(self) -> Cursor:
        return (self.line, self.offset)


__all__ = ["Cursor", "CursorPosition"]
