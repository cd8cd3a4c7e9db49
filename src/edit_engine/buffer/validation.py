"""Clamping and sanitizing helpers shared across buffer services."""

from __future__ import annotations

import re
from typing import Protocol

from edit_engine.text.codec import is_continuation, prev_boundary

from .state import CursorPosition

_DISALLOWED = re.compile(rb"[\x00-\x08\x0b-\x1f\x7f]")


class LineSource(Protocol):
    """Read-only view of a document used by cursor and viewport math."""

    def line_count(self) -> int:
        ...

    def get_line(self, y: int) -> bytes:
        ...


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def sanitize_line(
    raw: bytes, *, tab: bytes = b"    ", placeholder: bytes = b"?"
) -> bytes:
    """Expand tabs and replace control bytes; bytes >= 0x20 pass unchanged."""

    expanded = raw.replace(b"\t", tab)
    return _DISALLOWED.sub(lambda _match: placeholder, expanded)


def clamp_cursor(source: LineSource, cursor: CursorPosition) -> CursorPosition:
    """Pull ``cursor`` back inside the document and onto a boundary, in place."""

    cursor.line = clamp(cursor.line, 0, source.line_count() - 1)
    line = source.get_line(cursor.line)
    offset = clamp(cursor.offset, 0, len(line))
    if offset < len(line) and is_continuation(line[offset]):
        offset = prev_boundary(line, offset)
    cursor.offset = offset
    return cursor


__all__ = ["LineSource", "clamp", "clamp_cursor", "sanitize_line"]
