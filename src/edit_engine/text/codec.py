"""UTF-8 decoding, boundary navigation and terminal display widths.

Everything here is a pure function over ``bytes``. Lines are stored as raw
bytes so that files with broken UTF-8 still load; the helpers treat any byte
that is not a continuation byte (``0b10xxxxxx``) as the start of a unit and
degrade malformed units to a width-1 placeholder instead of failing.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from wcwidth import wcwidth

REPLACEMENT = 0xFFFD
MAX_CODEPOINT = 0x10FFFF


def is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def _sequence_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 0


def decode_at(data: bytes, i: int) -> Tuple[int, int]:
    """Decode the sequence starting at ``i`` into ``(codepoint, byte_length)``.

    Malformed input (stray continuation byte, invalid lead byte, truncated
    sequence, overlong form or surrogate) decodes as ``(REPLACEMENT, 1)``.
    """

    if i < 0 or i >= len(data):
        raise IndexError(f"decode offset {i} outside 0..{len(data) - 1}")
    length = _sequence_length(data[i])
    if length == 1:
        return data[i], 1
    if length == 0 or i + length > len(data):
        return REPLACEMENT, 1
    try:
        char = data[i : i + length].decode("utf-8")
    except UnicodeDecodeError:
        return REPLACEMENT, 1
    return ord(char), length


def width_of(codepoint: int) -> int:
    """Terminal cells occupied by ``codepoint``: 0, 1 or 2."""

    if codepoint < 0x20 or 0x7F <= codepoint < 0xA0 or codepoint > MAX_CODEPOINT:
        return 1
    width = wcwidth(chr(codepoint))
    return width if width >= 0 else 1


def next_boundary(data: bytes, i: int) -> int:
    size = len(data)
    if i >= size:
        return size
    position = max(i, -1) + 1
    while position < size and is_continuation(data[position]):
        position += 1
    return position


def prev_boundary(data: bytes, i: int) -> int:
    if i <= 0:
        return 0
    position = min(i, len(data)) - 1
    while position > 0 and is_continuation(data[position]):
        position -= 1
    return position


def _unit(data: bytes, offset: int) -> Tuple[int, int]:
    """Return ``(end, codepoint)`` for the unit starting at ``offset``."""

    end = next_boundary(data, offset)
    codepoint, length = decode_at(data, offset)
    if length != end - offset:
        codepoint = REPLACEMENT
    return end, codepoint


def iter_units(
    data: bytes, start: int = 0, end: Optional[int] = None
) -> Iterator[Tuple[int, Optional[int], int]]:
    """Yield ``(offset, codepoint, length)`` for each unit in ``[start, end)``.

    A unit cut short by ``end`` reports ``None`` as its codepoint.
    """

    stop = len(data) if end is None else min(end, len(data))
    offset = max(0, start)
    while offset < stop:
        unit_end, codepoint = _unit(data, offset)
        if unit_end > stop:
            yield offset, None, stop - offset
            return
        yield offset, codepoint, unit_end - offset
        offset = unit_end


def visual_width(data: bytes, start: int = 0, end: Optional[int] = None) -> int:
    """Sum of display widths over ``data[start:end]``.

    A partial codepoint at the end of the range occupies no cells, which keeps
    the width of a growing prefix non-decreasing.
    """

    return sum(
        width_of(codepoint)
        for _offset, codepoint, _length in iter_units(data, start, end)
        if codepoint is not None
    )


def trim_to_visual(data: bytes, col_offset: int, max_cols: int) -> bytes:
    """Slice of ``data`` visible in columns ``[col_offset, col_offset + max_cols)``.

    A wide glyph straddling ``col_offset`` is skipped entirely and one that
    would overflow ``max_cols`` is dropped, so no glyph is ever split.
    """

    if max_cols <= 0:
        return b""
    size = len(data)
    position = 0
    skipped = 0
    while position < size and skipped < col_offset:
        position, codepoint = _unit(data, position)
        skipped += width_of(codepoint)

    start = position
    taken = 0
    while position < size:
        unit_end, codepoint = _unit(data, position)
        width = width_of(codepoint)
        if taken + width > max_cols:
            break
        taken += width
        position = unit_end
    return data[start:position]


def column_to_offset(data: bytes, column: int) -> int:
    """Byte offset of the first boundary whose cumulative width reaches ``column``."""

    position = 0
    current = 0
    while position < len(data) and current < column:
        position, codepoint = _unit(data, position)
        current += width_of(codepoint)
    return position


def encode(codepoint: int) -> bytes:
    """UTF-8 bytes for ``codepoint``; empty for values no UTF-8 text can hold."""

    if codepoint < 0 or codepoint > MAX_CODEPOINT or 0xD800 <= codepoint <= 0xDFFF:
        return b""
    return chr(codepoint).encode("utf-8")


__all__ = [
    "REPLACEMENT",
    "column_to_offset",
    "decode_at",
    "encode",
    "is_continuation",
    "iter_units",
    "next_boundary",
    "prev_boundary",
    "trim_to_visual",
    "visual_width",
    "width_of",
]
