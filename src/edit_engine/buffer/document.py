"""Line storage for text buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class Document:
    """Ordered list of byte lines that is never empty.

    Lines hold raw UTF-8 bytes without terminators. Index checks are the
    caller's job (see ``TextBuffer``); this class only guarantees that the
    line list never drops to zero entries.
    """

    _lines: List[bytes] = field(default_factory=lambda: [b""])
    version: int = 0

    def __post_init__(self) -> None:
        self._lines = list(self._lines) or [b""]

    @classmethod
    def from_lines(cls, lines: Iterable[bytes]) -> "Document":
        return cls(_lines=[bytes(line) for line in lines])

    def snapshot(self) -> Sequence[bytes]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> bytes:
        return self._lines[index]

    def set_line(self, index: int, data: bytes) -> None:
        self._lines[index] = data

    def insert_line(self, index: int, data: bytes) -> None:
        self._lines.insert(index, data)

    def remove_line(self, index: int) -> bytes:
        removed = self._lines.pop(index)
        if not self._lines:
            self._lines.append(b"")
        return removed

    def to_bytes(self) -> bytes:
        return b"\n".join(self._lines)

    def touch(self) -> int:
        self.version += 1
        return self.version


__all__ = ["Document"]
