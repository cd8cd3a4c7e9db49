"""Text buffer façade combining the document, its file binding and dirty state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from functools import partial
from typing import ContextManager, Iterable, Optional, Sequence

from edit_engine.runtime import telemetry
from edit_engine.runtime.config import EditorConfig
from edit_engine.text.codec import encode, prev_boundary

from .document import Document
from .errors import NoFilenameError
from .persistence import read_lines, write_atomically
from .validation import clamp, sanitize_line


class TextBuffer:
    """Owns the document and the file it is bound to.

    Coordinates are ``(y, x)`` = (line index, byte offset). Mutations with a
    line index outside the document are ignored and byte offsets are clamped
    into the line, so no sequence of calls can leave the buffer unrenderable.
    """

    def __init__(
        self,
        *,
        path: Optional[str] = None,
        lines: Optional[Iterable[bytes]] = None,
        config: Optional[EditorConfig] = None,
        name: str = "default",
    ) -> None:
        self.name = name
        self.config = config or EditorConfig()
        self._document = Document.from_lines(lines or ())
        self._path = path
        self._dirty = False

    @classmethod
    def from_text(
        cls, text: str, *, path: Optional[str] = None, name: str = "default"
    ) -> "TextBuffer":
        return cls(
            path=path, lines=text.encode("utf-8").split(b"\n"), name=name
        )

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def version(self) -> int:
        return self._document.version

    def lines(self) -> Sequence[bytes]:
        return self._document.snapshot()

    def get_line(self, y: int) -> bytes:
        if not self._has_line(y):
            return b""
        return self._document.get_line(y)

    def line_count(self) -> int:
        return self._document.line_count

    def is_dirty(self) -> bool:
        return self._dirty

    def load(self, path: str) -> None:
        """Replace the document with the contents of ``path``.

        A file that cannot be opened is not an error: the buffer becomes a
        single empty line bound to ``path``.
        """

        sanitize = partial(
            sanitize_line,
            tab=self.config.tab_expansion,
            placeholder=self.config.placeholder,
        )
        with telemetry.span(
            "buffer::load", component="buffer", metadata={"path": path}
        ) as handle:
            lines = read_lines(path, sanitize)
            handle.add_metadata("found", lines is not None)
            self._document = Document.from_lines(lines or ())
            self._path = path
            self._dirty = False
            handle.add_metadata("lines", self._document.line_count)

    def save(self) -> None:
        """Persist the document atomically; raise ``SaveError`` on failure."""

        if not self._path:
            telemetry.record_event(
                "buffer.save_failed",
                level="warning",
                data={"buffer": self.name, "kind": NoFilenameError.kind},
            )
            raise NoFilenameError()
        with telemetry.span(
            "buffer::save",
            component="buffer",
            metadata={"path": self._path, "lines": self._document.line_count},
        ):
            write_atomically(
                self._path,
                self._document.to_bytes(),
                temp_suffix=self.config.temp_suffix,
            )
            self._dirty = False
        telemetry.record_event(
            "buffer.saved",
            data={"path": self._path, "version": self._document.version},
        )

    def insert_codepoint(self, y: int, x: int, codepoint: int) -> None:
        self.insert_string(y, x, encode(codepoint))

    def insert_string(self, y: int, x: int, data: bytes) -> None:
        if not self._has_line(y):
            return
        with Transaction(self, "insert_string"):
            line = self._document.get_line(y)
            x = clamp(x, 0, len(line))
            self._document.set_line(y, line[:x] + data + line[x:])

    def split_line(self, y: int, x: int) -> None:
        if not self._has_line(y) or self._at_capacity():
            return
        with Transaction(self, "split_line"):
            line = self._document.get_line(y)
            x = clamp(x, 0, len(line))
            self._document.set_line(y, line[:x])
            self._document.insert_line(y + 1, line[x:])

    def delete_at(self, y: int, x: int) -> None:
        """Backspace semantics: remove the codepoint ending at ``x``.

        At the start of a line the line is joined onto the previous one; at
        ``(0, 0)`` nothing happens.
        """

        if not self._has_line(y):
            return
        line = self._document.get_line(y)
        x = clamp(x, 0, len(line))
        if x > 0:
            with Transaction(self, "delete_char"):
                start = prev_boundary(line, x)
                self._document.set_line(y, line[:start] + line[x:])
        elif y > 0:
            with Transaction(self, "join_lines"):
                previous = self._document.get_line(y - 1)
                self._document.set_line(y - 1, previous + line)
                self._document.remove_line(y)

    def _has_line(self, y: int) -> bool:
        return 0 <= y < self._document.line_count

    def _at_capacity(self) -> bool:
        limit = self.config.max_lines
        if limit is None or self._document.line_count < limit:
            return False
        telemetry.record_event(
            "buffer.capacity_reached",
            level="warning",
            data={"buffer": self.name, "max_lines": limit},
        )
        return True


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a single mutation in a telemetry span and marks the buffer dirty."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer._dirty = True
            self.buffer._document.touch()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["TextBuffer", "Transaction"]
