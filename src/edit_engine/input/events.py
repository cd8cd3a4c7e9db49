"""Raw terminal events and the closed set of logical editing events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class RawKey:
    """Key press as reported by the terminal.

    ``code`` carries a codepoint or control code; ``name`` carries a named
    special key such as ``"up"`` or ``"pagedown"``. Exactly one is expected.
    """

    code: Optional[int] = None
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RawMouse:
    """Left click at a screen cell (0-based)."""

    row: int
    col: int


RawEvent = Union[RawKey, RawMouse]


@dataclass(frozen=True, slots=True)
class EditorEvent:
    name = "event"


@dataclass(frozen=True, slots=True)
class Char(EditorEvent):
    codepoint: int
    name = "char"


@dataclass(frozen=True, slots=True)
class Enter(EditorEvent):
    name = "enter"


@dataclass(frozen=True, slots=True)
class Backspace(EditorEvent):
    name = "backspace"


@dataclass(frozen=True, slots=True)
class Delete(EditorEvent):
    name = "delete"


@dataclass(frozen=True, slots=True)
class ArrowUp(EditorEvent):
    name = "arrow_up"


@dataclass(frozen=True, slots=True)
class ArrowDown(EditorEvent):
    name = "arrow_down"


@dataclass(frozen=True, slots=True)
class ArrowLeft(EditorEvent):
    name = "arrow_left"


@dataclass(frozen=True, slots=True)
class ArrowRight(EditorEvent):
    name = "arrow_right"


@dataclass(frozen=True, slots=True)
class Home(EditorEvent):
    name = "home"


@dataclass(frozen=True, slots=True)
class End(EditorEvent):
    name = "end"


@dataclass(frozen=True, slots=True)
class PageUp(EditorEvent):
    name = "page_up"


@dataclass(frozen=True, slots=True)
class PageDown(EditorEvent):
    name = "page_down"


@dataclass(frozen=True, slots=True)
class Quit(EditorEvent):
    name = "quit"


@dataclass(frozen=True, slots=True)
class MouseClick(EditorEvent):
    row: int
    col: int
    name = "mouse_click"


@dataclass(frozen=True, slots=True)
class Unknown(EditorEvent):
    name = "unknown"


__all__ = [
    "RawKey",
    "RawMouse",
    "RawEvent",
    "EditorEvent",
    "Char",
    "Enter",
    "Backspace",
    "Delete",
    "ArrowUp",
    "ArrowDown",
    "ArrowLeft",
    "ArrowRight",
    "Home",
    "End",
    "PageUp",
    "PageDown",
    "Quit",
    "MouseClick",
    "Unknown",
]
