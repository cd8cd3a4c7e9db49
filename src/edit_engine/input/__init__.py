"""Raw input decoding into logical editor events."""

from .decoder import CTRL_Q, ESC, TAB, InputDecoder
from .events import (
    ArrowDown,
    ArrowLeft,
    ArrowRight,
    ArrowUp,
    Backspace,
    Char,
    Delete,
    EditorEvent,
    End,
    Enter,
    Home,
    MouseClick,
    PageDown,
    PageUp,
    Quit,
    RawEvent,
    RawKey,
    RawMouse,
    Unknown,
)

__all__ = [
    "CTRL_Q",
    "ESC",
    "TAB",
    "InputDecoder",
    "RawEvent",
    "RawKey",
    "RawMouse",
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
