"""Translate raw terminal events into logical editing events."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

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

TAB = 0x09
ESC = 0x1B
CTRL_Q = ord("q") & 0x1F

DEFAULT_CONTROL_CODES: Mapping[int, EditorEvent] = MappingProxyType(
    {
        0x7F: Backspace(),
        0x08: Backspace(),
        0x0A: Enter(),
        0x0D: Enter(),
        CTRL_Q: Quit(),
        ESC: Quit(),
    }
)

DEFAULT_NAMED_KEYS: Mapping[str, EditorEvent] = MappingProxyType(
    {
        "up": ArrowUp(),
        "down": ArrowDown(),
        "left": ArrowLeft(),
        "right": ArrowRight(),
        "home": Home(),
        "end": End(),
        "pageup": PageUp(),
        "pagedown": PageDown(),
        "delete": Delete(),
        "backspace": Backspace(),
        "enter": Enter(),
    }
)


class InputDecoder:
    """Stateless mapping from ``RawEvent`` to exactly one ``EditorEvent``."""

    def __init__(
        self,
        *,
        control_codes: Optional[Mapping[int, EditorEvent]] = None,
        named_keys: Optional[Mapping[str, EditorEvent]] = None,
    ) -> None:
        self._control_codes: Dict[int, EditorEvent] = dict(
            DEFAULT_CONTROL_CODES if control_codes is None else control_codes
        )
        self._named_keys: Dict[str, EditorEvent] = dict(
            DEFAULT_NAMED_KEYS if named_keys is None else named_keys
        )
        self._decoders: Dict[type, Callable[..., EditorEvent]] = {
            RawKey: self._decode_key,
            RawMouse: self._decode_mouse,
        }

    def decode(self, raw: RawEvent) -> EditorEvent:
        decoder = self._decoders.get(type(raw))
        if decoder is None:
            return Unknown()
        return decoder(raw)

    def _decode_key(self, raw: RawKey) -> EditorEvent:
        if raw.name is not None:
            return self._named_keys.get(raw.name.lower(), Unknown())
        if raw.code is None:
            return Unknown()
        mapped = self._control_codes.get(raw.code)
        if mapped is not None:
            return mapped
        if raw.code >= 0x20 or raw.code == TAB:
            return Char(raw.code)
        return Unknown()

    @staticmethod
    def _decode_mouse(raw: RawMouse) -> EditorEvent:
        return MouseClick(raw.row, raw.col)


__all__ = [
    "CTRL_Q",
    "DEFAULT_CONTROL_CODES",
    "DEFAULT_NAMED_KEYS",
    "ESC",
    "InputDecoder",
    "TAB",
]
