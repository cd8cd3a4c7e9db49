"""Editor tunables resolved from defaults and ``EDIT_ENGINE_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .telemetry import ENV_PREFIX

DEFAULT_TAB_STOP = 4
DEFAULT_TEMP_SUFFIX = ".tmp"
DEFAULT_PLACEHOLDER = b"?"
DEFAULT_LARGE_FILE_THRESHOLD = 100 * 1024 * 1024


def _env_int(name: str, fallback: Optional[int]) -> Optional[int]:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Static knobs shared by the buffer, controller and CLI.

    ``max_lines`` is an optional capacity limit; ``None`` lets the document
    grow without bound.
    """

    tab_stop: int = DEFAULT_TAB_STOP
    temp_suffix: str = DEFAULT_TEMP_SUFFIX
    placeholder: bytes = DEFAULT_PLACEHOLDER
    large_file_threshold: int = DEFAULT_LARGE_FILE_THRESHOLD
    max_lines: Optional[int] = None

    def __post_init__(self) -> None:
        if self.tab_stop < 0:
            raise ValueError("tab_stop cannot be negative")
        if not self.temp_suffix:
            raise ValueError("temp_suffix cannot be empty")
        if self.max_lines is not None and self.max_lines < 1:
            raise ValueError("max_lines must be at least 1")

    @property
    def tab_expansion(self) -> bytes:
        return b" " * self.tab_stop

    @classmethod
    def from_env(cls) -> "EditorConfig":
        large_file_mb = _env_int("LARGE_FILE_MB", None)
        threshold = (
            large_file_mb * 1024 * 1024
            if large_file_mb is not None
            else DEFAULT_LARGE_FILE_THRESHOLD
        )
        return cls(
            tab_stop=_env_int("TAB_STOP", DEFAULT_TAB_STOP) or DEFAULT_TAB_STOP,
            temp_suffix=os.environ.get(f"{ENV_PREFIX}TEMP_SUFFIX")
            or DEFAULT_TEMP_SUFFIX,
            large_file_threshold=threshold,
            max_lines=_env_int("MAX_LINES", None),
        )


__all__ = ["EditorConfig"]
