"""Document storage, cursor state and crash-safe persistence."""

from .buffer import TextBuffer, Transaction
from .document import Document
from .errors import (
    NoFilenameError,
    RenameFailedError,
    SaveError,
    SyncFailedError,
    TempCreateFailedError,
    WriteIncompleteError,
)
from .state import Cursor, CursorPosition
from .validation import LineSource, clamp, clamp_cursor, sanitize_line

__all__ = [
    "Document",
    "TextBuffer",
    "Transaction",
    "Cursor",
    "CursorPosition",
    "LineSource",
    "clamp",
    "clamp_cursor",
    "sanitize_line",
    "SaveError",
    "NoFilenameError",
    "TempCreateFailedError",
    "WriteIncompleteError",
    "SyncFailedError",
    "RenameFailedError",
]
