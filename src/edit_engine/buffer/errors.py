"""Typed save failures surfaced by ``TextBuffer.save``."""

from __future__ import annotations

from typing import Optional


class SaveError(RuntimeError):
    """Raised when a save attempt fails; the target file is left untouched."""

    kind = "SaveError"

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class NoFilenameError(SaveError):
    kind = "NoFilename"

    def __init__(self) -> None:
        super().__init__("No filename specified")


class TempCreateFailedError(SaveError):
    kind = "TempCreateFailed"


class WriteIncompleteError(SaveError):
    kind = "WriteIncomplete"


class SyncFailedError(SaveError):
    kind = "SyncFailed"


class RenameFailedError(SaveError):
    kind = "RenameFailed"


__all__ = [
    "SaveError",
    "NoFilenameError",
    "TempCreateFailedError",
    "WriteIncompleteError",
    "SyncFailedError",
    "RenameFailedError",
]
