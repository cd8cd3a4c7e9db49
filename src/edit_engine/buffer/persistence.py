"""File I/O for buffers: tolerant loading and write-sync-rename saving."""

from __future__ import annotations

import os
import stat
from contextlib import suppress
from typing import Callable, List, Optional

from edit_engine.runtime import telemetry

from .errors import (
    RenameFailedError,
    SyncFailedError,
    TempCreateFailedError,
    WriteIncompleteError,
)

DEFAULT_FILE_MODE = 0o644


def read_lines(path: str, sanitize: Callable[[bytes], bytes]) -> Optional[List[bytes]]:
    """Return the sanitized lines of ``path``, or ``None`` if it cannot be read."""

    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        telemetry.record_event(
            "buffer.load_fallback",
            level="warning",
            data={"path": path, "reason": exc.strerror or str(exc)},
        )
        return None
    return [sanitize(line) for line in data.split(b"\n")]


def _file_mode(path: str) -> int:
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except OSError:
        return DEFAULT_FILE_MODE


def _write_all(fd: int, payload: bytes, temp_path: str) -> None:
    view = memoryview(payload)
    while view:
        try:
            written = os.write(fd, view)
        except OSError as exc:
            raise WriteIncompleteError(
                f"Write failed: {exc.strerror or exc}", path=temp_path
            ) from exc
        if written <= 0:
            raise WriteIncompleteError(
                f"Write failed (incomplete): {len(view)} bytes left", path=temp_path
            )
        view = view[written:]


def write_atomically(target: str, payload: bytes, *, temp_suffix: str) -> None:
    """Write ``payload`` to ``target`` through ``target + temp_suffix``.

    The temporary file is synced to disk and then renamed over ``target``.
    Any failure removes the temporary file and leaves ``target`` as it was.
    """

    temp_path = target + temp_suffix
    flags = os.O_CREAT | os.O_WRONLY | os.O_TRUNC | getattr(os, "O_BINARY", 0)
    try:
        fd = os.open(temp_path, flags, _file_mode(target))
    except OSError as exc:
        raise TempCreateFailedError(
            f"Failed to create temp file: {exc.strerror or exc}", path=temp_path
        ) from exc

    fd_open = True
    try:
        _write_all(fd, payload, temp_path)
        try:
            os.fsync(fd)
        except OSError as exc:
            raise SyncFailedError(
                f"Disk sync failed: {exc.strerror or exc}", path=temp_path
            ) from exc
        fd_open = False
        try:
            os.close(fd)
        except OSError as exc:
            raise SyncFailedError(
                f"Close failed: {exc.strerror or exc}", path=temp_path
            ) from exc
        try:
            os.replace(temp_path, target)
        except OSError as exc:
            raise RenameFailedError(
                f"Atomic rename failed: {exc.strerror or exc}", path=target
            ) from exc
    except BaseException:
        if fd_open:
            with suppress(OSError):
                os.close(fd)
        with suppress(OSError):
            os.unlink(temp_path)
        raise


__all__ = ["read_lines", "write_atomically"]
