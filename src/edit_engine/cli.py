"""Command-line entry point: ``edit <filename>``."""

from __future__ import annotations

import argparse
import os
import signal
import sys
from typing import Callable, Optional, Sequence, TextIO

from edit_engine import __version__
from edit_engine.runtime import EditorConfig, telemetry


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="edit", description="Edit a text file in the terminal."
    )
    parser.add_argument("path", help="File to edit (created on first save)")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    args = parser.parse_args(argv)
    if not args.path:
        parser.error("the path argument must not be empty")
    return args


def confirm_large_file(
    path: str,
    threshold: int,
    *,
    ask: Optional[Callable[[str], str]] = None,
    stream: Optional[TextIO] = None,
) -> bool:
    """Return False if ``path`` exceeds ``threshold`` and the user declines."""

    ask = ask or input
    stream = stream or sys.stderr
    try:
        size = os.stat(path).st_size
    except OSError:
        return True
    if not os.path.isfile(path) or size <= threshold:
        return True
    print(f"Warning: File is {size // (1024 * 1024)} MB.", file=stream)
    print("Loading large files may be slow. Continue? [y/N] ", end="", file=stream)
    stream.flush()
    try:
        response = ask("")
    except EOFError:
        response = ""
    accepted = response[:1] in {"y", "Y"}
    if not accepted:
        print("Aborted.", file=stream)
    return accepted


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = EditorConfig.from_env()
    if not confirm_large_file(args.path, config.large_file_threshold):
        return 0

    from edit_engine.adapters.textual.app import EXIT_SAVE_FAILED, EditorApp

    app = EditorApp(args.path, config=config)
    signal.signal(signal.SIGINT, app.request_interrupt)
    signal.signal(signal.SIGTERM, app.request_interrupt)
    telemetry.record_event("cli.start", data={"path": args.path})
    result = app.run()
    if app.error is not None:
        print(f"Error: {app.error}", file=sys.stderr)
        return EXIT_SAVE_FAILED
    return int(result or 0)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
