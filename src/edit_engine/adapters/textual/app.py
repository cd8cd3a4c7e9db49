"""Textual application hosting the editor controller."""

from __future__ import annotations

from typing import Optional

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use edit_engine.adapters.textual.app"
    ) from exc

from edit_engine.buffer import SaveError, TextBuffer
from edit_engine.controller import EditorController, EditorState
from edit_engine.input import CTRL_Q, RawEvent, RawKey, RawMouse
from edit_engine.input.decoder import DEFAULT_NAMED_KEYS
from edit_engine.runtime import EditorConfig, telemetry

from .backend import TextualTerminal

EXIT_OK = 0
EXIT_SAVE_FAILED = 2


def create_controller(
    path: str,
    terminal: TextualTerminal,
    *,
    config: Optional[EditorConfig] = None,
) -> EditorController:
    """Load ``path`` into a fresh buffer and wire it to ``terminal``."""

    buffer = TextBuffer(config=config)
    buffer.load(path)
    return EditorController(buffer, terminal)


class EditorApp(App[int]):
    """Full-screen editor view; Ctrl-Q (or Esc) saves and quits."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
		width: 1fr;
		padding: 0;
	}
	"""

    def __init__(self, path: str, *, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.path = path
        self.config = config
        self.terminal = TextualTerminal()
        self.controller: EditorController | None = None
        self.error: SaveError | None = None
        self._view: Static | None = None
        self._interrupt_pending = False

    def compose(self) -> ComposeResult:
        self._view = Static("", id="editor-view")
        yield self._view

    def on_mount(self) -> None:
        self.controller = create_controller(self.path, self.terminal, config=self.config)
        if self._interrupt_pending:
            self.controller.request_interrupt()
        self.controller.start()
        self.terminal.resize(self.size.height, self.size.width)
        self._redraw()
        self.set_interval(0.1, self._poll_interrupt)

    def on_resize(self, event: events.Resize) -> None:
        self.terminal.resize(event.size.height, event.size.width)
        self._redraw()

    def on_key(self, event: events.Key) -> None:
        raw = self._normalize_key(event)
        if raw is None:
            return
        event.stop()
        event.prevent_default()
        self.terminal.push(raw)
        self._pump()

    def on_paste(self, event: events.Paste) -> None:
        for char in event.text.replace("\r\n", "\n"):
            self.terminal.push(RawKey(code=ord(char)))
        self._pump()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button != 1:
            return
        self.terminal.push(RawMouse(row=int(event.screen_y), col=int(event.screen_x)))
        self._pump()

    async def action_quit(self) -> None:
        self.terminal.push(RawKey(code=CTRL_Q))
        self._pump()

    def action_help_quit(self) -> None:
        """Ctrl-C: treat like an interrupt signal (save, then leave)."""

        self.request_interrupt()

    def request_interrupt(self, *_signal_args: object) -> None:
        if self.controller is None:
            self._interrupt_pending = True
            return
        self.controller.request_interrupt()

    def _poll_interrupt(self) -> None:
        if self.controller is not None and not self.controller.checkpoint():
            self.exit(EXIT_OK)

    def _pump(self) -> None:
        controller = self.controller
        if controller is None:
            return
        while self.terminal.has_pending():
            try:
                state = controller.feed(self.terminal.read_raw_event())
            except SaveError as exc:
                self.error = exc
                telemetry.record_event(
                    "app.save_failed",
                    level="error",
                    data={"kind": exc.kind, "reason": str(exc)},
                )
                self.exit(EXIT_SAVE_FAILED)
                return
            if state is EditorState.QUITTING:
                self.exit(EXIT_OK)
                return
        self._paint()

    def _redraw(self) -> None:
        if self.controller is None:
            return
        self.controller.refresh()
        self._paint()

    def _paint(self) -> None:
        if self._view is not None:
            self._view.update(self.terminal.to_text())

    @staticmethod
    def _normalize_key(event: events.Key) -> Optional[RawEvent]:
        if event.key in DEFAULT_NAMED_KEYS:
            return RawKey(name=event.key)
        character = event.character
        if character and len(character) == 1:
            return RawKey(code=ord(character))
        return None


__all__ = ["EditorApp", "EXIT_OK", "EXIT_SAVE_FAILED", "create_controller"]
