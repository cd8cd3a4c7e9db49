from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from edit_engine.runtime import EditorConfig, telemetry


class RecordingLogger:
    """Minimal telelog-shaped logger that records what the helpers call."""

    def __init__(self) -> None:
        self.context: Dict[str, str] = {}
        self.lines: List[Tuple[str, str, Any]] = []
        self.profiled: List[str] = []
        self.components: List[str] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    def info_with(self, message: str, pairs: Any) -> None:
        self.lines.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.lines.append(("error", message, dict(pairs)))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message, None))


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda _name=None: logger)
    return logger


def test_defaults_match_editor_conventions() -> None:
    config = EditorConfig()
    assert config.tab_stop == 4
    assert config.tab_expansion == b"    "
    assert config.temp_suffix == ".tmp"
    assert config.placeholder == b"?"
    assert config.large_file_threshold == 100 * 1024 * 1024
    assert config.max_lines is None


@pytest.mark.parametrize(
    "kwargs",
    [{"tab_stop": -1}, {"temp_suffix": ""}, {"max_lines": 0}],
)
def test_invalid_config_is_rejected(kwargs: Dict[str, Any]) -> None:
    with pytest.raises(ValueError):
        EditorConfig(**kwargs)


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDIT_ENGINE_TAB_STOP", "8")
    monkeypatch.setenv("EDIT_ENGINE_TEMP_SUFFIX", ".part")
    monkeypatch.setenv("EDIT_ENGINE_LARGE_FILE_MB", "3")
    monkeypatch.setenv("EDIT_ENGINE_MAX_LINES", "500")

    config = EditorConfig.from_env()

    assert config.tab_stop == 8
    assert config.temp_suffix == ".part"
    assert config.large_file_threshold == 3 * 1024 * 1024
    assert config.max_lines == 500


def test_from_env_ignores_malformed_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDIT_ENGINE_TAB_STOP", "wide")
    monkeypatch.setenv("EDIT_ENGINE_LARGE_FILE_MB", "-2")
    monkeypatch.setenv("EDIT_ENGINE_MAX_LINES", "0")

    assert EditorConfig.from_env() == EditorConfig()


def test_span_binds_metadata_only_inside_block(recorder: RecordingLogger) -> None:
    with telemetry.span(
        "buffer::save", component="buffer", metadata={"path": b"a.txt", "lines": 3}
    ) as handle:
        assert recorder.context == {"path": "a.txt", "lines": "3"}
        handle.add_metadata("found", True)

    assert recorder.context == {}
    assert recorder.profiled == ["buffer::save"]
    assert recorder.components == ["buffer"]
    assert handle.metadata["found"] == "True"


def test_span_reports_failure_and_reraises(recorder: RecordingLogger) -> None:
    with pytest.raises(KeyError):
        with telemetry.span("controller::quit", component=True):
            raise KeyError("boom")

    level, message, payload = recorder.lines[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload["span"] == "controller::quit"
    assert payload["component"] == "controller::quit"
    assert "boom" in payload["reason"]


def test_record_event_prefers_structured_methods(recorder: RecordingLogger) -> None:
    telemetry.record_event("buffer.saved", data={"version": 2})
    telemetry.record_event("buffer.load_fallback", level="warning", data={"path": "x"})

    assert recorder.lines[0] == (
        "info",
        "event::buffer.saved",
        {"event": "buffer.saved", "version": "2"},
    )
    assert recorder.lines[1][0] == "warning"
    assert recorder.lines[1][1].startswith("event::buffer.load_fallback")


def test_record_event_rejects_unknown_level(recorder: RecordingLogger) -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("oops", level="shout")
