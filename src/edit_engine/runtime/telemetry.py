"""Telemetry services built directly on telelog.

This module exposes a narrow surface area for the rest of the editor:

``configure(...)`` -- override or preset the telelog configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager marrying profiling + component tracking

The editor owns the terminal while it runs, so console output stays off
unless ``EDIT_ENGINE_LOG_CONSOLE`` is set; point ``EDIT_ENGINE_LOG_FILE`` at a
file to keep a log of a session.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EDIT_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "edit_engine")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _resolve_level() -> str:
    return (_env("LOG_LEVEL") or "INFO").upper()


_PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {
        "min_level": "DEBUG",
        "console_output": True,
        "colored_output": True,
        "json_format": False,
    },
    "production": {
        "min_level": "INFO",
        "console_output": False,
        "buffering": True,
        "file_output": "edit_engine.log",
    },
    "performance": {
        "min_level": "DEBUG",
        "console_output": False,
        "buffering": True,
        "json_format": True,
        "file_output": "edit_engine-performance.log",
    },
}
_PRESETS["performance_analysis"] = _PRESETS["performance"]


def _apply_settings(config: Any, settings: Dict[str, Any]) -> Any:
    for option, value in settings.items():
        if option == "file_output":
            value = _env("LOG_FILE", DEFAULT_LOG_FILE) or value
        getattr(config, f"with_{option}")(value)
    return config


def _apply_editor_overrides(config: Any) -> Any:
    config.with_profiling(True)
    return config


def _build_preset_config(preset: str) -> Any:
    settings = _PRESETS.get(preset.lower())
    if settings is None:
        raise ValueError(f"Unknown preset '{preset}'.")
    return _apply_editor_overrides(_apply_settings(tl.Config(), settings))


def _build_default_config() -> Any:
    console = _env_flag("LOG_CONSOLE", False)
    settings: Dict[str, Any] = {
        "min_level": _resolve_level(),
        "console_output": console,
    }
    if console:
        settings["colored_output"] = not _env_flag("NO_COLOR", False)
    if _env_flag("LOG_JSON", False):
        settings["json_format"] = True
    if _env("LOG_FILE") or DEFAULT_LOG_FILE:
        settings["file_output"] = DEFAULT_LOG_FILE
    if _env_flag("LOG_BUFFERED", False):
        settings["buffering"] = True
        settings["buffer_size"] = int(_env("LOG_BUFFER_SIZE") or "2048")
    return _apply_editor_overrides(_apply_settings(tl.Config(), settings))


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Override the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt.
    preset:
        Named preset (``"development"``, ``"production"``, ``"performance"``).
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = _apply_editor_overrides(config)
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _build_default_config()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` configured for the editor."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    """Prefer the structured ``<level>_with`` variant when telelog offers it."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line with key/value payload."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass(slots=True)
class SpanHandle:
    """Yielded by ``span``; metadata added here is reported if the block fails."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def _bound_context(logger: Any, values: Dict[str, str]) -> Iterator[None]:
    for key, value in values.items():
        logger.add_context(key, value)
    try:
        yield
    finally:
        for key in values:
            logger.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block as ``name`` with ``metadata`` bound as log context.

    ``component=True`` also tracks the block as a component under ``name``;
    a string tracks it under that identifier instead.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(log, name, component_name, dict(context))

    with ExitStack() as stack:
        stack.enter_context(_bound_context(log, context))
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()

__all__ = [
    "ENV_PREFIX",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
