"""Structured logging for ustring on top of telelog.

Buffers and lists report through two calls: ``record_event`` for one-off
facts (``buffer::grow``, ``buffer::oom``, ``strlist::grow``) and ``span`` for
timed list operations (``strlist::split``, ``strlist::join``,
``strlist::copy``). ``configure`` decides where the output goes.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "USTRING_"


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Everything ``configure`` feeds into a ``telelog.Config``."""

    min_level: str = "WARNING"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: Optional[str] = None
    buffered: bool = False
    buffer_size: Optional[int] = None
    profiling: bool = True


PRESETS: Dict[str, LogSettings] = {
    "development": LogSettings(min_level="DEBUG"),
    "production": LogSettings(
        console=False, colored=False, log_file="ustring.log", buffered=True
    ),
    "performance": LogSettings(
        min_level="DEBUG",
        console=False,
        colored=False,
        json=True,
        log_file="ustring-performance.log",
        buffered=True,
    ),
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_SETTINGS: Optional[LogSettings] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def settings_from_env() -> LogSettings:
    """Default settings with every ``USTRING_*`` override applied."""

    base = LogSettings()
    size = _env("LOG_BUFFER_SIZE")
    return replace(
        base,
        min_level=(_env("LOG_LEVEL") or base.min_level).upper(),
        console=not _env_flag("DISABLE_CONSOLE", False),
        colored=not _env_flag("NO_COLOR", False),
        json=_env_flag("LOG_JSON", base.json),
        log_file=_env("LOG_FILE") or base.log_file,
        buffered=_env_flag("LOG_BUFFERED", base.buffered),
        buffer_size=int(size) if size else base.buffer_size,
        profiling=_env_flag("PROFILE", base.profiling),
    )


def preset_settings(name: str) -> LogSettings:
    try:
        preset = PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{name}'.") from None
    # Presets pin their levels and sinks; only the file path is relocatable.
    return replace(preset, log_file=_env("LOG_FILE") or preset.log_file)


def _build_config(settings: LogSettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.min_level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    config.with_json_format(settings.json)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        if settings.buffer_size:
            config.with_buffer_size(settings.buffer_size)
    config.with_profiling(settings.profiling)
    return config


def configure(
    *, settings: Optional[LogSettings] = None, preset: Optional[str] = None
) -> LogSettings:
    """Switch every logger to ``settings`` or a named preset.

    With neither argument the environment is re-read. Cached loggers are
    discarded so the next ``get_logger`` call picks up the change.
    """

    global _ACTIVE_SETTINGS
    if settings is not None and preset:
        raise ValueError("Provide either `settings` or `preset`, not both.")
    if preset:
        settings = preset_settings(preset)
    elif settings is None:
        settings = settings_from_env()
    _ACTIVE_SETTINGS = settings
    _LOGGER_CACHE.clear()
    return settings


def active_settings() -> LogSettings:
    global _ACTIVE_SETTINGS
    if _ACTIVE_SETTINGS is None:
        _ACTIVE_SETTINGS = settings_from_env()
    return _ACTIVE_SETTINGS


def get_logger(name: Optional[str] = None) -> Any:
    """Cached ``telelog.Logger`` for ``name`` (``$USTRING_LOGGER`` or ``ustring``)."""

    logger_name = name or _env("LOGGER") or "ustring"
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _build_config(active_settings())
        )
    return _LOGGER_CACHE[logger_name]


def _text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("ascii", errors="replace")
    return value if isinstance(value, str) else str(value)


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        pairs: List[Tuple[str, str]] = [(k, _text(v)) for k, v in payload.items()]
        structured(message, pairs)
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass(slots=True)
class SpanHandle:
    """Yielded by ``span``; collects metadata and reports failures."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``, tracked under ``component`` if given.

    ``metadata`` is pushed as logger context for the duration of the block.
    An exception escaping the block is reported through ``fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=log, span_name=name, component_name=component, metadata=dict(context)
    )
    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "active_settings",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "settings_from_env",
    "span",
]
