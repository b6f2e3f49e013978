"""Telemetry services built directly on loguru.

This module exposes a narrow surface area for the rest of the editor:

``configure(...)`` -- override or preset the sink configuration
``get_logger(name)`` -- fetch (and cache) a bound logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block with bound metadata
``shutdown()`` -- remove the installed sinks again

Nothing is logged until ``configure`` runs; sinks the host adds to loguru
are never touched.
"""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager, suppress
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, Iterator, List, MutableMapping, Optional

from loguru import logger as _root_logger

ENV_PREFIX = "SYNC_EDITOR_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "sync_editor")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[logger]}</cyan> | {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[logger]} | {message}"

_PACKAGE = "sync_editor"
_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional["TelemetryConfig"] = None
_SINK_IDS: List[int] = []


@dataclass(slots=True)
class SinkSpec:
    """One loguru sink: a stream or file path plus its options."""

    target: Any
    level: str = "INFO"
    colorize: bool = False
    serialize: bool = False
    enqueue: bool = False


@dataclass(slots=True)
class TelemetryConfig:
    level: str = "INFO"
    sinks: list[SinkSpec] = field(default_factory=list)


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
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _resolve_level() -> str:
    return (_env("LOG_LEVEL") or "WARNING").upper()


def _build_preset_config(preset: str) -> TelemetryConfig:
    key = preset.lower()

    if key == "development":
        return TelemetryConfig(
            level="DEBUG",
            sinks=[SinkSpec(sys.stderr, level="DEBUG", colorize=True)],
        )
    if key == "production":
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "sync_editor.log"
        return TelemetryConfig(
            level="INFO",
            sinks=[SinkSpec(log_path, level="INFO", enqueue=True)],
        )
    if key in {"performance", "performance_analysis"}:
        log_path = (
            _env("LOG_FILE", DEFAULT_LOG_FILE) or "sync_editor-performance.log"
        )
        return TelemetryConfig(
            level="DEBUG",
            sinks=[SinkSpec(log_path, level="DEBUG", serialize=True, enqueue=True)],
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    level = _resolve_level()
    config = TelemetryConfig(level=level)
    serialize = _env_flag("LOG_JSON", False)

    # Textual owns the terminal once the app runs, so hosts usually log to file.
    if not _env_flag("DISABLE_CONSOLE", False):
        config.sinks.append(
            SinkSpec(
                sys.stderr,
                level=level,
                colorize=not _env_flag("NO_COLOR", False),
                serialize=serialize,
            )
        )

    log_file = _env("LOG_FILE") or DEFAULT_LOG_FILE
    if log_file:
        config.sinks.append(SinkSpec(log_file, level=level, serialize=serialize))

    return config


def _owned_record(record: Dict[str, Any]) -> bool:
    # Only records emitted through ``get_logger`` carry the bound name.
    return "logger" in record["extra"]


def _uninstall() -> None:
    while _SINK_IDS:
        sink_id = _SINK_IDS.pop()
        with suppress(ValueError):
            _root_logger.remove(sink_id)


def _install(config: TelemetryConfig) -> None:
    # Sinks added by the host application are left in place.
    _uninstall()
    for sink in config.sinks:
        is_stream = hasattr(sink.target, "write")
        sink_id = _root_logger.add(
            sink.target,
            level=sink.level,
            format=CONSOLE_FORMAT if is_stream else FILE_FORMAT,
            filter=_owned_record,
            colorize=sink.colorize if is_stream else False,
            serialize=sink.serialize,
            enqueue=sink.enqueue,
            backtrace=False,
            diagnose=False,
        )
        _SINK_IDS.append(sink_id)


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> None:
    """Override the active sink configuration.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` instance to adopt.
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

    _install(config)
    _root_logger.enable(_PACKAGE)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def shutdown() -> None:
    """Remove the sinks installed by ``configure`` and mute editor records."""

    global _ACTIVE_CONFIG
    _uninstall()
    _root_logger.disable(_PACKAGE)
    _ACTIVE_CONFIG = None
    _LOGGER_CACHE.clear()


def active_config() -> TelemetryConfig:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        configure()
    assert _ACTIVE_CONFIG is not None
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached loguru logger bound to ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = _root_logger.bind(logger=logger_name)
    return _LOGGER_CACHE[logger_name]


def _format_payload(payload: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in payload.items())


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as structured extras."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    message = f"event::{name}"
    if data:
        message = f"{message} {_format_payload(data)}"
    log.bind(**payload).log(level.upper(), message)


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.bind(**payload).log(
            level.upper(), f"{message} {_format_payload(payload)}"
        )

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", {"reason": reason})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and log its duration at DEBUG level.

    Parameters
    ----------
    name:
        Operation name reported as ``span``.
    logger_name:
        Target logger; defaults to the editor logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier.
    metadata:
        Optional metadata bound to every record emitted inside the block.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    metadata_payload = {
        key: _stringify(value) for key, value in (metadata or {}).items()
    }
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata=dict(metadata_payload),
    )

    started = perf_counter()
    with _root_logger.contextualize(**metadata_payload):
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            elapsed_ms = (perf_counter() - started) * 1000.0
            handle._emit("debug", "span::end", {"elapsed_ms": f"{elapsed_ms:.3f}"})


# Importing the package installs no sinks; hosts opt in through ``configure``.
_root_logger.disable(_PACKAGE)
logger = get_logger()

__all__ = [
    "SinkSpec",
    "SpanHandle",
    "TelemetryConfig",
    "active_config",
    "configure",
    "get_logger",
    "record_event",
    "shutdown",
    "span",
    "logger",
]
