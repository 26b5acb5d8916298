"""Telemetry services built on telelog.

The editor owns the terminal while it runs, so nothing here writes to the
console unless asked to. The public surface is small:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "KILO_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "kilo_engine")

PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {
        "min_level": "DEBUG",
        "console": True,
        "colored": True,
        "json": False,
        "log_file": "",
    },
    "production": {
        "min_level": "INFO",
        "console": False,
        "buffered": True,
        "log_file": "kilo_engine.log",
    },
    "performance": {
        "min_level": "DEBUG",
        "console": False,
        "buffered": True,
        "json": True,
        "log_file": "kilo_engine-performance.log",
    },
}

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
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _apply_settings(config: Any, settings: Dict[str, Any]) -> Any:
    config.with_min_level(settings.get("min_level", "INFO"))
    console = bool(settings.get("console", False))
    config.with_console_output(console)
    if console:
        config.with_colored_output(bool(settings.get("colored", True)))
    if settings.get("json"):
        config.with_json_format(True)
    log_file = settings.get("log_file") or ""
    if log_file:
        config.with_file_output(log_file)
    if settings.get("buffered"):
        config.with_buffering(True)
        buffer_size = settings.get("buffer_size")
        if buffer_size:
            config.with_buffer_size(int(buffer_size))
    # Spans rely on logger.profile, which is a no-op without profiling.
    config.with_profiling(True)
    return config


def _env_settings() -> Dict[str, Any]:
    return {
        "min_level": (_env("LOG_LEVEL") or "INFO").upper(),
        "console": _env_flag("CONSOLE", False),
        "colored": not _env_flag("NO_COLOR", False),
        "json": _env_flag("LOG_JSON", False),
        "log_file": _env("LOG_FILE") or "",
        "buffered": _env_flag("LOG_BUFFERED", False),
        "buffer_size": _env("LOG_BUFFER_SIZE") or "2048",
    }


def build_config(preset: Optional[str] = None) -> Any:
    """Return a telelog config for ``preset`` or, if omitted, the environment."""

    if preset is None:
        return _apply_settings(tl.Config(), _env_settings())

    key = preset.lower()
    if key == "performance_analysis":
        key = "performance"
    try:
        settings = dict(PRESETS[key])
    except KeyError as exc:
        raise ValueError(f"Unknown preset '{preset}'.") from exc
    override = _env("LOG_FILE")
    if override:
        settings["log_file"] = override
    return _apply_settings(tl.Config(), settings)


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt.
    preset:
        One of ``"development"``, ``"production"`` or ``"performance"``.
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if config is None:
        config = build_config(preset)
    else:
        config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
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
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching metadata mid-flight."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a code block and, optionally, track it as a component.

    ``component=True`` reuses ``name`` as the component identifier; a string
    names the component explicitly. ``metadata`` is attached as logger context
    for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    if not isinstance(component_name, str):
        component_name = None

    context_keys = []
    attached: Dict[str, Any] = {}
    for key, value in (metadata or {}).items():
        serialized = _stringify(value)
        attached[key] = serialized
        log.add_context(key, serialized)
        context_keys.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=attached,
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
