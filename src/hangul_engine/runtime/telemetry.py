"""Logging for the input engine, on top of telelog.

Modules call ``record_event`` for discrete happenings (a flush, a candidate
commit, a skipped hotkey) and wrap hot paths such as key dispatch in
``span`` so telelog can profile them per component. ``configure`` swaps the
process-wide telelog configuration; the demo app uses it to select a preset.

Environment (prefix ``HANGUL_ENGINE_``): ``LOGGER``, ``LOG_LEVEL``,
``LOG_FILE``, ``LOG_JSON``, ``LOG_BUFFERED``, ``LOG_BUFFER_SIZE``,
``DISABLE_CONSOLE`` and ``NO_COLOR``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "HANGUL_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "hangul_engine")

# preset -> (min level, console, json, buffered, default log file)
PRESETS: Dict[str, Tuple[str, bool, bool, bool, Optional[str]]] = {
    "development": ("DEBUG", True, False, False, None),
    # one event per key would flood the file at INFO
    "production": ("WARNING", False, False, True, "hangul_engine.log"),
    "performance": ("DEBUG", False, True, True, "hangul_engine-performance.log"),
}

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def preset_config(preset: str) -> Any:
    try:
        level, console, as_json, buffered, log_file = PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{preset}'; expected one of {sorted(PRESETS)}."
        ) from None

    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    if console:
        config.with_colored_output(True)
    config.with_json_format(as_json)
    if buffered:
        config.with_buffering(True)
    target = _env("LOG_FILE") or log_file
    if target:
        config.with_file_output(target)
    config.with_profiling(True)
    return config


def env_config() -> Any:
    """Configuration assembled from ``HANGUL_ENGINE_*`` variables."""

    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a telelog configuration for every engine logger.

    Parameters
    ----------
    config:
        A ready ``telelog.Config``.
    preset:
        One of ``PRESETS``. Exclusive with ``config``; with neither, the
        configuration comes from the environment.
    """

    global _CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = preset_config(preset)
    elif config is None:
        config = env_config()
    else:
        config.with_profiling(True)
    _CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = env_config()
    key = name or DEFAULT_LOGGER_NAME
    found = _LOGGERS.get(key)
    if found is None:
        found = _LOGGERS[key] = tl.Logger.with_config(key, _CONFIG)
    return found


def _emit(log: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as structured fields."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Collects fields while a span runs; they are logged when it ends."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def _payload(self, **extra: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload.update({key: _text(value) for key, value in extra.items()})
        return payload

    def done(self) -> None:
        _emit(self.logger, "debug", "span::done", self._payload())

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload(reason=reason))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component`` tracks the block as a telelog component too; ``True`` means
    "use ``name``". ``metadata`` is set as logger context while the block runs.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None

    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata=dict(context),
    )
    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        handle.done()


configure()
logger = get_logger()

__all__ = [
    "ENV_PREFIX",
    "PRESETS",
    "SpanHandle",
    "configure",
    "env_config",
    "get_logger",
    "logger",
    "preset_config",
    "record_event",
    "span",
]
