"""Logging and profiling for the editor core, backed by telelog.

Everything goes through four calls: ``configure``, ``get_logger``,
``record_event`` and ``span``. The host usually owns the terminal, so
console output stays off unless ``UE_ENGINE_LOG_CONSOLE`` is set.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "UE_ENGINE_"
LOGGER_NAME = "ue_engine"

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _setting(name: str) -> str:
    return os.environ.get(ENV_PREFIX + name, "")


def _enabled(name: str) -> bool:
    return _setting(name).lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set, bytes, bytearray)):
        return repr(value)
    return str(value)


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((_setting("LOG_LEVEL") or "INFO").upper())
    config.with_console_output(_enabled("LOG_CONSOLE"))
    if _enabled("LOG_JSON"):
        config.with_json_format(True)
    if _setting("LOG_FILE"):
        config.with_file_output(_setting("LOG_FILE"))
    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (a ``telelog.Config``) or build one from ``UE_ENGINE_*``.

    Profiling is always on. Loggers handed out earlier are dropped so the
    next ``get_logger`` sees the new settings.
    """

    global _config
    _config = config if config is not None else _env_config()
    _config.with_profiling(True)
    _loggers.clear()


def get_logger(name: str = LOGGER_NAME) -> Any:
    if _config is None:
        configure()
    if name not in _loggers:
        _loggers[name] = tl.Logger.with_config(name, _config)
    return _loggers[name]


def _log(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    pairs = [(str(key), _text(value)) for key, value in fields.items()]
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
    else:
        getattr(logger, level)(f"{message} {dict(pairs)}")


def record_event(
    name: str, *, level: str = "info", data: Optional[Dict[str, Any]] = None
) -> None:
    _log(get_logger(), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` also tracks the block as a component called ``name``;
    a string picks another component name. ``metadata`` is logger context
    while the block runs. A failing block logs ``span::fail`` and re-raises.
    """

    log = get_logger()
    tracked = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(name, dict(context))
    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if tracked:
            stack.enter_context(log.track_component(tracked))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            _log(log, "error", "span::fail", {"span": name, **handle.metadata, "reason": exc})
            raise


__all__ = ["SpanHandle", "configure", "get_logger", "record_event", "span"]
