"""Structured logging for fpkit's own debug events.

The library emits only at debug level: ``memoize hit`` / ``memoize miss`` and
``effect called``. Absorbing states never log. Applications opt in by
configuring a level and renderer:

    >>> from fpkit.logging import configure_logging, get_logger
    >>> configure_logging(format="console", level="DEBUG")
    >>> get_logger("orders").bind(region="eu").info("order placed", order_id=42)

Without explicit configuration, level and format come from ``fpkit.settings``.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TextIO, runtime_checkable

import orjson

from .settings import get_settings


@dataclass(slots=True)
class LogEntry:
    """One event plus the bound and call-site fields."""

    timestamp: float
    level: str
    event: str
    context: dict[str, object]

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """``12:00:01.250 [debug] memoize hit function='fib' logger='fpkit.memoize'``"""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    show_timestamp: bool = True

    def render(self, entry: LogEntry) -> None:
        fields = " ".join(f"{k}={v!r}" for k, v in sorted(entry.context.items()))
        head = f"[{entry.level}] {entry.event}"
        if self.show_timestamp:
            head = f"{entry.ts_human} {head}"
        print(f"{head} {fields}" if fields else head, file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """One JSON object per line. Values orjson cannot encode are written as their repr."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS, default=repr).decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    def render(self, entry: LogEntry) -> None:
        pass


@dataclass(slots=True)
class BoundLogger:
    """Logger carrying fixed fields. ``bind`` returns a copy with more fields.

    ``_renderer`` and ``_level`` pin this logger; left as None they follow the
    global configuration at emit time, so loggers created at import still pick
    up a later ``configure_logging``.
    """

    context: dict[str, object] = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None

    def bind(self, **kw: object) -> BoundLogger:
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def is_enabled_for(self, level: int) -> bool:
        return level >= (self._level if self._level is not None else _get_level())

    def _log(self, level: int, event: str, **kw: object) -> None:
        if not self.is_enabled_for(level):
            return
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**self.context, **kw})
        (self._renderer or _get_renderer()).render(entry)

    def debug(self, event: str, **kw: object) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: object) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: object) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: object) -> None: self._log(logging.ERROR, event, **kw)


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: LogRenderer | None = None
_level: int | None = None


def configure_logging(
    format: str = "console",  # noqa: A002 - matches settings field name
    level: str = "INFO",
    *,
    output: TextIO | None = None,
) -> LogRenderer:
    """Install the global renderer and level. ``format`` is "console", "json" or "none"."""
    global _renderer, _level
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer = renderer
    _level = getattr(logging, level.upper(), logging.INFO)
    return renderer


def reset_logging() -> None:
    """Forget ``configure_logging`` so settings apply again."""
    global _renderer, _level
    _renderer, _level = None, None


def get_logger(name: str | None = None, **initial_context: object) -> BoundLogger:
    """Logger with ``name`` bound as the ``logger`` field."""
    return BoundLogger(context={**initial_context, **({"logger": name} if name else {})})


def _get_level() -> int:
    if _level is not None:
        return _level
    settings = get_settings()
    return logging.DEBUG if settings.debug else getattr(logging, settings.logging.level, logging.INFO)


def _get_renderer() -> LogRenderer:
    global _renderer
    if _renderer is None:
        fmt = get_settings().logging.format
        _renderer = {"json": JsonRenderer, "none": NoOpRenderer}.get(fmt, ConsoleRenderer)()
    return _renderer
