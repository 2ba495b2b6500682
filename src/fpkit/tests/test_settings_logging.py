"""Tests for environment settings and structured logging."""

from __future__ import annotations

import io
import logging

import orjson
import pytest
from pydantic import ValidationError

from fpkit import Effect, configure_logging, get_logger, memoize
from fpkit.logging import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    LogRenderer,
    NoOpRenderer,
    _get_level,
    _get_renderer,
)
from fpkit.settings import FpkitSettings, get_settings


class CollectingRenderer:
    """Keeps entries in memory for assertions."""

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def render(self, entry: LogEntry) -> None:
        self.entries.append(entry)


# ═════════════════════════════════════════════════════════════════════════════
# Settings
# ═════════════════════════════════════════════════════════════════════════════


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("FPKIT_DEBUG", "FPKIT_LOG_LEVEL", "FPKIT_LOG_FORMAT", "FPKIT_MEMOIZE_MAX_SIZE", "FPKIT_MEMOIZE_TTL"):
        monkeypatch.delenv(var, raising=False)
    settings = get_settings()
    assert settings.debug is False
    assert settings.logging.level == "INFO"
    assert settings.logging.format == "console"
    assert settings.memoize.max_size == 1024
    assert settings.memoize.ttl is None


def test_settings_cached() -> None:
    assert get_settings() is get_settings()


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FPKIT_DEBUG", "true")
    monkeypatch.setenv("FPKIT_LOG_LEVEL", "warning")
    monkeypatch.setenv("FPKIT_LOG_FORMAT", "json")
    monkeypatch.setenv("FPKIT_MEMOIZE_TTL", "2.5")
    settings = get_settings()
    assert settings.debug is True
    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "json"
    assert settings.memoize.ttl == 2.5


def test_settings_reject_invalid_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FPKIT_MEMOIZE_MAX_SIZE", "0")
    with pytest.raises(ValidationError):
        FpkitSettings()


# ═════════════════════════════════════════════════════════════════════════════
# Renderers
# ═════════════════════════════════════════════════════════════════════════════


def test_console_renderer_format() -> None:
    out = io.StringIO()
    ConsoleRenderer(output=out, show_timestamp=False).render(LogEntry(0.0, "info", "started", {"b": 2, "a": "x"}))
    assert out.getvalue() == "[info] started a='x' b=2\n"


def test_json_renderer_emits_json_lines() -> None:
    out = io.StringIO()
    JsonRenderer(output=out).render(LogEntry(0.0, "debug", "memoize hit", {"function": "fib", "obj": object}))
    record = orjson.loads(out.getvalue())
    assert record["event"] == "memoize hit"
    assert record["level"] == "debug"
    assert record["function"] == "fib"
    assert record["timestamp"].startswith("1970-01-01T00:00:00")
    assert "object" in record["obj"]


def test_renderers_satisfy_protocol() -> None:
    for renderer in (ConsoleRenderer(), JsonRenderer(), NoOpRenderer(), CollectingRenderer()):
        assert isinstance(renderer, LogRenderer)


# ═════════════════════════════════════════════════════════════════════════════
# Loggers
# ═════════════════════════════════════════════════════════════════════════════


def test_bound_context_merges() -> None:
    sink = CollectingRenderer()
    log = BoundLogger(context={"service": "orders"}, _renderer=sink, _level=logging.DEBUG)
    log.bind(request_id="r1").info("placed", order_id=42)
    entry = sink.entries[0]
    assert entry.level == "info"
    assert entry.event == "placed"
    assert entry.context == {"service": "orders", "request_id": "r1", "order_id": 42}


def test_level_filtering() -> None:
    sink = CollectingRenderer()
    log = BoundLogger(_renderer=sink, _level=logging.WARNING)
    log.debug("hidden")
    log.info("hidden")
    log.warning("shown")
    log.error("shown")
    assert [e.level for e in sink.entries] == ["warning", "error"]


def test_get_logger_names_context() -> None:
    assert get_logger("orders", region="eu").context == {"region": "eu", "logger": "orders"}
    assert get_logger().context == {}


# ═════════════════════════════════════════════════════════════════════════════
# Global Configuration
# ═════════════════════════════════════════════════════════════════════════════


def test_configure_logging_console() -> None:
    out = io.StringIO()
    renderer = configure_logging(format="console", level="info", output=out)
    assert isinstance(renderer, ConsoleRenderer)
    log = get_logger("app")
    log.debug("hidden")
    log.info("visible", n=1)
    lines = out.getvalue().splitlines()
    assert len(lines) == 1
    assert "[info] visible" in lines[0]
    assert "logger='app'" in lines[0]


def test_configure_logging_json() -> None:
    out = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=out)
    get_logger("app").debug("tick")
    assert orjson.loads(out.getvalue())["event"] == "tick"


def test_configure_logging_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging(format="xml")


def test_level_and_renderer_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FPKIT_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("FPKIT_LOG_FORMAT", "none")
    assert _get_level() == logging.ERROR
    assert isinstance(_get_renderer(), NoOpRenderer)


def test_debug_flag_forces_debug_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FPKIT_DEBUG", "1")
    monkeypatch.setenv("FPKIT_LOG_LEVEL", "ERROR")
    assert _get_level() == logging.DEBUG


# ═════════════════════════════════════════════════════════════════════════════
# Library Events
# ═════════════════════════════════════════════════════════════════════════════


def test_memoize_logs_hits_and_misses() -> None:
    out = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=out)

    @memoize
    def square(x: int) -> int:
        return x * x

    square(3)
    square(3)
    events = [orjson.loads(line) for line in out.getvalue().splitlines()]
    assert [e["event"] for e in events] == ["memoize miss", "memoize hit"]
    assert all(e["logger"] == "fpkit.memoize" for e in events)
    assert events[0]["function"].endswith("square")


def test_effect_call_logs_at_debug() -> None:
    out = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=out)
    Effect.of(lambda a, b: a + b).call(1, 2)
    record = orjson.loads(out.getvalue())
    assert record["event"] == "effect called"
    assert record["args"] == 2
    assert record["stages"] == 0


def test_mapped_effect_logs_source_name() -> None:
    """Events from a mapped pipeline name the source callable, not the internal wrapper."""
    out = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=out)

    def fetch_user(user_id: int) -> dict[str, object]:
        return {"id": user_id}

    pipeline = Effect.of(fetch_user).map(lambda u: u["id"]).map(str)
    assert pipeline.call(7) == "7"
    record = orjson.loads(out.getvalue())
    assert record["function"].endswith("fetch_user")
    assert "mapped" not in record["function"]
    assert record["stages"] == 2
    assert "fetch_user" in repr(pipeline)


def test_library_is_silent_by_default(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("FPKIT_DEBUG", raising=False)
    monkeypatch.delenv("FPKIT_LOG_LEVEL", raising=False)

    @memoize
    def ident(x: int) -> int:
        return x

    ident(1)
    ident(1)
    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out == ""
