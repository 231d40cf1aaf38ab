"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging
import sys

from model_picker.base.log_support import JsonFormatter
from model_picker.base.logging import LogContext, configure_logger, get_logger, log_event
from model_picker.config import configure_logging, get_settings


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("MODEL_PICKER_LOG_LEVEL", "ERROR")
    logger = get_logger(name="model_picker.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"
    assert data["msg"] == "fail"


def test_log_event_emits_single_json_payload(monkeypatch, capsys):
    monkeypatch.delenv("MODEL_PICKER_LOG_LEVEL", raising=False)
    logger = get_logger(name="model_picker.test.events", json_mode=True)
    log_event(
        logger,
        "catalog.refresh.success",
        LogContext(provider="openai", extra={"attempt": 1, "skipped": None}),
        count=3,
        error=None,
    )
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "catalog.refresh.success"
    assert data["provider"] == "openai"
    assert data["attempt"] == 1
    assert data["count"] == 3
    assert "error" not in data
    assert "skipped" not in data
    assert "msg" not in data


def test_log_event_keep_none(monkeypatch, capsys):
    monkeypatch.delenv("MODEL_PICKER_LOG_LEVEL", raising=False)
    logger = get_logger(name="model_picker.test.none", json_mode=True)
    log_event(logger, "selection.provider.deleted", keep_none=True, selected=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert "selected" in data and data["selected"] is None


def test_log_event_respects_level(monkeypatch, capsys):
    monkeypatch.delenv("MODEL_PICKER_LOG_LEVEL", raising=False)
    logger = get_logger(name="model_picker.test.debug", json_mode=True)
    log_event(logger, "catalog.refresh.superseded", level=logging.DEBUG)
    assert capsys.readouterr().err == ""


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="model_picker.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"provider": "ollama", "event": "catalog.initialize"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["provider"] == "ollama"
    assert payload["logger"] == "model_picker.test.json"
    assert "msg" not in payload


def _console_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if getattr(h, "_model_picker_console_handler", False)]


def test_child_logger_uses_parent_handler_without_duplicates() -> None:
    logger = get_logger(name="model_picker.test.child", json_mode=False)
    base_logger = logging.getLogger("model_picker")
    assert logger.propagate is True
    assert _console_handlers(logger) == []
    assert len(_console_handlers(base_logger)) == 1
    get_logger(name="model_picker.test.child2")
    assert len(_console_handlers(base_logger)) == 1


def test_closed_console_stream_is_replaced(monkeypatch) -> None:
    monkeypatch.delenv("MODEL_PICKER_LOG_LEVEL", raising=False)
    dead = io.StringIO()
    live = io.StringIO()
    monkeypatch.setattr(sys, "stderr", dead)
    base_logger = get_logger()
    dead.close()
    monkeypatch.setattr(sys, "stderr", live)
    log_event(get_logger("model_picker.test.closed"), "catalog.initialize", providers=1)
    handlers = _console_handlers(base_logger)
    assert len(handlers) == 1
    assert handlers[0].stream is live
    assert json.loads(live.getvalue().strip())["providers"] == 1


def test_configure_logger_file_handler(tmp_path, monkeypatch):
    monkeypatch.delenv("MODEL_PICKER_LOG_LEVEL", raising=False)
    path = tmp_path / "logs" / "catalog.log"
    base = configure_logger(level="INFO", file_path=str(path))
    try:
        log_event(get_logger("model_picker.test.file"), "catalog.initialize", providers=2)
        for handler in base.handlers:
            if getattr(handler, "baseFilename", None):
                handler.flush()
        line = path.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["providers"] == 2
    finally:
        configure_logger(file_path=None)
    assert not any(getattr(h, "baseFilename", None) for h in base.handlers)


def test_configure_logging_applies_settings(monkeypatch):
    monkeypatch.delenv("MODEL_PICKER_LOG_LEVEL", raising=False)
    logger = configure_logging(get_settings({"log_level": "WARNING", "json_logs": False}, environ={}))
    try:
        assert logger.level == logging.WARNING
        assert not isinstance(logger.handlers[0].formatter, JsonFormatter)
    finally:
        configure_logger(level=logging.INFO, json_mode=True)
