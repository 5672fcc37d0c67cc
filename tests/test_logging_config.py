"""Tests for centralized logging configuration."""

import json
import logging
import os
import sys
from datetime import date
from unittest.mock import patch

import pytest

from src.interpreter import TaskInterpreter
from src.logging_config import JSONFormatter, configure_logging


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Reset root logger state after each test."""
    root = logging.getLogger()
    original_level = root.level
    original_handlers = root.handlers[:]
    yield
    root.setLevel(original_level)
    root.handlers = original_handlers


def _record(msg="msg", args=(), level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="src.interpreter.task_interpreter",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# ==================== configure_logging ====================


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_defaults_to_info_text(self):
        with patch.dict(os.environ, {}, clear=True):
            configure_logging()
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)

    @pytest.mark.parametrize(
        "env_level, expected",
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("NOTREAL", logging.INFO),
            # Attribute on the logging module that is not a level
            ("BASIC_FORMAT", logging.INFO),
        ],
    )
    def test_level_from_env(self, env_level, expected):
        with patch.dict(os.environ, {"LOG_LEVEL": env_level}, clear=True):
            configure_logging()
        assert logging.getLogger().level == expected

    def test_level_override_takes_precedence(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}, clear=True):
            configure_logging(level_override="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert root.handlers[0].level == logging.DEBUG

    def test_json_format(self):
        with patch.dict(os.environ, {"LOG_FORMAT": "JSON"}, clear=True):
            configure_logging()
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_replaces_existing_handlers(self):
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())

        with patch.dict(os.environ, {}, clear=True):
            configure_logging()
        assert len(root.handlers) == 1


# ==================== JSONFormatter ====================


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_core_fields(self):
        data = json.loads(JSONFormatter().format(_record("Parsed %r", ("buy milk",))))
        assert data["level"] == "INFO"
        assert data["logger"] == "src.interpreter.task_interpreter"
        assert data["message"] == "Parsed 'buy milk'"
        assert "T" in data["timestamp"]
        assert data["timestamp"].endswith("+00:00")
        assert "exception" not in data

    def test_includes_extra_fields(self):
        record = _record(failure_kind="ambiguous_date")
        data = json.loads(JSONFormatter().format(record))
        assert data["failure_kind"] == "ambiguous_date"
        assert "args" not in data
        assert "lineno" not in data

    def test_non_serializable_extra_is_stringified(self):
        data = json.loads(JSONFormatter().format(_record(due_date=date(2025, 8, 22))))
        assert data["due_date"] == "2025-08-22"

    def test_includes_exception_info(self):
        try:
            raise ValueError("bad draft")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(
            JSONFormatter().format(_record("Failed", level=logging.ERROR, exc_info=exc_info))
        )
        assert data["level"] == "ERROR"
        assert "ValueError: bad draft" in data["exception"]

    def test_interpreter_failure_is_logged_with_kind(self, caplog):
        with caplog.at_level(logging.INFO, logger="src.interpreter.task_interpreter"):
            TaskInterpreter().interpret("   ", date(2025, 8, 18))

        (record,) = [r for r in caplog.records if hasattr(r, "failure_kind")]
        data = json.loads(JSONFormatter().format(record))
        assert data["failure_kind"] == "empty_input"
