"""Unit tests for structured logging infrastructure.

- StructuredFormatter produces valid JSON with redacted context
- configure_logging honours GITHUB_SHELL_LOG_LEVEL / GITHUB_SHELL_LOG_FORMAT
- timed_operation context manager
"""

import json
import logging
import sys
import time
from io import StringIO

import pytest

from github_shell.logging_config import (
    LOGGER_NAMESPACE,
    StructuredFormatter,
    TextFormatter,
    configure_logging,
)
from github_shell.timing import timed_operation


def _record(msg: str = "test_message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="github_shell.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, stream


class TestStructuredFormatter:
    def test_formatter_produces_valid_json(self):
        log_data = json.loads(StructuredFormatter().format(_record()))

        assert log_data["level"] == "INFO"
        assert log_data["logger"] == "github_shell.test"
        assert log_data["message"] == "test_message"
        assert log_data["timestamp"].endswith("Z")

    def test_extras_in_context(self):
        log_data = json.loads(StructuredFormatter().format(_record(call="Getting issues", attempt=2)))
        assert log_data["context"] == {"call": "Getting issues", "attempt": 2}

    def test_sensitive_keys_redacted(self):
        output = StructuredFormatter().format(
            _record(access_token="ghp_leak", Authorization="Bearer ghp_leak", call="x")
        )
        log_data = json.loads(output)

        assert "ghp_leak" not in output
        assert log_data["context"]["access_token"] == "[REDACTED]"
        assert log_data["context"]["Authorization"] == "[REDACTED]"
        assert log_data["context"]["call"] == "x"

    def test_no_context_without_extras(self):
        assert "context" not in json.loads(StructuredFormatter().format(_record()))

    def test_exception_included(self):
        try:
            raise RuntimeError("kaboom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        log_data = json.loads(StructuredFormatter().format(record))
        assert "RuntimeError: kaboom" in log_data["exception"]


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_namespace_logger(self):
        logger = logging.getLogger(LOGGER_NAMESPACE)
        saved = (logger.level, list(logger.handlers), logger.propagate)
        yield
        logger.setLevel(saved[0])
        logger.handlers = saved[1]
        logger.propagate = saved[2]

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_SHELL_LOG_LEVEL", "WARNING")
        configure_logging()
        assert logging.getLogger(LOGGER_NAMESPACE).level == logging.WARNING

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("GITHUB_SHELL_LOG_LEVEL", "WARNING")
        configure_logging("debug")
        assert logging.getLogger(LOGGER_NAMESPACE).level == logging.DEBUG

    def test_single_handler_on_repeat_calls(self):
        configure_logging()
        configure_logging()
        logger = logging.getLogger(LOGGER_NAMESPACE)
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_text_format(self, monkeypatch):
        monkeypatch.setenv("GITHUB_SHELL_LOG_FORMAT", "text")
        configure_logging()
        handler = logging.getLogger(LOGGER_NAMESPACE).handlers[0]
        assert isinstance(handler.formatter, TextFormatter)

    def test_json_format_default(self):
        configure_logging()
        handler = logging.getLogger(LOGGER_NAMESPACE).handlers[0]
        assert isinstance(handler.formatter, StructuredFormatter)


class TestTimedOperation:
    def test_logs_on_success(self):
        logger, stream = _capture("github_shell.test.timing_ok")

        with timed_operation("test_op", logger, extra={"call": "x"}) as span:
            span["pages"] = 3
            time.sleep(0.01)

        log_data = json.loads(stream.getvalue().strip())
        assert log_data["message"] == "test_op_completed"
        assert log_data["context"]["status"] == "success"
        assert log_data["context"]["pages"] == 3
        assert log_data["context"]["call"] == "x"
        assert log_data["context"]["duration_ms"] >= 9
        assert span["duration_ms"] == log_data["context"]["duration_ms"]

    def test_logs_and_reraises_on_failure(self):
        logger, stream = _capture("github_shell.test.timing_fail")

        with pytest.raises(ValueError):
            with timed_operation("test_op", logger) as span:
                raise ValueError("bad input")

        log_data = json.loads(stream.getvalue().strip())
        assert log_data["level"] == "ERROR"
        assert log_data["message"] == "test_op_failed"
        assert log_data["context"]["error_type"] == "ValueError"
        assert span["status"] == "failed"

    def test_custom_success_level(self):
        logger, stream = _capture("github_shell.test.timing_level")
        logger.setLevel(logging.INFO)

        with timed_operation("quiet_op", logger, level=logging.DEBUG):
            pass

        assert stream.getvalue() == ""

    def test_expected_failure_logged_as_warning(self):
        logger, stream = _capture("github_shell.test.timing_expected")

        with pytest.raises(LookupError):
            with timed_operation("lookup_op", logger, expected=(LookupError,)):
                raise KeyError("missing")

        log_data = json.loads(stream.getvalue().strip())
        assert log_data["level"] == "WARNING"
        assert log_data["message"] == "lookup_op_failed"
        assert log_data["context"]["error_type"] == "KeyError"

    def test_unexpected_failure_still_error(self):
        logger, stream = _capture("github_shell.test.timing_unexpected")

        with pytest.raises(ValueError):
            with timed_operation("lookup_op", logger, expected=(LookupError,)):
                raise ValueError("bad")

        assert json.loads(stream.getvalue().strip())["level"] == "ERROR"
