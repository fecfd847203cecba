"""Structured logging configuration for github-shell.

- JSON structured logging with StructuredFormatter
- Logger hierarchy under the github_shell namespace
- Environment variable control (GITHUB_SHELL_LOG_LEVEL, GITHUB_SHELL_LOG_FORMAT)
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

LOGGER_NAMESPACE = "github_shell"

# Keys redacted from the "context" block of every structured record
SENSITIVE_KEYS = {
    "password", "token", "access_token", "secret", "apikey", "api_key",
    "authorization", "credential", "auth", "bearer",
}

_STANDARD_FIELDS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "exc_info",
    "exc_text",
    "stack_info",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter.

    Outputs logs in JSON format with:
    - timestamp: UTC ISO 8601 format with 'Z' suffix
    - level: Log level name (INFO, ERROR, etc.)
    - logger: Logger name (github_shell hierarchy)
    - message: Log message
    - context: Extras dict merged from LogRecord attributes

    Sensitive keys (token, authorization, etc.) are replaced with
    "[REDACTED]" so credentials never reach log output.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            k: ("[REDACTED]" if k.lower() in SENSITIVE_KEYS else v)
            for k, v in record.__dict__.items()
            if k not in _STANDARD_FIELDS and not k.startswith("_")
        }

        if extras:
            log_data["context"] = extras

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter, used when GITHUB_SHELL_LOG_FORMAT=text."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structured logging for all github_shell loggers.

    Args:
        level: Optional log level override. If not provided, uses
               GITHUB_SHELL_LOG_LEVEL (default: INFO).

    Environment Variables:
        GITHUB_SHELL_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
        GITHUB_SHELL_LOG_FORMAT: Output format (json, text). Default: json
    """
    if level is None:
        level = os.getenv("GITHUB_SHELL_LOG_LEVEL", "INFO")

    log_level = getattr(logging, level.upper(), logging.INFO)

    log_format = os.getenv("GITHUB_SHELL_LOG_FORMAT", "json").lower()
    formatter = TextFormatter() if log_format == "text" else StructuredFormatter()

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(log_level)

    # Only one handler, however many times this is called
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setFormatter(formatter)

    logger.propagate = False
