"""Timing utilities for structured logging.

Uses time.perf_counter() for sub-millisecond precision timing.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional


@contextmanager
def timed_operation(
    operation: str,
    logger: logging.Logger,
    level: int = logging.INFO,
    extra: Optional[dict] = None,
    expected: tuple[type[BaseException], ...] = (),
) -> Iterator[dict[str, Any]]:
    """Context manager for timing operations with structured logging.

    - Captures start time on entry using time.perf_counter()
    - Yields a mutable span dict; keys the caller adds are logged on exit
    - Logs duration on exit (success or failure)
    - Re-raises exceptions after logging

    After exit the span also holds ``duration_ms`` and ``status``, so callers
    can read the measured duration from a ``finally`` block.

    Args:
        operation: Operation name (used in log message as {operation}_completed)
        logger: Logger instance to use for logging
        level: Log level for success case (default: INFO)
        extra: Optional dict of extra context to include in log
        expected: Exception types that are ordinary outcomes of the operation;
            these are logged at WARNING instead of ERROR

    Example:
        >>> logger = logging.getLogger("github_shell.core")
        >>> with timed_operation("list_issues", logger) as span:
        ...     span["pages"] = 3

    Logs on success:
        {"message": "list_issues_completed",
         "context": {"pages": 3, "duration_ms": 145.23, "status": "success"}}
    """
    start = time.perf_counter()
    span: dict[str, Any] = dict(extra or {})

    try:
        yield span

        span["duration_ms"] = round((time.perf_counter() - start) * 1000, 2)
        span["status"] = "success"
        logger.log(level, f"{operation}_completed", extra=dict(span))

    except BaseException as e:
        span["duration_ms"] = round((time.perf_counter() - start) * 1000, 2)
        span["status"] = "failed"
        logger.log(
            logging.WARNING if isinstance(e, expected) else logging.ERROR,
            f"{operation}_failed",
            extra={
                **span,
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )
        raise
