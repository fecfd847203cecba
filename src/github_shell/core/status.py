"""Status/progress reporting for long-running logical calls."""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger("github_shell.status")


@runtime_checkable
class StatusReporter(Protocol):
    """Receives a notification before every attempt and one on completion."""

    def attempt(self, description: str, attempt: int, page: int) -> None: ...

    def complete(self, description: str, success: bool) -> None: ...


class LoggingStatusReporter:
    """Reports status through the github_shell.status logger.

    Args:
        show_status: Log at INFO (visible by default) instead of DEBUG
    """

    def __init__(self, show_status: bool = False) -> None:
        self.level = logging.INFO if show_status else logging.DEBUG

    def attempt(self, description: str, attempt: int, page: int) -> None:
        logger.log(
            self.level,
            "status_attempt",
            extra={"call": description, "attempt": attempt, "page": page},
        )

    def complete(self, description: str, success: bool) -> None:
        logger.log(
            self.level,
            "status_complete",
            extra={"call": description, "success": success},
        )


class NullStatusReporter:
    def attempt(self, description: str, attempt: int, page: int) -> None:
        pass

    def complete(self, description: str, success: bool) -> None:
        pass
