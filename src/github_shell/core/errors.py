"""Error kinds surfaced by the REST invocation core.

Every terminal outcome of a logical call is one of these. Retries only ever
happen for ServerError and RateLimited causes; once the attempt budget is
spent the last transient cause is raised as-is.
"""

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ClientError",
    "DecodeError",
    "GitHubShellError",
    "RateLimited",
    "ServerError",
]


class GitHubShellError(Exception):
    """Base class for all classified REST failures.

    Attributes:
        description: Human-readable description of the logical call
        attempts: HTTP attempts made for the failing page (0 = none issued)
    """

    def __init__(
        self,
        message: str,
        *,
        description: str | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message)
        self.description = description
        self.attempts = attempts

    def __str__(self) -> str:
        message = super().__str__()
        if self.description:
            return f"{self.description}: {message}"
        return message


class ClientError(GitHubShellError):
    """4xx response. Never retried.

    Attributes:
        status_code: HTTP status code
        payload: Decoded error body (GitHub's {"message": ..., "errors": [...]})
    """

    def __init__(
        self,
        status_code: int,
        payload: Any = None,
        *,
        description: str | None = None,
        attempts: int = 1,
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        detail = payload.get("message") if isinstance(payload, dict) else payload
        message = f"GitHub API error {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, description=description, attempts=attempts)


class ServerError(GitHubShellError):
    """5xx response or transport failure, after retries were exhausted.

    Attributes:
        status_code: HTTP status code, or None for transport failures
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        description: str | None = None,
        attempts: int = 0,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, description=description, attempts=attempts)


class RateLimited(GitHubShellError):
    """Throttled by GitHub, or quota known to be exhausted before the request.

    Attributes:
        reset_at: When the quota resets (UTC), if GitHub said so
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        reset_at: datetime | None = None,
        *,
        description: str | None = None,
        attempts: int = 0,
    ) -> None:
        self.reset_at = reset_at
        if reset_at is not None:
            message = f"{message}. Resets at {reset_at.isoformat()}"
        super().__init__(message, description=description, attempts=attempts)

    @classmethod
    def from_epoch(cls, message: str, reset_epoch: float | None, **kwargs: Any) -> "RateLimited":
        reset_at = (
            datetime.fromtimestamp(reset_epoch, tz=timezone.utc)
            if reset_epoch is not None
            else None
        )
        return cls(message, reset_at, **kwargs)


class DecodeError(GitHubShellError):
    """Success status with a body (or pagination header) that cannot be used."""
