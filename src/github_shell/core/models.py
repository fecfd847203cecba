"""Request and response value types for the REST invocation core."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

JSONValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"})


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical API call, as built by an endpoint command.

    Attributes:
        uri_fragment: Path relative to the API root, e.g. "repos/o/r/issues"
        method: HTTP method
        body: JSON-serialisable payload, sent only when not None
        accept_headers: Media types for the Accept header (preview opt-ins)
        description: Shown in status notifications and error messages
        access_token: Overrides the context's default token for this call
        telemetry_name: Low-cardinality call name for telemetry (default: method)
    """

    uri_fragment: str
    method: str = "GET"
    body: JSONValue = None
    accept_headers: tuple[str, ...] = ()
    description: str = ""
    access_token: str | None = field(default=None, repr=False)
    telemetry_name: str = ""

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        object.__setattr__(self, "method", method)
        if self.uri_fragment.startswith(("http://", "https://")):
            raise ValueError("uri_fragment must be relative to the API root")
        if isinstance(self.accept_headers, str):
            object.__setattr__(self, "accept_headers", (self.accept_headers,))
        else:
            object.__setattr__(self, "accept_headers", tuple(self.accept_headers))
        if not self.description:
            object.__setattr__(
                self, "description", f"{method} {self.uri_fragment.lstrip('/')}"
            )
        if not self.telemetry_name:
            object.__setattr__(self, "telemetry_name", method)


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit counters from one response's X-RateLimit-* headers."""

    limit: int | None = None
    remaining: int | None = None
    reset_at: float | None = None  # epoch seconds

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitSnapshot | None":
        """Parse rate-limit headers; None when the response carries none."""
        limit = _parse_number(headers.get("X-RateLimit-Limit"), int)
        remaining = _parse_number(headers.get("X-RateLimit-Remaining"), int)
        reset_at = _parse_number(headers.get("X-RateLimit-Reset"), float)
        if limit is None and remaining is None and reset_at is None:
            return None
        return cls(limit=limit, remaining=remaining, reset_at=reset_at)

    def is_exhausted(self, now: float) -> bool:
        """True while no calls remain and the reset time is still ahead."""
        return (
            self.remaining == 0
            and self.reset_at is not None
            and self.reset_at > now
        )


@dataclass(frozen=True)
class ResponsePage:
    """Decoded body of one HTTP response plus its pagination/rate-limit data."""

    data: JSONValue
    status_code: int
    next_url: str | None = None
    rate_limit: RateLimitSnapshot | None = None
    attempts: int = 1

    def items(self) -> list[Any]:
        """Items this page contributes to an aggregated result."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        if isinstance(self.data, dict) and isinstance(self.data.get("items"), list):
            # Search endpoints wrap results: {"total_count": n, "items": [...]}
            return list(self.data["items"])
        return [self.data]


def _parse_number(value: str | None, kind):
    if value is None:
        return None
    try:
        return kind(value)
    except (TypeError, ValueError):
        return None
