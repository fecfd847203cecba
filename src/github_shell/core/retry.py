"""Retry state machine for a single page fetch.

A page fetch moves ATTEMPTING -> (SUCCEEDED | FAILED | BACKOFF), and
BACKOFF -> ATTEMPTING once the wait has elapsed. Both functions here are
pure: ``classify_response`` maps an HTTP response to an Outcome and
``next_state`` maps (attempt, outcome, policy) to the next Transition. The
waiting and the HTTP I/O live in ``invoke``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "Outcome",
    "OutcomeKind",
    "RetryPolicy",
    "RetryState",
    "Transition",
    "classify_response",
    "classify_transport_error",
    "next_state",
]

_SECONDARY_LIMIT_MARKERS = ("secondary rate limit", "abuse")


class RetryState(str, Enum):
    ATTEMPTING = "attempting"
    BACKOFF = "backoff"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    NOT_READY = "not_ready"  # 202 on GET: statistics still being computed
    THROTTLED = "throttled"  # secondary limit / abuse detection / 429
    QUOTA_EXHAUSTED = "quota_exhausted"  # primary limit, remaining == 0
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    TRANSPORT_ERROR = "transport_error"


_TRANSIENT = frozenset(
    {
        OutcomeKind.NOT_READY,
        OutcomeKind.THROTTLED,
        OutcomeKind.SERVER_ERROR,
        OutcomeKind.TRANSPORT_ERROR,
    }
)


@dataclass(frozen=True)
class Outcome:
    """Classified result of one HTTP attempt."""

    kind: OutcomeKind
    status_code: int | None = None
    retry_after: float | None = None
    detail: str | None = None

    @property
    def transient(self) -> bool:
        return self.kind in _TRANSIENT

    @property
    def retry_reason(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and backoff schedule for one page fetch."""

    max_attempts: int = 5
    backoff_seconds: float = 2.0
    backoff_multiplier: float = 2.0
    max_backoff_seconds: float = 60.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @classmethod
    def from_config(cls, config: Any) -> "RetryPolicy":
        return cls(
            max_attempts=config.max_attempts,
            backoff_seconds=config.backoff_seconds,
            backoff_multiplier=config.backoff_multiplier,
            max_backoff_seconds=config.max_backoff_seconds,
        )

    def delay(self, attempt: int, retry_after: float | None = None) -> float:
        """Seconds to wait after ``attempt`` (1-based) failed transiently."""
        if retry_after is not None:
            return min(max(retry_after, 0.0), self.max_backoff_seconds)
        wait = self.backoff_seconds * self.backoff_multiplier ** (attempt - 1)
        return min(wait, self.max_backoff_seconds)


@dataclass(frozen=True)
class Transition:
    state: RetryState
    delay: float = 0.0


def next_state(attempt: int, outcome: Outcome, policy: RetryPolicy) -> Transition:
    """Decide what follows ``attempt`` (1-based) given its outcome."""
    if outcome.kind is OutcomeKind.SUCCESS:
        return Transition(RetryState.SUCCEEDED)
    if not outcome.transient or attempt >= policy.max_attempts:
        return Transition(RetryState.FAILED)
    return Transition(RetryState.BACKOFF, policy.delay(attempt, outcome.retry_after))


def classify_response(
    method: str,
    status_code: int,
    headers: Mapping[str, str],
    payload: Any = None,
) -> Outcome:
    """Map an HTTP status (plus headers and decoded error body) to an Outcome."""
    if 200 <= status_code < 300:
        if status_code == 202 and method.upper() == "GET":
            return Outcome(OutcomeKind.NOT_READY, status_code)
        return Outcome(OutcomeKind.SUCCESS, status_code)

    if status_code >= 500:
        return Outcome(
            OutcomeKind.SERVER_ERROR,
            status_code,
            retry_after=_retry_after(headers),
            detail=_message(payload),
        )

    if status_code in (403, 429):
        message = (_message(payload) or "").lower()
        retry_after = _retry_after(headers)
        if retry_after is not None or any(m in message for m in _SECONDARY_LIMIT_MARKERS):
            return Outcome(
                OutcomeKind.THROTTLED, status_code, retry_after, _message(payload)
            )
        if headers.get("X-RateLimit-Remaining") == "0":
            return Outcome(OutcomeKind.QUOTA_EXHAUSTED, status_code, detail=_message(payload))
        if status_code == 429:
            return Outcome(OutcomeKind.THROTTLED, status_code, detail=_message(payload))

    return Outcome(OutcomeKind.CLIENT_ERROR, status_code, detail=_message(payload))


def classify_transport_error(error: Exception) -> Outcome:
    return Outcome(OutcomeKind.TRANSPORT_ERROR, detail=f"{type(error).__name__}: {error}")


def _retry_after(headers: Mapping[str, str]) -> float | None:
    value = headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _message(payload: Any) -> str | None:
    if isinstance(payload, dict):
        message = payload.get("message")
        return str(message) if message is not None else None
    if isinstance(payload, str) and payload:
        return payload
    return None
