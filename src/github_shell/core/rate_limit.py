"""Per-token rate-limit bookkeeping shared by concurrent logical calls."""

import hashlib
import logging
import threading
import time
from datetime import datetime, timezone

from .errors import RateLimited
from .models import RateLimitSnapshot

logger = logging.getLogger("github_shell.core.rate_limit")

ANONYMOUS = "anonymous"


def token_fingerprint(token: str | None) -> str:
    """Stable key for a token that does not reveal it."""
    if not token:
        return ANONYMOUS
    return hashlib.sha256(token.encode()).hexdigest()[:16]


class RateLimitTracker:
    """Last observed X-RateLimit-* counters, keyed by token fingerprint.

    Reads and writes are guarded by one lock so concurrent calls (threads or
    asyncio tasks) never lose an update.

    Example:
        >>> tracker = RateLimitTracker()
        >>> tracker.record("ghp_x", RateLimitSnapshot(limit=5000, remaining=0, reset_at=time.time() + 60))
        >>> tracker.check("ghp_x")  # raises RateLimited without any HTTP traffic
    """

    def __init__(self, clock=time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshots: dict[str, RateLimitSnapshot] = {}

    def record(self, token: str | None, snapshot: RateLimitSnapshot | None) -> None:
        """Store counters from the latest response for ``token``.

        Responses for one token can complete out of order. Within one reset
        window the lowest ``remaining`` wins, and a snapshot from an older
        window never replaces a newer one.
        """
        if snapshot is None:
            return
        key = token_fingerprint(token)
        with self._lock:
            previous = self._snapshots.get(key)
            if previous is not None:
                snapshot = _merge(previous, snapshot)
            self._snapshots[key] = snapshot

        if snapshot.remaining is not None and snapshot.remaining % 500 == 0:
            logger.info(
                "rate_limit_status",
                extra={
                    "remaining": snapshot.remaining,
                    "limit": snapshot.limit,
                    "reset_at": _iso(snapshot.reset_at),
                },
            )

    def snapshot(self, token: str | None) -> RateLimitSnapshot | None:
        with self._lock:
            return self._snapshots.get(token_fingerprint(token))

    def check(
        self,
        token: str | None,
        description: str | None = None,
        *,
        attempts: int = 0,
        horizon: float = 0.0,
    ) -> None:
        """Fail fast when the quota for ``token`` is known to be exhausted.

        ``horizon`` looks ahead: with a pending backoff delay the check fails
        when the quota is still spent once that delay has passed.

        Raises:
            RateLimited: remaining == 0 and the reset time is after now + horizon
        """
        with self._lock:
            snapshot = self._snapshots.get(token_fingerprint(token))
        if snapshot is not None and snapshot.is_exhausted(self._clock() + horizon):
            logger.warning(
                "rate_limit_fail_fast",
                extra={
                    "reset_at": _iso(snapshot.reset_at),
                    "call": description,
                    "attempts": attempts,
                },
            )
            if attempts:
                message = f"Rate limit exhausted after {attempts} attempts; not retrying before reset"
            else:
                message = "Rate limit exhausted; request not sent"
            raise RateLimited.from_epoch(
                message,
                snapshot.reset_at,
                description=description,
                attempts=attempts,
            )

    def clear(self) -> None:
        with self._lock:
            self._snapshots.clear()


def _iso(epoch: float | None) -> str:
    if epoch is None:
        return "unknown"
    return datetime.fromtimestamp(epoch, tz=timezone.utc).isoformat()


def _merge(previous: RateLimitSnapshot, current: RateLimitSnapshot) -> RateLimitSnapshot:
    # Headers can omit fields; keep what we already knew
    limit = current.limit if current.limit is not None else previous.limit
    remaining = current.remaining if current.remaining is not None else previous.remaining
    reset_at = current.reset_at if current.reset_at is not None else previous.reset_at

    if previous.reset_at is not None and reset_at is not None:
        if reset_at < previous.reset_at:
            return previous
        if reset_at == previous.reset_at and previous.remaining is not None:
            remaining = min(remaining, previous.remaining)

    return RateLimitSnapshot(limit=limit, remaining=remaining, reset_at=reset_at)
