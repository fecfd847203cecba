"""Explicit invocation context shared by every core operation.

Holds everything a logical call needs besides its RequestDescriptor: the
configuration, the process-wide default token, per-token rate-limit
counters, the retry policy, the telemetry sink, the status reporter and a
long-lived httpx.AsyncClient. Mutable state is lock-guarded so concurrent
calls can share one context.
"""

import logging
import threading
from typing import Any

import httpx

from ..config import DEFAULT_MEDIA_TYPE, GitHubShellConfig, get_config
from .rate_limit import RateLimitTracker
from .retry import RetryPolicy
from .status import LoggingStatusReporter, StatusReporter
from .telemetry import NullTelemetrySink, PrometheusTelemetrySink, TelemetrySink

logger = logging.getLogger("github_shell.core.context")

_UNSET: Any = object()


class GitHubContext:
    """State and collaborators for REST invocations.

    Uses one httpx.AsyncClient with connection pooling for every call made
    through the context. Close it (or use ``async with``) when done.

    Attributes:
        config: Loaded GitHubShellConfig
        policy: RetryPolicy applied to every page fetch
        rate_limits: Per-token rate-limit counters
        telemetry: Sink for per-call and per-request telemetry
        status: Reporter for per-attempt status notifications

    Example:
        >>> async with GitHubContext() as ctx:
        ...     issues = await invoke_rest_method_multiple_result(
        ...         ctx, RequestDescriptor("repos/octo/hello/issues")
        ...     )
    """

    def __init__(
        self,
        config: GitHubShellConfig | None = None,
        *,
        access_token: str | None = _UNSET,
        policy: RetryPolicy | None = None,
        telemetry: TelemetrySink | None = None,
        status: StatusReporter | None = None,
        rate_limits: RateLimitTracker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            config: Configuration (default: get_config())
            access_token: Default token for this context; omit to use the
                configured token, pass None to force unauthenticated calls
            policy: Retry policy (default: derived from config)
            telemetry: Telemetry sink (default: Prometheus when enabled)
            status: Status reporter (default: logging reporter)
            rate_limits: Shared tracker, for contexts that share one token
            transport: Custom httpx transport (e.g. httpx.MockTransport)
        """
        self.config = config or get_config()
        self._lock = threading.Lock()
        self._default_token = (
            self.config.default_token() if access_token is _UNSET else access_token
        )

        self.policy = policy or RetryPolicy.from_config(self.config)
        self.rate_limits = rate_limits or RateLimitTracker()
        if telemetry is None:
            telemetry = (
                PrometheusTelemetrySink()
                if self.config.telemetry_enabled
                else NullTelemetrySink()
            )
        self.telemetry = telemetry
        self.status = status or LoggingStatusReporter(self.config.show_status)

        self.http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=self.config.connect_timeout,
                read=self.config.read_timeout,
                write=self.config.write_timeout,
                pool=self.config.pool_timeout,
            ),
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubContext":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the httpx client and release connections."""
        await self.http_client.aclose()

    @property
    def api_root(self) -> str:
        return self.config.api_root

    # --- Default token ---

    @property
    def default_token(self) -> str | None:
        with self._lock:
            return self._default_token

    def set_default_token(self, token: str | None) -> None:
        """Replace the default token used by calls without an override."""
        with self._lock:
            self._default_token = token or None
        logger.info("default_token_updated", extra={"authenticated": bool(token)})

    def clear_default_token(self) -> None:
        self.set_default_token(None)

    def resolve_token(self, explicit: str | None = None) -> str | None:
        """Explicit override > context default > None (unauthenticated)."""
        if explicit:
            return explicit
        return self.default_token

    # --- Request construction ---

    def build_url(self, uri_fragment: str) -> str:
        return f"{self.api_root}/{uri_fragment.lstrip('/')}"

    def build_headers(
        self, token: str | None, accept_headers: tuple[str, ...] = ()
    ) -> dict[str, str]:
        headers = {
            "Accept": ",".join(accept_headers) if accept_headers else DEFAULT_MEDIA_TYPE,
            "User-Agent": self.config.user_agent,
            "X-GitHub-Api-Version": self.config.api_version,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers
