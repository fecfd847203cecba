"""Telemetry sinks for logical-call outcomes and per-request traffic."""

import logging
from typing import Any, Protocol, runtime_checkable

from .. import metrics

logger = logging.getLogger("github_shell.telemetry")


@runtime_checkable
class TelemetrySink(Protocol):
    """Accepts one summary event per logical call plus per-request signals."""

    def record_call(
        self,
        call: str,
        outcome: str,
        duration_seconds: float,
        properties: dict[str, Any],
    ) -> None: ...

    def record_request(self, method: str, status: str) -> None: ...

    def record_retry(self, reason: str) -> None: ...

    def record_rate_limit(self, remaining: int) -> None: ...


class PrometheusTelemetrySink:
    """Feeds the github_shell_* Prometheus metrics.

    Metric failures are logged and never propagate into the API call.
    """

    def record_call(
        self,
        call: str,
        outcome: str,
        duration_seconds: float,
        properties: dict[str, Any],
    ) -> None:
        try:
            metrics.calls_total.labels(call=call, outcome=outcome).inc()
            metrics.call_duration_seconds.labels(call=call).observe(duration_seconds)
            pages = properties.get("pages")
            if pages:
                metrics.call_pages.labels(call=call).observe(pages)
        except Exception as e:
            logger.warning("telemetry_record_failed", extra={"error": str(e)})

    def record_request(self, method: str, status: str) -> None:
        try:
            metrics.http_requests_total.labels(method=method, status=status).inc()
        except Exception as e:
            logger.warning("telemetry_record_failed", extra={"error": str(e)})

    def record_retry(self, reason: str) -> None:
        try:
            metrics.retries_total.labels(reason=reason).inc()
        except Exception as e:
            logger.warning("telemetry_record_failed", extra={"error": str(e)})

    def record_rate_limit(self, remaining: int) -> None:
        try:
            metrics.rate_limit_remaining.set(remaining)
        except Exception as e:
            logger.warning("telemetry_record_failed", extra={"error": str(e)})


class NullTelemetrySink:
    def record_call(self, call, outcome, duration_seconds, properties) -> None:
        pass

    def record_request(self, method, status) -> None:
        pass

    def record_retry(self, reason) -> None:
        pass

    def record_rate_limit(self, remaining) -> None:
        pass
