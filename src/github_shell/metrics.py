"""
Prometheus metrics definitions for github-shell.

Defines Counter, Gauge and Histogram metrics describing REST traffic,
logical call outcomes, retries and rate-limit headroom.

Naming: snake_case, github_shell_ prefix.
"""

from prometheus_client import Counter, Gauge, Histogram

# ==============================================================================
# COUNTERS - Monotonically increasing values
# ==============================================================================

http_requests_total = Counter(
    "github_shell_requests_total",
    "HTTP requests issued against the GitHub REST API",
    ["method", "status"],
    # status: numeric HTTP status, or "transport_error"
)

calls_total = Counter(
    "github_shell_calls_total",
    "Logical calls (single or multi-page) by outcome",
    ["call", "outcome"],
    # outcome: success, ClientError, ServerError, RateLimited, DecodeError, cancelled
)

retries_total = Counter(
    "github_shell_retries_total",
    "Attempts repeated after a transient failure",
    ["reason"],
    # reason: throttled, not_ready, server_error, transport_error
)

# ==============================================================================
# GAUGES - Point-in-time values
# ==============================================================================

rate_limit_remaining = Gauge(
    "github_shell_rate_limit_remaining",
    "Last observed X-RateLimit-Remaining value",
)

# ==============================================================================
# HISTOGRAMS - Distributions of observed values
# ==============================================================================

call_duration_seconds = Histogram(
    "github_shell_call_duration_seconds",
    "Logical call duration in seconds, all pages and retries included",
    ["call"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

call_pages = Histogram(
    "github_shell_call_pages",
    "Pages fetched per logical call",
    ["call"],
    buckets=[1, 2, 3, 5, 10, 20, 50, 100],
)
