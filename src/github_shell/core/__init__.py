"""REST invocation core.

Authentication injection, Link pagination, rate-limit handling and
retry-on-transient-failure for every endpoint command.
"""

from .context import GitHubContext
from .errors import ClientError, DecodeError, GitHubShellError, RateLimited, ServerError
from .invoke import fetch_page, invoke_rest_method, invoke_rest_method_multiple_result
from .models import JSONValue, RateLimitSnapshot, RequestDescriptor, ResponsePage
from .rate_limit import RateLimitTracker
from .retry import RetryPolicy, RetryState
from .status import LoggingStatusReporter, NullStatusReporter, StatusReporter
from .telemetry import NullTelemetrySink, PrometheusTelemetrySink, TelemetrySink

__all__ = [
    "ClientError",
    "DecodeError",
    "GitHubContext",
    "GitHubShellError",
    "JSONValue",
    "LoggingStatusReporter",
    "NullStatusReporter",
    "NullTelemetrySink",
    "PrometheusTelemetrySink",
    "RateLimitSnapshot",
    "RateLimitTracker",
    "RateLimited",
    "RequestDescriptor",
    "ResponsePage",
    "RetryPolicy",
    "RetryState",
    "ServerError",
    "StatusReporter",
    "TelemetrySink",
    "fetch_page",
    "invoke_rest_method",
    "invoke_rest_method_multiple_result",
]
