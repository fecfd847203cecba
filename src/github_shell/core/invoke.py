"""REST invocation core: single-result and multi-page logical calls.

Every endpoint command funnels through ``invoke_rest_method`` or
``invoke_rest_method_multiple_result``. Each page fetch runs the retry
state machine from ``retry``: attempt, classify, then succeed, fail or back
off and attempt again. Backoff uses asyncio.sleep, so only the calling task
waits.

Reference: https://docs.github.com/en/rest/using-the-rest-api/rate-limits-for-the-rest-api
"""

import asyncio
import logging
from typing import Any

import httpx

from ..timing import timed_operation
from .context import GitHubContext
from .errors import ClientError, DecodeError, GitHubShellError, RateLimited, ServerError
from .models import JSONValue, RateLimitSnapshot, RequestDescriptor, ResponsePage
from .pagination import is_within_root, next_link
from .retry import (
    Outcome,
    OutcomeKind,
    RetryState,
    classify_response,
    classify_transport_error,
    next_state,
)

logger = logging.getLogger("github_shell.core.invoke")

__all__ = [
    "fetch_page",
    "invoke_rest_method",
    "invoke_rest_method_multiple_result",
]


async def invoke_rest_method(
    context: GitHubContext,
    request: RequestDescriptor,
    *,
    timeout: float | None = None,
) -> JSONValue:
    """Execute a single-result logical call.

    Args:
        context: Invocation context (token, rate limits, client, policy)
        request: What to call
        timeout: Optional bound in seconds for the whole call, retries included

    Returns:
        Decoded JSON body; None for empty bodies (204); text for non-JSON
        media types requested through accept headers

    Raises:
        ClientError: 4xx response (never retried)
        ServerError: 5xx or transport failure on every allowed attempt
        RateLimited: Throttled on every allowed attempt, or quota exhausted
        DecodeError: Success status with a malformed body
    """
    return await _logical_call(context, request, multiple=False, timeout=timeout)


async def invoke_rest_method_multiple_result(
    context: GitHubContext,
    request: RequestDescriptor,
    *,
    timeout: float | None = None,
) -> list[Any]:
    """Execute a logical call that follows Link rel="next" pagination.

    Pages are fetched strictly in order, each with the full retry policy.
    The result is the concatenation of every page's items in page order.
    Any page failure (or cancellation) discards the pages already fetched.

    Raises:
        Same as invoke_rest_method, plus DecodeError when a next link leaves
        the API root or points at a page already fetched.
    """
    return await _logical_call(context, request, multiple=True, timeout=timeout)


async def _logical_call(
    context: GitHubContext,
    request: RequestDescriptor,
    *,
    multiple: bool,
    timeout: float | None,
) -> Any:
    # Resolved once; every page of this call uses the same token
    token = context.resolve_token(request.access_token)
    properties: dict[str, Any] = {
        "method": request.method,
        "multiple": multiple,
        "authenticated": token is not None,
        "pages": 0,
        "attempts": 0,
    }
    outcome = "error"
    span: dict[str, Any] = {}

    try:
        with timed_operation(
            "github_call",
            logger,
            level=logging.DEBUG,
            extra={"call": request.description, "method": request.method},
            expected=(GitHubShellError,),
        ) as span:
            if multiple:
                work = _collect_pages(context, request, token, properties)
            else:
                work = _fetch_single(context, request, token, properties)
            if timeout is not None:
                result = await asyncio.wait_for(work, timeout)
            else:
                result = await work
            span["pages"] = properties["pages"]
        outcome = "success"
        return result
    except GitHubShellError as e:
        outcome = type(e).__name__
        properties["attempts"] += e.attempts
        raise
    except asyncio.CancelledError:
        outcome = "cancelled"
        raise
    except asyncio.TimeoutError:
        outcome = "timeout"
        raise
    finally:
        context.status.complete(request.description, outcome == "success")
        context.telemetry.record_call(
            request.telemetry_name,
            outcome,
            span.get("duration_ms", 0.0) / 1000,
            properties,
        )


async def _fetch_single(
    context: GitHubContext,
    request: RequestDescriptor,
    token: str | None,
    properties: dict[str, Any],
) -> JSONValue:
    page = await fetch_page(context, request, context.build_url(request.uri_fragment), token)
    properties["pages"] = 1
    properties["attempts"] = page.attempts
    return page.data


async def _collect_pages(
    context: GitHubContext,
    request: RequestDescriptor,
    token: str | None,
    properties: dict[str, Any],
) -> list[Any]:
    items: list[Any] = []
    seen: set[str] = set()
    url: str | None = context.build_url(request.uri_fragment)
    page_number = 0

    while url:
        seen.add(url)
        page_number += 1
        page = await fetch_page(context, request, url, token, page_number=page_number)
        properties["pages"] = page_number
        items.extend(page.items())

        url = page.next_url
        if url is not None and not is_within_root(url, context.api_root):
            raise DecodeError(
                f"Pagination link outside {context.api_root}: {url[:100]}",
                description=request.description,
                attempts=page.attempts,
            )
        if url in seen:
            raise DecodeError(
                f"Pagination link repeats an already fetched page: {url[:100]}",
                description=request.description,
                attempts=page.attempts,
            )
        # Link errors above report this page's attempts themselves
        properties["attempts"] += page.attempts
        logger.debug(
            "paginating",
            extra={"call": request.description, "page": page_number, "items": len(items)},
        )

    return items


async def fetch_page(
    context: GitHubContext,
    request: RequestDescriptor,
    url: str,
    token: str | None,
    *,
    page_number: int = 1,
) -> ResponsePage:
    """Fetch one page, retrying transient failures per ``context.policy``."""
    headers = context.build_headers(token, request.accept_headers)
    attempt = 0

    while True:
        attempt += 1
        context.rate_limits.check(token, request.description, attempts=attempt - 1)
        context.status.attempt(request.description, attempt, page_number)

        response: httpx.Response | None = None
        snapshot: RateLimitSnapshot | None = None
        transport_error: httpx.TransportError | None = None
        payload: Any = None
        try:
            response = await context.http_client.request(
                request.method, url, headers=headers, json=request.body
            )
        except httpx.TransportError as e:
            transport_error = e
            context.telemetry.record_request(request.method, "transport_error")
            outcome = classify_transport_error(e)
        else:
            context.telemetry.record_request(request.method, str(response.status_code))
            snapshot = RateLimitSnapshot.from_headers(response.headers)
            context.rate_limits.record(token, snapshot)
            if snapshot is not None and snapshot.remaining is not None:
                context.telemetry.record_rate_limit(snapshot.remaining)
            if not 200 <= response.status_code < 300:
                payload = _error_payload(response)
            outcome = classify_response(
                request.method, response.status_code, response.headers, payload
            )

        transition = next_state(attempt, outcome, context.policy)

        if transition.state is RetryState.SUCCEEDED:
            return ResponsePage(
                data=_decode(response, request, attempt),
                status_code=response.status_code,
                next_url=next_link(response.headers.get("Link")),
                rate_limit=snapshot,
                attempts=attempt,
            )

        if transition.state is RetryState.FAILED:
            error = _terminal_error(outcome, request, attempt, snapshot, payload)
            logger.warning(
                "request_failed",
                extra={
                    "call": request.description,
                    "status_code": outcome.status_code,
                    "outcome": outcome.kind.value,
                    "attempts": attempt,
                },
            )
            if transport_error is not None:
                raise error from transport_error
            raise error

        # Raises when the quota stays spent past the backoff
        context.rate_limits.check(
            token, request.description, attempts=attempt, horizon=transition.delay
        )

        logger.warning(
            "request_retry",
            extra={
                "call": request.description,
                "status_code": outcome.status_code,
                "reason": outcome.retry_reason,
                "attempt": attempt,
                "max_attempts": context.policy.max_attempts,
                "delay_seconds": round(transition.delay, 2),
            },
        )
        context.telemetry.record_retry(outcome.retry_reason)
        await asyncio.sleep(transition.delay)


def _decode(response: httpx.Response, request: RequestDescriptor, attempt: int) -> JSONValue:
    if response.status_code == 204 or not response.content:
        return None

    content_type = (response.headers.get("Content-Type") or "").lower()
    if content_type and "json" not in content_type:
        # Raw/html/diff media types requested through accept headers
        return response.text

    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(
            f"Malformed JSON in {response.status_code} response: {e}",
            description=request.description,
            attempts=attempt,
        ) from e


def _error_payload(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _terminal_error(
    outcome: Outcome,
    request: RequestDescriptor,
    attempts: int,
    snapshot: RateLimitSnapshot | None,
    payload: Any,
) -> GitHubShellError:
    reset_epoch = snapshot.reset_at if snapshot is not None else None
    kind = outcome.kind

    if kind is OutcomeKind.CLIENT_ERROR:
        return ClientError(
            outcome.status_code, payload, description=request.description, attempts=attempts
        )
    if kind is OutcomeKind.QUOTA_EXHAUSTED:
        return RateLimited.from_epoch(
            "Rate limit exhausted", reset_epoch,
            description=request.description, attempts=attempts,
        )
    if kind is OutcomeKind.THROTTLED:
        return RateLimited.from_epoch(
            f"Still throttled after {attempts} attempts", reset_epoch,
            description=request.description, attempts=attempts,
        )
    if kind is OutcomeKind.NOT_READY:
        return RateLimited(
            f"Result still not ready (202) after {attempts} attempts",
            description=request.description, attempts=attempts,
        )
    if kind is OutcomeKind.SERVER_ERROR:
        return ServerError(
            f"GitHub API server error {outcome.status_code} after {attempts} attempts",
            outcome.status_code,
            description=request.description,
            attempts=attempts,
        )
    return ServerError(
        f"Transport failure after {attempts} attempts: {outcome.detail}",
        description=request.description,
        attempts=attempts,
    )
