"""Miscellaneous commands."""

from typing import Any

from ..core import GitHubContext, RequestDescriptor, invoke_rest_method


async def get_rate_limit(
    context: GitHubContext,
    *,
    access_token: str | None = None,
) -> dict[str, Any]:
    """Current rate-limit status per resource.

    Querying this endpoint does not count against the primary quota.
    """
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            "rate_limit",
            description="Getting rate limit status",
            access_token=access_token,
            telemetry_name="get_rate_limit",
        ),
    )
