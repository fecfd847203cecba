"""User commands."""

from typing import Any

from ..core import GitHubContext, RequestDescriptor, invoke_rest_method
from ._helpers import compact, path

UPDATABLE_FIELDS = ("name", "email", "blog", "company", "location", "hireable", "bio")


async def get_user(
    context: GitHubContext,
    user: str,
    *,
    access_token: str | None = None,
) -> dict[str, Any]:
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            path("users", user),
            description=f"Getting user {user}",
            access_token=access_token,
            telemetry_name="get_user",
        ),
    )


async def get_authenticated_user(
    context: GitHubContext,
    *,
    access_token: str | None = None,
) -> dict[str, Any]:
    """The user the resolved token belongs to (ClientError 401 when unauthenticated)."""
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            "user",
            description="Getting current authenticated user",
            access_token=access_token,
            telemetry_name="get_authenticated_user",
        ),
    )


async def update_authenticated_user(
    context: GitHubContext,
    *,
    access_token: str | None = None,
    **fields: Any,
) -> dict[str, Any]:
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update user fields: {sorted(unknown)}")
    body = compact(fields)
    if not body:
        raise ValueError("Nothing to update")
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            "user",
            method="PATCH",
            body=body,
            description="Updating current authenticated user",
            access_token=access_token,
            telemetry_name="update_authenticated_user",
        ),
    )
