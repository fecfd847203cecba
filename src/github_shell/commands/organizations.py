"""Organization commands."""

from typing import Any

from ..core import (
    GitHubContext,
    RequestDescriptor,
    invoke_rest_method,
    invoke_rest_method_multiple_result,
)
from ._helpers import DEFAULT_PER_PAGE, path, with_query

MEMBER_FILTERS = ("2fa_disabled", "all")
MEMBER_ROLES = ("all", "admin", "member")


async def get_organization(
    context: GitHubContext,
    organization: str,
    *,
    access_token: str | None = None,
) -> dict[str, Any]:
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            path("orgs", organization),
            description=f"Getting organization {organization}",
            access_token=access_token,
            telemetry_name="get_organization",
        ),
    )


async def list_my_organizations(
    context: GitHubContext,
    *,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            with_query("user/orgs", {"per_page": DEFAULT_PER_PAGE}),
            description="Getting organizations for the authenticated user",
            access_token=access_token,
            telemetry_name="list_my_organizations",
        ),
    )


async def list_organization_members(
    context: GitHubContext,
    organization: str,
    *,
    filter: str = "all",
    role: str = "all",
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    if filter not in MEMBER_FILTERS:
        raise ValueError(f"filter must be one of {MEMBER_FILTERS}")
    if role not in MEMBER_ROLES:
        raise ValueError(f"role must be one of {MEMBER_ROLES}")
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            with_query(
                path("orgs", organization, "members"),
                {"filter": filter, "role": role, "per_page": DEFAULT_PER_PAGE},
            ),
            description=f"Getting members for organization {organization}",
            access_token=access_token,
            telemetry_name="list_organization_members",
        ),
    )
