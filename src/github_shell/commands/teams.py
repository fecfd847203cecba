"""Team commands (organization teams, addressed by slug)."""

from typing import Any

from ..core import (
    GitHubContext,
    RequestDescriptor,
    invoke_rest_method,
    invoke_rest_method_multiple_result,
)
from ._helpers import DEFAULT_PER_PAGE, path, with_query

MEMBER_ROLES = ("member", "maintainer", "all")


async def list_teams(
    context: GitHubContext,
    organization: str,
    *,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            with_query(path("orgs", organization, "teams"), {"per_page": DEFAULT_PER_PAGE}),
            description=f"Getting teams in {organization}",
            access_token=access_token,
            telemetry_name="list_teams",
        ),
    )


async def get_team(
    context: GitHubContext,
    organization: str,
    team_slug: str,
    *,
    access_token: str | None = None,
) -> dict[str, Any]:
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            path("orgs", organization, "teams", team_slug),
            description=f"Getting team {team_slug} in {organization}",
            access_token=access_token,
            telemetry_name="get_team",
        ),
    )


async def list_team_members(
    context: GitHubContext,
    organization: str,
    team_slug: str,
    *,
    role: str = "all",
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    if role not in MEMBER_ROLES:
        raise ValueError(f"role must be one of {MEMBER_ROLES}")
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            with_query(
                path("orgs", organization, "teams", team_slug, "members"),
                {"role": role, "per_page": DEFAULT_PER_PAGE},
            ),
            description=f"Getting members of team {team_slug} in {organization}",
            access_token=access_token,
            telemetry_name="list_team_members",
        ),
    )
