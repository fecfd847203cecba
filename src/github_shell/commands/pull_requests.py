"""Pull request commands."""

from typing import Any

from ..core import (
    GitHubContext,
    RequestDescriptor,
    invoke_rest_method,
    invoke_rest_method_multiple_result,
)
from ._helpers import DEFAULT_PER_PAGE, repo_path, resolve_repository, with_query

STATES = ("open", "closed", "all")


async def list_pull_requests(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    state: str = "open",
    head: str | None = None,
    base: str | None = None,
    sort: str | None = None,
    direction: str | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    if state not in STATES:
        raise ValueError(f"state must be one of {STATES}")
    owner, repository = resolve_repository(context, owner, repository, url)
    fragment = with_query(
        repo_path(owner, repository, "pulls"),
        {
            "state": state,
            "head": head,
            "base": base,
            "sort": sort,
            "direction": direction,
            "per_page": DEFAULT_PER_PAGE,
        },
    )
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            fragment,
            description=f"Getting pull requests for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="list_pull_requests",
        ),
    )


async def get_pull_request(
    context: GitHubContext,
    number: int,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
) -> dict[str, Any]:
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "pulls", number),
            description=f"Getting pull request {number} for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="get_pull_request",
        ),
    )
