"""Repository commands.

Reference: https://docs.github.com/en/rest/repos/repos
"""

from typing import Any

from ..core import (
    GitHubContext,
    RequestDescriptor,
    invoke_rest_method,
    invoke_rest_method_multiple_result,
)
from ._helpers import (
    DEFAULT_PER_PAGE,
    compact,
    path,
    repo_path,
    resolve_repository,
    with_query,
)


async def get_repository(
    context: GitHubContext,
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
            repo_path(owner, repository),
            description=f"Getting repository {owner}/{repository}",
            access_token=access_token,
            telemetry_name="get_repository",
        ),
    )


async def list_repositories(
    context: GitHubContext,
    *,
    user: str | None = None,
    organization: str | None = None,
    type: str | None = None,
    sort: str | None = None,
    direction: str | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    """Repositories of a user, of an organization, or (neither given) of the caller."""
    if user and organization:
        raise ValueError("Pass either user or organization, not both")
    if organization:
        fragment = path("orgs", organization, "repos")
        description = f"Getting repositories for organization {organization}"
    elif user:
        fragment = path("users", user, "repos")
        description = f"Getting repositories for user {user}"
    else:
        fragment = "user/repos"
        description = "Getting repositories for the authenticated user"
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            with_query(
                fragment,
                {
                    "type": type,
                    "sort": sort,
                    "direction": direction,
                    "per_page": DEFAULT_PER_PAGE,
                },
            ),
            description=description,
            access_token=access_token,
            telemetry_name="list_repositories",
        ),
    )


async def new_repository(
    context: GitHubContext,
    name: str,
    *,
    organization: str | None = None,
    description: str | None = None,
    homepage: str | None = None,
    private: bool | None = None,
    has_issues: bool | None = None,
    has_wiki: bool | None = None,
    auto_init: bool | None = None,
    gitignore_template: str | None = None,
    license_template: str | None = None,
    access_token: str | None = None,
) -> dict[str, Any]:
    fragment = path("orgs", organization, "repos") if organization else "user/repos"
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            fragment,
            method="POST",
            body=compact(
                {
                    "name": name,
                    "description": description,
                    "homepage": homepage,
                    "private": private,
                    "has_issues": has_issues,
                    "has_wiki": has_wiki,
                    "auto_init": auto_init,
                    "gitignore_template": gitignore_template,
                    "license_template": license_template,
                }
            ),
            description=f"Creating repository {name}",
            access_token=access_token,
            telemetry_name="new_repository",
        ),
    )


async def update_repository(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """PATCH a repository with the given fields (name, description, private, ...)."""
    owner, repository = resolve_repository(context, owner, repository, url)
    body = compact(fields)
    if not body:
        raise ValueError("Nothing to update")
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository),
            method="PATCH",
            body=body,
            description=f"Updating repository {owner}/{repository}",
            access_token=access_token,
            telemetry_name="update_repository",
        ),
    )


async def remove_repository(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
) -> None:
    owner, repository = resolve_repository(context, owner, repository, url)
    await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository),
            method="DELETE",
            description=f"Deleting repository {owner}/{repository}",
            access_token=access_token,
            telemetry_name="remove_repository",
        ),
    )


async def list_contributors(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    include_anonymous: bool = False,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            with_query(
                repo_path(owner, repository, "contributors"),
                {"anon": "1" if include_anonymous else None, "per_page": DEFAULT_PER_PAGE},
            ),
            description=f"Getting contributors for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="list_contributors",
        ),
    )


async def get_contributor_statistics(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    """Weekly commit statistics per contributor.

    GitHub answers 202 while it computes the statistics; the core retries
    those until the data is ready or the attempt budget runs out.
    """
    owner, repository = resolve_repository(context, owner, repository, url)
    result = await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "stats", "contributors"),
            description=f"Getting contributor statistics for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="get_contributor_statistics",
        ),
    )
    return result or []


async def list_languages(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
) -> dict[str, int]:
    """Bytes of code per language."""
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "languages"),
            description=f"Getting languages for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="list_languages",
        ),
    )


async def list_tags(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            with_query(repo_path(owner, repository, "tags"), {"per_page": DEFAULT_PER_PAGE}),
            description=f"Getting tags for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="list_tags",
        ),
    )
