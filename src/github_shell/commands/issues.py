"""Issue commands.

Reference: https://docs.github.com/en/rest/issues/issues
"""

from typing import Any

from ..core import (
    GitHubContext,
    RequestDescriptor,
    invoke_rest_method,
    invoke_rest_method_multiple_result,
)
from ._helpers import DEFAULT_PER_PAGE, compact, repo_path, resolve_repository, with_query

LOCK_REASONS = ("off-topic", "too heated", "resolved", "spam")
MEDIA_TYPES = ("raw", "text", "html", "full")


def _media_accept(media_type: str | None) -> tuple[str, ...]:
    if media_type is None:
        return ()
    if media_type not in MEDIA_TYPES:
        raise ValueError(f"media_type must be one of {MEDIA_TYPES}")
    return (f"application/vnd.github.{media_type}+json",)


async def list_issues(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    state: str = "open",
    labels: list[str] | None = None,
    assignee: str | None = None,
    creator: str | None = None,
    since: str | None = None,
    sort: str | None = None,
    direction: str | None = None,
    media_type: str | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    """List a repository's issues (pull requests included, as GitHub returns them)."""
    owner, repository = resolve_repository(context, owner, repository, url)
    fragment = with_query(
        repo_path(owner, repository, "issues"),
        {
            "state": state,
            "labels": labels,
            "assignee": assignee,
            "creator": creator,
            "since": since,
            "sort": sort,
            "direction": direction,
            "per_page": DEFAULT_PER_PAGE,
        },
    )
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            fragment,
            accept_headers=_media_accept(media_type),
            description=f"Getting issues for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="list_issues",
        ),
    )


async def get_issue(
    context: GitHubContext,
    issue: int,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    media_type: str | None = None,
    access_token: str | None = None,
) -> dict[str, Any]:
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "issues", issue),
            accept_headers=_media_accept(media_type),
            description=f"Getting issue {issue} for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="get_issue",
        ),
    )


async def new_issue(
    context: GitHubContext,
    title: str,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    body: str | None = None,
    assignees: list[str] | None = None,
    milestone: int | None = None,
    labels: list[str] | None = None,
    access_token: str | None = None,
) -> dict[str, Any]:
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "issues"),
            method="POST",
            body=compact(
                {
                    "title": title,
                    "body": body,
                    "assignees": assignees,
                    "milestone": milestone,
                    "labels": labels,
                }
            ),
            description=f"Creating new issue ({title}) on {owner}/{repository}",
            access_token=access_token,
            telemetry_name="new_issue",
        ),
    )


async def update_issue(
    context: GitHubContext,
    issue: int,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    title: str | None = None,
    body: str | None = None,
    state: str | None = None,
    assignees: list[str] | None = None,
    milestone: int | None = None,
    labels: list[str] | None = None,
    access_token: str | None = None,
) -> dict[str, Any]:
    """Update an issue; only the fields given are sent."""
    if state is not None and state not in ("open", "closed"):
        raise ValueError("state must be 'open' or 'closed'")
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "issues", issue),
            method="PATCH",
            body=compact(
                {
                    "title": title,
                    "body": body,
                    "state": state,
                    "assignees": assignees,
                    "milestone": milestone,
                    "labels": labels,
                }
            ),
            description=f"Updating issue {issue} on {owner}/{repository}",
            access_token=access_token,
            telemetry_name="update_issue",
        ),
    )


async def lock_issue(
    context: GitHubContext,
    issue: int,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    reason: str | None = None,
    access_token: str | None = None,
) -> None:
    if reason is not None and reason not in LOCK_REASONS:
        raise ValueError(f"reason must be one of {LOCK_REASONS}")
    owner, repository = resolve_repository(context, owner, repository, url)
    await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "issues", issue, "lock"),
            method="PUT",
            body=compact({"lock_reason": reason}) or None,
            description=f"Locking issue {issue} on {owner}/{repository}",
            access_token=access_token,
            telemetry_name="lock_issue",
        ),
    )


async def unlock_issue(
    context: GitHubContext,
    issue: int,
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
            repo_path(owner, repository, "issues", issue, "lock"),
            method="DELETE",
            description=f"Unlocking issue {issue} on {owner}/{repository}",
            access_token=access_token,
            telemetry_name="unlock_issue",
        ),
    )
