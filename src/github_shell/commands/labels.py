"""Label commands, for repositories and for individual issues."""

import re
from typing import Any

from ..core import (
    GitHubContext,
    RequestDescriptor,
    invoke_rest_method,
    invoke_rest_method_multiple_result,
)
from ._helpers import DEFAULT_PER_PAGE, compact, repo_path, resolve_repository, with_query

_COLOR = re.compile(r"^#?[0-9a-fA-F]{6}$")


def _normalize_color(color: str | None) -> str | None:
    if color is None:
        return None
    if not _COLOR.match(color):
        raise ValueError(f"color must be a 6-digit hex value, got {color!r}")
    return color.lstrip("#").lower()


async def list_labels(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    issue: int | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    """Labels of a repository, or of one issue when ``issue`` is given."""
    owner, repository = resolve_repository(context, owner, repository, url)
    if issue is None:
        fragment = repo_path(owner, repository, "labels")
        description = f"Getting labels for {owner}/{repository}"
    else:
        fragment = repo_path(owner, repository, "issues", issue, "labels")
        description = f"Getting labels for issue {issue} in {owner}/{repository}"
    return await invoke_rest_method_multiple_result(
        context,
        RequestDescriptor(
            with_query(fragment, {"per_page": DEFAULT_PER_PAGE}),
            description=description,
            access_token=access_token,
            telemetry_name="list_labels",
        ),
    )


async def get_label(
    context: GitHubContext,
    name: str,
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
            repo_path(owner, repository, "labels", name),
            description=f"Getting label {name} for {owner}/{repository}",
            access_token=access_token,
            telemetry_name="get_label",
        ),
    )


async def new_label(
    context: GitHubContext,
    name: str,
    color: str,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    description: str | None = None,
    access_token: str | None = None,
) -> dict[str, Any]:
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "labels"),
            method="POST",
            body=compact(
                {"name": name, "color": _normalize_color(color), "description": description}
            ),
            description=f"Creating label {name} in {owner}/{repository}",
            access_token=access_token,
            telemetry_name="new_label",
        ),
    )


async def update_label(
    context: GitHubContext,
    name: str,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    new_name: str | None = None,
    color: str | None = None,
    description: str | None = None,
    access_token: str | None = None,
) -> dict[str, Any]:
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "labels", name),
            method="PATCH",
            body=compact(
                {
                    "new_name": new_name,
                    "color": _normalize_color(color),
                    "description": description,
                }
            ),
            description=f"Updating label {name} in {owner}/{repository}",
            access_token=access_token,
            telemetry_name="update_label",
        ),
    )


async def remove_label(
    context: GitHubContext,
    name: str,
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
            repo_path(owner, repository, "labels", name),
            method="DELETE",
            description=f"Deleting label {name} from {owner}/{repository}",
            access_token=access_token,
            telemetry_name="remove_label",
        ),
    )


async def add_issue_labels(
    context: GitHubContext,
    issue: int,
    labels: list[str],
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    """Add labels to an issue; returns the issue's full label list."""
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "issues", issue, "labels"),
            method="POST",
            body={"labels": list(labels)},
            description=f"Adding labels to issue {issue} in {owner}/{repository}",
            access_token=access_token,
            telemetry_name="add_issue_labels",
        ),
    )


async def set_issue_labels(
    context: GitHubContext,
    issue: int,
    labels: list[str],
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    """Replace every label on an issue (an empty list clears them)."""
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "issues", issue, "labels"),
            method="PUT",
            body={"labels": list(labels)},
            description=f"Replacing labels on issue {issue} in {owner}/{repository}",
            access_token=access_token,
            telemetry_name="set_issue_labels",
        ),
    )


async def remove_issue_label(
    context: GitHubContext,
    issue: int,
    name: str,
    owner: str | None = None,
    repository: str | None = None,
    *,
    url: str | None = None,
    access_token: str | None = None,
) -> list[dict[str, Any]]:
    owner, repository = resolve_repository(context, owner, repository, url)
    return await invoke_rest_method(
        context,
        RequestDescriptor(
            repo_path(owner, repository, "issues", issue, "labels", name),
            method="DELETE",
            description=f"Removing label {name} from issue {issue} in {owner}/{repository}",
            access_token=access_token,
            telemetry_name="remove_issue_label",
        ),
    )
