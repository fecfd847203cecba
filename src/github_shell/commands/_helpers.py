"""Shared helpers for endpoint commands: owner/repo resolution and URI building."""

import re
from typing import Any
from urllib.parse import quote, urlencode

from ..core import GitHubContext

DEFAULT_PER_PAGE = 100  # Maximum items per page

# https://github.com/owner/repo(.git), git@github.com:owner/repo.git, api URLs
_REPOSITORY_URL = re.compile(
    r"^(?:https?://[^/]+/(?:api/v3/)?(?:repos/)?|git@[^:]+:)"
    r"(?P<owner>[^/]+)/(?P<repository>[^/]+?)(?:\.git)?/?$"
)


def split_repository_url(url: str) -> tuple[str, str]:
    """Extract (owner, repository) from a GitHub repository URL.

    Raises:
        ValueError: If the URL is not a repository URL
    """
    match = _REPOSITORY_URL.match(url.strip())
    if not match:
        raise ValueError(f"Not a GitHub repository URL: {url!r}")
    return match.group("owner"), match.group("repository")


def resolve_repository(
    context: GitHubContext,
    owner: str | None = None,
    repository: str | None = None,
    url: str | None = None,
) -> tuple[str, str]:
    """Resolve owner/repository: explicit args > URL > configured defaults.

    Raises:
        ValueError: If either part is still unknown
    """
    if url and not (owner and repository):
        owner, repository = split_repository_url(url)
    owner = owner or context.config.default_owner
    repository = repository or context.config.default_repository
    if not owner or not repository:
        raise ValueError(
            "Owner and repository are required (pass them, a repository URL, "
            "or set GITHUB_SHELL_DEFAULT_OWNER / GITHUB_SHELL_DEFAULT_REPOSITORY)"
        )
    return owner, repository


def repo_path(owner: str, repository: str, *segments: Any) -> str:
    parts = ["repos", owner, repository, *(str(s) for s in segments)]
    return "/".join(quote(part, safe="") for part in parts)


def path(*segments: Any) -> str:
    return "/".join(quote(str(s), safe="") for s in segments)


def with_query(fragment: str, params: dict[str, Any] | None = None) -> str:
    """Append non-None params as a query string; lists become comma-joined."""
    if not params:
        return fragment
    cleaned: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        cleaned[key] = str(value)
    if not cleaned:
        return fragment
    return f"{fragment}?{urlencode(cleaned)}"


def compact(body: dict[str, Any]) -> dict[str, Any]:
    """Drop None values from a request body."""
    return {k: v for k, v in body.items() if v is not None}
