"""Endpoint commands built on the REST invocation core.

Each command is an async function taking a GitHubContext first and
returning decoded response data.
"""

from .issues import get_issue, list_issues, lock_issue, new_issue, unlock_issue, update_issue
from .labels import (
    add_issue_labels,
    get_label,
    list_labels,
    new_label,
    remove_issue_label,
    remove_label,
    set_issue_labels,
    update_label,
)
from .misc import get_rate_limit
from .organizations import get_organization, list_my_organizations, list_organization_members
from .pull_requests import get_pull_request, list_pull_requests
from .repositories import (
    get_contributor_statistics,
    get_repository,
    list_contributors,
    list_languages,
    list_repositories,
    list_tags,
    new_repository,
    remove_repository,
    update_repository,
)
from .teams import get_team, list_team_members, list_teams
from .users import get_authenticated_user, get_user, update_authenticated_user

__all__ = [
    "add_issue_labels",
    "get_authenticated_user",
    "get_contributor_statistics",
    "get_issue",
    "get_label",
    "get_organization",
    "get_pull_request",
    "get_rate_limit",
    "get_repository",
    "get_team",
    "get_user",
    "list_contributors",
    "list_issues",
    "list_labels",
    "list_languages",
    "list_my_organizations",
    "list_organization_members",
    "list_pull_requests",
    "list_repositories",
    "list_tags",
    "list_team_members",
    "list_teams",
    "lock_issue",
    "new_issue",
    "new_label",
    "new_repository",
    "remove_issue_label",
    "remove_label",
    "remove_repository",
    "set_issue_labels",
    "unlock_issue",
    "update_authenticated_user",
    "update_issue",
    "update_label",
    "update_repository",
]
