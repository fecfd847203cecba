"""github-shell command-line interface.

Usage:
    github-shell issues list owner/repo --state all
    github-shell issues get owner/repo 42
    github-shell labels list owner/repo
    github-shell pulls list owner/repo --state closed
    github-shell repos get owner/repo
    github-shell repos list --org my-org
    github-shell users get octocat
    github-shell orgs members my-org
    github-shell rate-limit

Results are printed to stdout as JSON. API errors go to stderr with exit
code 1.
"""

import argparse
import asyncio
import json
import sys
from typing import Any

from .commands import (
    get_issue,
    get_rate_limit,
    get_repository,
    get_user,
    list_issues,
    list_labels,
    list_organization_members,
    list_pull_requests,
    list_repositories,
)
from .commands._helpers import split_repository_url
from .config import get_config
from .core import GitHubContext, GitHubShellError


def _repository(value: str) -> tuple[str, str]:
    """argparse type for "owner/repo" or a repository URL."""
    if "://" in value or value.startswith("git@"):
        return split_repository_url(value)
    owner, sep, repo = value.partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise argparse.ArgumentTypeError(f"expected owner/repo, got {value!r}")
    return owner, repo


async def _issues_list(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    owner, repo = args.repository
    return await list_issues(
        ctx, owner, repo, state=args.state, labels=args.label or None
    )


async def _issues_get(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    owner, repo = args.repository
    return await get_issue(ctx, args.number, owner, repo)


async def _labels_list(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    owner, repo = args.repository
    return await list_labels(ctx, owner, repo, issue=args.issue)


async def _pulls_list(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    owner, repo = args.repository
    return await list_pull_requests(ctx, owner, repo, state=args.state)


async def _repos_get(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    owner, repo = args.repository
    return await get_repository(ctx, owner, repo)


async def _repos_list(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    return await list_repositories(ctx, user=args.user, organization=args.org)


async def _users_get(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    return await get_user(ctx, args.user)


async def _orgs_members(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    return await list_organization_members(ctx, args.organization, role=args.role)


async def _rate_limit(ctx: GitHubContext, args: argparse.Namespace) -> Any:
    return await get_rate_limit(ctx)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-shell",
        description="Call the GitHub REST API from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration:
  GITHUB_TOKEN (or GITHUB_SHELL_ACCESS_TOKEN)   access token
  GITHUB_SHELL_API_ROOT                         API root (GitHub Enterprise)
  GITHUB_SHELL_SHOW_STATUS=true                 report each attempt at INFO
        """,
    )
    parser.add_argument("--token", help="Access token for this invocation")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    groups = parser.add_subparsers(dest="group", required=True)

    issues = groups.add_parser("issues", help="Repository issues")
    issues_cmds = issues.add_subparsers(dest="action", required=True)
    p = issues_cmds.add_parser("list", help="List issues")
    p.add_argument("repository", type=_repository)
    p.add_argument("--state", choices=("open", "closed", "all"), default="open")
    p.add_argument("--label", action="append", help="Filter by label (repeatable)")
    p.set_defaults(handler=_issues_list)
    p = issues_cmds.add_parser("get", help="Get one issue")
    p.add_argument("repository", type=_repository)
    p.add_argument("number", type=int)
    p.set_defaults(handler=_issues_get)

    labels = groups.add_parser("labels", help="Repository labels")
    labels_cmds = labels.add_subparsers(dest="action", required=True)
    p = labels_cmds.add_parser("list", help="List labels")
    p.add_argument("repository", type=_repository)
    p.add_argument("--issue", type=int, help="Only labels on this issue")
    p.set_defaults(handler=_labels_list)

    pulls = groups.add_parser("pulls", help="Pull requests")
    pulls_cmds = pulls.add_subparsers(dest="action", required=True)
    p = pulls_cmds.add_parser("list", help="List pull requests")
    p.add_argument("repository", type=_repository)
    p.add_argument("--state", choices=("open", "closed", "all"), default="open")
    p.set_defaults(handler=_pulls_list)

    repos = groups.add_parser("repos", help="Repositories")
    repos_cmds = repos.add_subparsers(dest="action", required=True)
    p = repos_cmds.add_parser("get", help="Get one repository")
    p.add_argument("repository", type=_repository)
    p.set_defaults(handler=_repos_get)
    p = repos_cmds.add_parser("list", help="List repositories (default: your own)")
    owner_group = p.add_mutually_exclusive_group()
    owner_group.add_argument("--user", help="Repositories of this user")
    owner_group.add_argument("--org", help="Repositories of this organization")
    p.set_defaults(handler=_repos_list)

    users = groups.add_parser("users", help="Users")
    users_cmds = users.add_subparsers(dest="action", required=True)
    p = users_cmds.add_parser("get", help="Get one user")
    p.add_argument("user")
    p.set_defaults(handler=_users_get)

    orgs = groups.add_parser("orgs", help="Organizations")
    orgs_cmds = orgs.add_subparsers(dest="action", required=True)
    p = orgs_cmds.add_parser("members", help="List organization members")
    p.add_argument("organization")
    p.add_argument("--role", choices=("all", "admin", "member"), default="all")
    p.set_defaults(handler=_orgs_members)

    p = groups.add_parser("rate-limit", help="Show rate-limit status")
    p.set_defaults(handler=_rate_limit)

    return parser


async def run(args: argparse.Namespace) -> Any:
    """Run the selected command inside a fresh context."""
    kwargs: dict[str, Any] = {}
    if args.token:
        kwargs["access_token"] = args.token
    async with GitHubContext(get_config(), **kwargs) as ctx:
        return await args.handler(ctx, args)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        result = asyncio.run(run(args))
    except (GitHubShellError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=args.indent, default=str))


if __name__ == "__main__":
    main()
