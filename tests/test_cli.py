"""Tests for the github-shell command-line interface."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from github_shell import cli
from github_shell.core import ClientError, RateLimited


def test_issues_list_prints_json(capsys):
    issues = [{"number": 1, "title": "Bug"}]

    with patch.object(cli, "list_issues", new=AsyncMock(return_value=issues)) as mock_list:
        cli.main(["issues", "list", "octo/hello", "--state", "all", "--label", "bug"])

    assert json.loads(capsys.readouterr().out) == issues
    args, kwargs = mock_list.call_args
    assert args[1:] == ("octo", "hello")
    assert kwargs == {"state": "all", "labels": ["bug"]}


def test_issues_get_accepts_repository_url(capsys):
    with patch.object(cli, "get_issue", new=AsyncMock(return_value={"number": 4})) as mock_get:
        cli.main(["issues", "get", "https://github.com/octo/hello", "4"])

    assert json.loads(capsys.readouterr().out) == {"number": 4}
    assert mock_get.call_args.args[1:] == (4, "octo", "hello")


def test_repos_list_for_organization(capsys):
    with patch.object(cli, "list_repositories", new=AsyncMock(return_value=[])) as mock_list:
        cli.main(["repos", "list", "--org", "github"])

    assert mock_list.call_args.kwargs == {"user": None, "organization": "github"}
    assert json.loads(capsys.readouterr().out) == []


def test_token_option_sets_context_default(capsys):
    seen = {}

    async def fake_rate_limit(ctx):
        seen["token"] = ctx.default_token
        return {"rate": {"remaining": 10}}

    with patch.object(cli, "get_rate_limit", new=fake_rate_limit):
        cli.main(["--token", "ghp_cli", "rate-limit"])

    assert seen["token"] == "ghp_cli"
    assert json.loads(capsys.readouterr().out)["rate"]["remaining"] == 10


def test_context_token_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")
    seen = {}

    async def fake_get_user(ctx, user):
        seen["token"] = ctx.default_token
        return {"login": user}

    with patch.object(cli, "get_user", new=fake_get_user):
        cli.main(["users", "get", "octocat"])

    assert seen["token"] == "ghp_env"


def test_api_error_exits_nonzero(capsys):
    error = ClientError(404, {"message": "Not Found"}, description="Getting repository octo/nope")

    with patch.object(cli, "get_repository", new=AsyncMock(side_effect=error)):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["repos", "get", "octo/nope"])

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Getting repository octo/nope: GitHub API error 404: Not Found" in captured.err


def test_rate_limited_exits_nonzero(capsys):
    with patch.object(cli, "get_rate_limit", new=AsyncMock(side_effect=RateLimited())):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["rate-limit"])

    assert exc_info.value.code == 1
    assert "Rate limit exceeded" in capsys.readouterr().err


def test_invalid_repository_argument(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["pulls", "list", "not-a-repo"])

    assert exc_info.value.code == 2
    assert "expected owner/repo" in capsys.readouterr().err


def test_subcommand_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_orgs_members_role(capsys):
    with patch.object(
        cli, "list_organization_members", new=AsyncMock(return_value=[{"login": "a"}])
    ) as mock_members:
        cli.main(["orgs", "members", "github", "--role", "admin"])

    assert mock_members.call_args.args[1] == "github"
    assert mock_members.call_args.kwargs == {"role": "admin"}
