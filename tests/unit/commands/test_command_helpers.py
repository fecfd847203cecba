"""Unit tests for owner/repository resolution and URI building."""

import pytest

from github_shell.commands._helpers import (
    compact,
    path,
    repo_path,
    resolve_repository,
    split_repository_url,
    with_query,
)


class TestSplitRepositoryUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/octo/hello",
            "https://github.com/octo/hello/",
            "https://github.com/octo/hello.git",
            "git@github.com:octo/hello.git",
            "https://api.github.com/repos/octo/hello",
            "https://ghe.example.com/api/v3/repos/octo/hello",
        ],
    )
    def test_forms(self, url):
        assert split_repository_url(url) == ("octo", "hello")

    def test_rejects_non_repository(self):
        with pytest.raises(ValueError, match="Not a GitHub repository URL"):
            split_repository_url("https://github.com/octo")


class TestResolveRepository:
    def test_explicit_wins(self, ctx):
        assert resolve_repository(ctx, "a", "b", "https://github.com/c/d") == ("a", "b")

    def test_url_used(self, ctx):
        assert resolve_repository(ctx, url="https://github.com/c/d") == ("c", "d")

    @pytest.mark.asyncio
    async def test_config_defaults(self):
        from github_shell.config import GitHubShellConfig
        from github_shell.core import GitHubContext

        config = GitHubShellConfig(
            _env_file=None, default_owner="octo", default_repository="hello"
        )
        async with GitHubContext(config) as ctx:
            assert resolve_repository(ctx) == ("octo", "hello")
            assert resolve_repository(ctx, repository="other") == ("octo", "other")

    def test_missing_raises(self, ctx):
        with pytest.raises(ValueError, match="Owner and repository are required"):
            resolve_repository(ctx, owner="octo")


def test_repo_path_quotes_segments():
    assert repo_path("o", "r", "labels", "needs review") == "repos/o/r/labels/needs%20review"
    assert repo_path("o", "r", "issues", 5) == "repos/o/r/issues/5"


def test_path_quotes_slashes():
    assert path("orgs", "a/b") == "orgs/a%2Fb"


def test_with_query():
    assert with_query("x", None) == "x"
    assert with_query("x", {"a": None}) == "x"
    assert with_query("x", {"state": "all", "labels": ["bug", "ui"], "anon": True}) == (
        "x?state=all&labels=bug%2Cui&anon=true"
    )


def test_compact():
    assert compact({"a": 1, "b": None, "c": False}) == {"a": 1, "c": False}
