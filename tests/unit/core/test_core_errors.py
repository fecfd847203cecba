"""Unit tests for the error hierarchy."""

from datetime import datetime, timezone

from github_shell.core import ClientError, DecodeError, GitHubShellError, RateLimited, ServerError


def test_all_errors_share_base():
    for cls in (ClientError, ServerError, RateLimited, DecodeError):
        assert issubclass(cls, GitHubShellError)


def test_description_prefixes_message():
    error = GitHubShellError("boom", description="Getting issues")
    assert str(error) == "Getting issues: boom"
    assert str(GitHubShellError("boom")) == "boom"


def test_client_error_message_from_payload():
    error = ClientError(404, {"message": "Not Found", "documentation_url": "https://docs"})
    assert error.status_code == 404
    assert str(error) == "GitHub API error 404: Not Found"
    assert error.attempts == 1


def test_client_error_text_payload():
    assert str(ClientError(400, "plain text")) == "GitHub API error 400: plain text"


def test_client_error_without_payload():
    assert str(ClientError(410)) == "GitHub API error 410"


def test_server_error_status():
    error = ServerError("bad gateway", 502, attempts=5)
    assert error.status_code == 502
    assert error.attempts == 5


def test_rate_limited_reset_time():
    error = RateLimited.from_epoch("Rate limit exhausted", 0, description="x", attempts=1)
    assert error.reset_at == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert "Resets at 1970-01-01T00:00:00+00:00" in str(error)


def test_rate_limited_without_reset():
    error = RateLimited.from_epoch("Still throttled", None)
    assert error.reset_at is None
    assert str(error) == "Still throttled"
