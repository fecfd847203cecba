"""Shared pytest fixtures for github-shell tests.

Fixture Organization:
    - Environment isolation: strip GITHUB_* variables, reset cached config
    - Context fixtures: GitHubContext with zero backoff and recording sinks
    - Response helpers: Mock httpx.Response objects with GitHub headers
"""

import os
import sys
import time
from collections.abc import AsyncIterator
from pathlib import Path
from unittest.mock import Mock

import httpx
import pytest
import pytest_asyncio

from github_shell.config import GitHubShellConfig, reset_config
from github_shell.core import GitHubContext, RateLimitTracker, RetryPolicy

TEST_TOKEN = "ghp_test_token_123"
API_ROOT = "https://api.github.com"

# Test modules import the response helpers below with `from conftest import ...`
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep real tokens and .env files out of every test."""
    for key in list(os.environ):
        if key.startswith("GITHUB_SHELL_") or key == "GITHUB_TOKEN":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


# =============================================================================
# Recording Collaborators
# =============================================================================


class RecordingTelemetry:
    """TelemetrySink that keeps every event for assertions."""

    def __init__(self):
        self.calls: list[tuple[str, str, float, dict]] = []
        self.requests: list[tuple[str, str]] = []
        self.retries: list[str] = []
        self.rate_limits: list[int] = []

    def record_call(self, call, outcome, duration_seconds, properties):
        self.calls.append((call, outcome, duration_seconds, dict(properties)))

    def record_request(self, method, status):
        self.requests.append((method, status))

    def record_retry(self, reason):
        self.retries.append(reason)

    def record_rate_limit(self, remaining):
        self.rate_limits.append(remaining)


class RecordingStatus:
    """StatusReporter that keeps every notification for assertions."""

    def __init__(self):
        self.attempts: list[tuple[str, int, int]] = []
        self.completions: list[tuple[str, bool]] = []

    def attempt(self, description, attempt, page):
        self.attempts.append((description, attempt, page))

    def complete(self, description, success):
        self.completions.append((description, success))


# =============================================================================
# Context Fixtures
# =============================================================================


@pytest.fixture
def config() -> GitHubShellConfig:
    """Config with fast retries and no .env loading."""
    return GitHubShellConfig(
        _env_file=None,
        max_attempts=3,
        backoff_seconds=0.0,
        max_backoff_seconds=0.0,
        default_owner=None,
        default_repository=None,
    )


@pytest.fixture
def telemetry() -> RecordingTelemetry:
    return RecordingTelemetry()


@pytest.fixture
def status() -> RecordingStatus:
    return RecordingStatus()


@pytest.fixture
def clock():
    """Mutable clock for the rate-limit tracker (epoch seconds)."""
    state = {"now": 1_700_000_000.0}

    def now() -> float:
        return state["now"]

    now.state = state
    return now


@pytest_asyncio.fixture
async def ctx(config, telemetry, status) -> AsyncIterator[GitHubContext]:
    """Authenticated context with recording telemetry/status."""
    context = GitHubContext(
        config,
        access_token=TEST_TOKEN,
        policy=RetryPolicy(max_attempts=3, backoff_seconds=1.0, max_backoff_seconds=30.0),
        telemetry=telemetry,
        status=status,
        rate_limits=RateLimitTracker(),
    )
    yield context
    await context.close()


# =============================================================================
# Response Helpers
# =============================================================================


def mock_response(
    status_code: int = 200,
    json_data: dict | list | None = None,
    headers: dict | None = None,
    content: bytes | None = None,
) -> Mock:
    """Create a mock httpx.Response with GitHub's usual headers."""
    resp = Mock(spec=httpx.Response)
    resp.status_code = status_code
    if content is None:
        content = b"" if status_code == 204 else b"{}"
    resp.json.return_value = json_data if json_data is not None else {}
    resp.content = content
    resp.text = content.decode() if content else ""
    _headers = {
        "Content-Type": "application/json; charset=utf-8",
        "X-RateLimit-Limit": "5000",
        "X-RateLimit-Remaining": "4999",
        "X-RateLimit-Reset": str(int(time.time()) + 3600),
    }
    if headers:
        _headers.update(headers)
    resp.headers = _headers
    return resp


def link_header(next_url: str | None = None, last_url: str | None = None) -> dict:
    parts = []
    if next_url:
        parts.append(f'<{next_url}>; rel="next"')
    if last_url:
        parts.append(f'<{last_url}>; rel="last"')
    return {"Link": ", ".join(parts)} if parts else {}
