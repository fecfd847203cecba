"""Configuration management with pydantic-settings for github-shell.

- Automatic .env file loading with proper precedence
- Validation with clear error messages
- GITHUB_SHELL_ environment variable prefix
- SecretStr for the access token
- Frozen config (thread-safe, immutable after load)
"""

import logging
from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .__version__ import __version__

logger = logging.getLogger("github_shell.config")

__all__ = [
    "DEFAULT_API_ROOT",
    "DEFAULT_API_VERSION",
    "DEFAULT_MEDIA_TYPE",
    "GitHubShellConfig",
    "get_config",
    "reset_config",
]

DEFAULT_API_ROOT = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_MEDIA_TYPE = "application/vnd.github+json"


class GitHubShellConfig(BaseSettings):
    """Configuration for github-shell.

    Loads from (in order of precedence):
    1. Constructor arguments
    2. Environment variables (GITHUB_SHELL_*)
    3. .env file in the working directory
    4. Default values

    Attributes:
        api_root: Base URL every URI fragment is resolved against
        access_token: Default token; empty means unauthenticated calls
        user_agent: User-Agent header sent with every request
        api_version: X-GitHub-Api-Version header value
        max_attempts: Attempts per page before a transient failure is terminal
        backoff_seconds: First backoff wait between attempts
        backoff_multiplier: Growth factor applied per further attempt
        max_backoff_seconds: Ceiling for any single wait (Retry-After included)
        show_status: Emit status notifications at INFO instead of DEBUG
        telemetry_enabled: Record Prometheus telemetry for each logical call
        default_owner: Owner used by commands when none is given
        default_repository: Repository used by commands when none is given
    """

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_SHELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    api_root: str = Field(
        default=DEFAULT_API_ROOT,
        description="GitHub REST API root (GitHub Enterprise: https://host/api/v3)",
    )

    access_token: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("GITHUB_SHELL_ACCESS_TOKEN", "GITHUB_TOKEN"),
        description="Default access token. Empty = unauthenticated (60 requests/hour).",
    )

    user_agent: str = Field(
        default=f"github-shell/{__version__}",
        min_length=1,
        description="User-Agent header (GitHub rejects requests without one)",
    )

    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        description="REST API version sent as X-GitHub-Api-Version",
    )

    # --- Retry / backoff ---
    max_attempts: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Attempts per page before a transient failure becomes terminal",
    )
    backoff_seconds: float = Field(
        default=2.0,
        ge=0.0,
        le=600.0,
        description="Wait before the second attempt (seconds)",
    )
    backoff_multiplier: float = Field(
        default=2.0,
        ge=1.0,
        le=10.0,
        description="Backoff growth per attempt (1.0 = constant interval)",
    )
    max_backoff_seconds: float = Field(
        default=60.0,
        ge=0.0,
        le=3600.0,
        description="Upper bound on any single wait, Retry-After included",
    )

    # --- Timeouts (httpx.Timeout) ---
    connect_timeout: float = Field(default=5.0, gt=0, le=120)
    read_timeout: float = Field(default=30.0, gt=0, le=600)
    write_timeout: float = Field(default=5.0, gt=0, le=120)
    pool_timeout: float = Field(default=5.0, gt=0, le=120)

    # --- Status / telemetry ---
    show_status: bool = Field(
        default=False,
        description="Log per-attempt status notifications at INFO (DEBUG otherwise)",
    )
    telemetry_enabled: bool = Field(
        default=True,
        description="Record Prometheus counters/histograms per logical call",
    )

    # --- Command defaults ---
    default_owner: str | None = Field(
        default=None, description="Owner used when a command omits one"
    )
    default_repository: str | None = Field(
        default=None, description="Repository used when a command omits one"
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(default="json", pattern="^(json|text)$")

    @field_validator("api_root", mode="before")
    @classmethod
    def normalize_api_root(cls, v):
        """Strip trailing slashes and require an http(s) scheme."""
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            if not v.startswith(("https://", "http://")):
                raise ValueError("api_root must start with https:// or http://")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode="after")
    def validate_backoff(self) -> "GitHubShellConfig":
        """Backoff ceiling must not be below the base interval."""
        if self.max_backoff_seconds < self.backoff_seconds:
            raise ValueError(
                f"MAX_BACKOFF_SECONDS ({self.max_backoff_seconds}) "
                f"must be >= BACKOFF_SECONDS ({self.backoff_seconds})"
            )
        return self

    def default_token(self) -> str | None:
        """Configured token, or None when unauthenticated."""
        token = self.access_token.get_secret_value()
        return token or None


@lru_cache(maxsize=1)
def get_config() -> GitHubShellConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Raises:
        ValidationError: If configuration values are invalid.
    """
    return GitHubShellConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Warning:
        Only use in test code. Production code should not reset config.
    """
    get_config.cache_clear()
