"""github-shell - GitHub REST API as async callable commands.

Provides:
- Configuration management with environment overrides
- REST invocation core (auth, pagination, rate limits, retries)
- Endpoint commands for issues, labels, pull requests, repositories,
  teams, users and organizations

Python Version: 3.10+ required
"""

# Logging Configuration - configure before other imports
from .logging_config import StructuredFormatter, configure_logging

configure_logging()

from .__version__ import __version__  # noqa: E402
from .config import GitHubShellConfig, get_config, reset_config  # noqa: E402
from .core import (  # noqa: E402
    ClientError,
    DecodeError,
    GitHubContext,
    GitHubShellError,
    RateLimited,
    RequestDescriptor,
    ServerError,
    invoke_rest_method,
    invoke_rest_method_multiple_result,
)

__all__ = [
    "ClientError",
    "DecodeError",
    "GitHubContext",
    "GitHubShellConfig",
    "GitHubShellError",
    "RateLimited",
    "RequestDescriptor",
    "ServerError",
    "StructuredFormatter",
    "__version__",
    "configure_logging",
    "get_config",
    "invoke_rest_method",
    "invoke_rest_method_multiple_result",
    "reset_config",
]
