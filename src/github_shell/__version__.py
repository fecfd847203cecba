"""Version information for github-shell.

Single source of truth for version number.
Follows PEP 440 and semantic versioning principles.
"""

__version__ = "0.3.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))

# Version history:
# 0.3.0 - Pre-emptive rate-limit fail-fast, raw media type passthrough
# 0.2.0 - Prometheus telemetry sink, status reporting
# 0.1.0 - Initial release (REST core, issues/labels/repos commands)
