"""Runtime configuration for image-versions-action.

Settings come from CLI options with environment variable fallbacks:

- GITHUB_TOKEN: Token for the GitHub API (packages and releases)
- PACKAGE_OWNER / GITHUB_REPOSITORY_OWNER: Owner of the published container packages
- NODE_PACKAGE: Container package holding the Node.js images (default: node)
- FETCH_ATTEMPTS: Attempts per upstream fetch (default: 3)
- FETCH_RETRY_DELAY: Initial retry delay in seconds (default: 1)
- JEKYLL_MAJOR_LINES: Number of Jekyll major lines to build (default: 2)
- LOG_LEVEL: Logging level (default: INFO)
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from ._sources import (
    GITHUB_API_BASE,
    JEKYLL_RELEASES_URL,
    NODE_DIST_INDEX_URL,
    NODE_SCHEDULE_URL,
    RetryPolicy,
)
from .exceptions import ConfigurationError

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class Config:
    """Configuration settings for one run."""

    github_token: Optional[str] = None
    package_owner: Optional[str] = None
    node_package: str = "node"
    attempts: int = 3
    retry_delay: float = 1.0
    jekyll_major_lines: int = 2
    log_level: str = "INFO"
    node_dist_url: str = NODE_DIST_INDEX_URL
    node_schedule_url: str = NODE_SCHEDULE_URL
    jekyll_releases_url: str = JEKYLL_RELEASES_URL
    github_api_url: str = GITHUB_API_BASE

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.attempts < 1:
            raise ConfigurationError("Fetch attempts must be at least 1")
        if self.retry_delay < 0:
            raise ConfigurationError("Fetch retry delay must be a non-negative number")
        if self.jekyll_major_lines < 1:
            raise ConfigurationError("Jekyll major lines must be at least 1")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}. Expected one of {LOG_LEVELS}")
        if not self.node_package.strip():
            raise ConfigurationError("Node package name cannot be empty")

        for label, url in (
            ("Node.js distribution index URL", self.node_dist_url),
            ("Node.js schedule URL", self.node_schedule_url),
            ("Jekyll releases URL", self.jekyll_releases_url),
            ("GitHub API URL", self.github_api_url),
        ):
            _validate_url(label, url)

        # Remove trailing slash if present for consistency
        self.github_api_url = self.github_api_url.rstrip("/")

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(attempts=self.attempts, delay=self.retry_delay)


def _validate_url(label: str, url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ConfigurationError(f"{label} must start with http:// or https://")
    if not parsed.netloc:
        raise ConfigurationError(f"{label} must include a valid hostname")


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{value}'")


def _float_from_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{value}'")


def load_config(overrides: Optional[Dict[str, Any]] = None) -> Config:
    """
    Load and validate configuration from environment variables.

    Args:
        overrides: Explicit settings (e.g. CLI options) taking precedence over
            the environment; None values are ignored

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    overrides = {key: value for key, value in (overrides or {}).items() if value is not None}

    settings: Dict[str, Any] = {
        "github_token": os.getenv("GITHUB_TOKEN") or None,
        "package_owner": os.getenv("PACKAGE_OWNER") or os.getenv("GITHUB_REPOSITORY_OWNER") or None,
        "node_package": os.getenv("NODE_PACKAGE", "node"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }
    if "attempts" not in overrides:
        settings["attempts"] = _int_from_env("FETCH_ATTEMPTS", 3)
    if "retry_delay" not in overrides:
        settings["retry_delay"] = _float_from_env("FETCH_RETRY_DELAY", 1.0)
    if "jekyll_major_lines" not in overrides:
        settings["jekyll_major_lines"] = _int_from_env("JEKYLL_MAJOR_LINES", 2)
    settings.update(overrides)

    try:
        config = Config(**settings)
    except TypeError as e:
        raise ConfigurationError(f"Unknown configuration setting: {e}")
    config.validate()
    return config
