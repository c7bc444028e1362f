"""GitHub container registry source for already-published images."""

from typing import List, Optional

import requests

from image_versions.exceptions import ConfigurationError
from image_versions.http_client import GITHUB_API_ACCEPT, get_default_headers
from image_versions.logging_config import logger
from image_versions.models import RegistryTag

from .cache import FetchCache
from .retry import RetryPolicy, fetch_with_retry
from .utils import get_paginated_json

GITHUB_API_BASE = "https://api.github.com"


def package_versions_url(owner: str, package: str, api_base: str = GITHUB_API_BASE) -> str:
    """Build the package versions endpoint for a user-owned container package."""
    return f"{api_base}/users/{owner}/packages/container/{package}/versions"


class GithubPackageSource:
    """
    Published image tags from GitHub container package versions.

    Each package version carries a free-text description such as
    ``Node 20.10.0 LTS (Iron) on Ubuntu 24.04``; versions whose description
    does not name a Node LTS release are skipped.
    """

    def __init__(
        self,
        session: requests.Session,
        cache: FetchCache,
        owner: Optional[str],
        package: str = "node",
        api_base: str = GITHUB_API_BASE,
        token: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self._session = session
        self._cache = cache
        self._token = token
        self._retry_policy = retry_policy
        self.package = package
        self.url = package_versions_url(owner, package, api_base) if owner else None

    @property
    def name(self) -> str:
        return "ghcr.io packages"

    def fetch_tags(self) -> List[RegistryTag]:
        if self.url is None:
            raise ConfigurationError(
                f"Package owner is not defined; cannot list published '{self.package}' images. "
                "Set --package-owner, PACKAGE_OWNER or GITHUB_REPOSITORY_OWNER."
            )

        package_versions = self._cache.get_or_fetch(
            self.url, lambda: fetch_with_retry(self._fetch, self._retry_policy)
        )

        tags: List[RegistryTag] = []
        for package_version in package_versions:
            if not isinstance(package_version, dict):
                continue
            tag = RegistryTag.from_description(package_version.get("description"))
            if tag is None:
                logger.debug(f"Skipping package version without a Node LTS description: {package_version.get('id')}")
                continue
            tags.append(tag)

        logger.info(f"Found {len(tags)} published image tags in {len(package_versions)} package versions")
        return tags

    def _fetch(self) -> list:
        if not self._token:
            logger.debug("No GitHub token configured for the packages API")
        logger.debug(f"Fetching package versions: {self.url}")
        headers = get_default_headers(token=self._token, accept=GITHUB_API_ACCEPT)
        return get_paginated_json(self._session, self.url, headers=headers)
