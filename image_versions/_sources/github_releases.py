"""GitHub releases source for tools published as plain version numbers."""

from typing import List, Optional

import requests

from image_versions.http_client import GITHUB_API_ACCEPT, get_default_headers
from image_versions.logging_config import logger
from image_versions.models import VersionRecord

from .cache import FetchCache
from .retry import RetryPolicy, fetch_with_retry
from .utils import get_paginated_json

JEKYLL_RELEASES_URL = "https://api.github.com/repos/jekyll/jekyll/releases"


class GithubReleaseSource:
    """
    Version records from the releases of a GitHub repository.

    Drafts and prereleases are skipped. Releases carry no LTS designation,
    so every record has ``lts=False``.
    """

    def __init__(
        self,
        session: requests.Session,
        cache: FetchCache,
        url: str = JEKYLL_RELEASES_URL,
        token: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self._session = session
        self._cache = cache
        self._token = token
        self._retry_policy = retry_policy
        self.url = url

    @property
    def name(self) -> str:
        return "GitHub releases"

    def fetch_records(self) -> List[VersionRecord]:
        releases = self._cache.get_or_fetch(self.url, lambda: fetch_with_retry(self._fetch, self._retry_policy))

        records: List[VersionRecord] = []
        for release in releases:
            if not isinstance(release, dict):
                continue
            if release.get("draft") or release.get("prerelease"):
                continue
            tag_name = release.get("tag_name")
            if not isinstance(tag_name, str):
                continue
            records.append(VersionRecord(version=tag_name, lts=False, date=release.get("published_at")))

        logger.info(f"Fetched {len(records)} releases from {self.url}")
        return records

    def _fetch(self) -> list:
        logger.debug(f"Fetching releases: {self.url}")
        headers = get_default_headers(token=self._token, accept=GITHUB_API_ACCEPT)
        return get_paginated_json(self._session, self.url, headers=headers)
