"""Node.js distribution index source."""

from typing import List, Optional

import requests

from image_versions.exceptions import VersionFetchError
from image_versions.logging_config import logger
from image_versions.models import VersionRecord

from .cache import FetchCache
from .retry import RetryPolicy, fetch_with_retry
from .utils import get_json

NODE_DIST_INDEX_URL = "https://nodejs.org/dist/index.json"


class NodeDistSource:
    """
    Version records from the Node.js distribution index.

    Every entry of ``index.json`` becomes one VersionRecord; its ``lts`` field
    is either ``false`` or the LTS codename.
    """

    def __init__(
        self,
        session: requests.Session,
        cache: FetchCache,
        url: str = NODE_DIST_INDEX_URL,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self._session = session
        self._cache = cache
        self._retry_policy = retry_policy
        self.url = url

    @property
    def name(self) -> str:
        return "nodejs.org"

    def fetch_records(self) -> List[VersionRecord]:
        data = self._cache.get_or_fetch(self.url, lambda: fetch_with_retry(self._fetch, self._retry_policy))
        records = [VersionRecord.from_dict(entry) for entry in data if isinstance(entry, dict)]
        logger.info(f"Fetched {len(records)} version records from {self.name}")
        return records

    def _fetch(self) -> list:
        logger.debug(f"Fetching Node.js distribution index: {self.url}")
        data, _ = get_json(self._session, self.url)
        if not isinstance(data, list):
            raise VersionFetchError(f"Unexpected distribution index format from {self.url}: expected a list")
        return data
