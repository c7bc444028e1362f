"""Node.js release schedule source."""

from typing import Optional

import requests

from image_versions.exceptions import VersionFetchError
from image_versions.logging_config import logger
from image_versions.models import Schedule, parse_schedule

from .cache import FetchCache
from .retry import RetryPolicy, fetch_with_retry
from .utils import get_json

NODE_SCHEDULE_URL = "https://raw.githubusercontent.com/nodejs/Release/main/schedule.json"


class ReleaseScheduleSource:
    """Lifecycle dates per major line from the Node.js Release working group."""

    def __init__(
        self,
        session: requests.Session,
        cache: FetchCache,
        url: str = NODE_SCHEDULE_URL,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self._session = session
        self._cache = cache
        self._retry_policy = retry_policy
        self.url = url

    @property
    def name(self) -> str:
        return "nodejs/Release schedule"

    def fetch_schedule(self) -> Schedule:
        data = self._cache.get_or_fetch(self.url, lambda: fetch_with_retry(self._fetch, self._retry_policy))
        schedule = parse_schedule(data)
        logger.info(f"Fetched schedule for {len(schedule)} major lines from {self.name}")
        return schedule

    def _fetch(self) -> dict:
        logger.debug(f"Fetching release schedule: {self.url}")
        data, _ = get_json(self._session, self.url)
        if not isinstance(data, dict):
            raise VersionFetchError(f"Unexpected schedule format from {self.url}: expected an object")
        return data
