"""Upstream version data sources.

Sources fetch raw data over HTTP (with retry and a per-run cache) and hand
fully parsed results to the selection core.

Example:
    from image_versions._sources import FetchCache, NodeDistSource

    cache = FetchCache()
    records = NodeDistSource(session, cache).fetch_records()
"""

from .cache import FetchCache
from .github_packages import GITHUB_API_BASE, GithubPackageSource, package_versions_url
from .github_releases import JEKYLL_RELEASES_URL, GithubReleaseSource
from .node_dist import NODE_DIST_INDEX_URL, NodeDistSource
from .protocol import RegistryTagSource, ScheduleSource, VersionRecordSource
from .retry import RetryPolicy, fetch_with_retry
from .schedule import NODE_SCHEDULE_URL, ReleaseScheduleSource

__all__ = [
    # Protocols
    "VersionRecordSource",
    "ScheduleSource",
    "RegistryTagSource",
    # Sources
    "NodeDistSource",
    "ReleaseScheduleSource",
    "GithubPackageSource",
    "GithubReleaseSource",
    # Fetch plumbing
    "FetchCache",
    "RetryPolicy",
    "fetch_with_retry",
    "package_versions_url",
    # Default URLs
    "NODE_DIST_INDEX_URL",
    "NODE_SCHEDULE_URL",
    "JEKYLL_RELEASES_URL",
    "GITHUB_API_BASE",
]
