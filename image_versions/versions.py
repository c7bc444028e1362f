"""Version matrix service and flavor factory.

The service resolves every input a flavor needs, runs selection, formatting
and validation, and returns JSON-ready payloads for the CLI.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import requests

from ._flavors import (
    Flavor,
    FlavorRegistry,
    NodeFormatter,
    NodeSelector,
    NodeVersionShape,
    SelectionInputs,
    ToolFormatter,
    ToolSelector,
    ToolVersionShape,
    VersionListValidator,
)
from ._sources import (
    FetchCache,
    GithubPackageSource,
    GithubReleaseSource,
    NodeDistSource,
    ReleaseScheduleSource,
)
from .config import Config
from .exceptions import FlavorNotImplementedError, VersionNotFoundError, VersionValidationError
from .logging_config import logger
from .models import VersionRecord, to_payload
from .versioning import clean_version, max_version, versions_equal

Payload = List[Dict[str, Any]]


def create_default_registry(config: Config, session: requests.Session, cache: FetchCache) -> FlavorRegistry:
    """
    Create a FlavorRegistry with the default flavors.

    - node: Node.js LTS lines from nodejs.org, the release schedule and the
      images already published to the container registry
    - jekyll: Jekyll releases from GitHub, newest major lines only

    Args:
        config: Validated configuration
        session: HTTP session shared by all sources of this run
        cache: Fetch cache shared by all sources of this run

    Returns:
        Configured FlavorRegistry
    """
    policy = config.retry_policy
    registry = FlavorRegistry()

    registry.register(
        Flavor(
            name="node",
            title="Node.js",
            lookup_description="Node.js LTS",
            selector=NodeSelector(),
            formatter=NodeFormatter(),
            validator=VersionListValidator(NodeVersionShape()),
            record_source=NodeDistSource(session, cache, url=config.node_dist_url, retry_policy=policy),
            schedule_source=ReleaseScheduleSource(session, cache, url=config.node_schedule_url, retry_policy=policy),
            tag_source=GithubPackageSource(
                session,
                cache,
                owner=config.package_owner,
                package=config.node_package,
                api_base=config.github_api_url,
                token=config.github_token,
                retry_policy=policy,
            ),
        )
    )

    registry.register(
        Flavor(
            name="jekyll",
            title="Jekyll",
            lookup_description="Jekyll",
            selector=ToolSelector("jekyll", major_lines=config.jekyll_major_lines),
            formatter=ToolFormatter("Jekyll"),
            validator=VersionListValidator(ToolVersionShape("Jekyll")),
            record_source=GithubReleaseSource(
                session,
                cache,
                url=config.jekyll_releases_url,
                token=config.github_token,
                retry_policy=policy,
            ),
        )
    )

    return registry


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VersionMatrix:
    """
    Computes build version matrices for one flavor.

    Example:
        matrix = VersionMatrix(registry.get_required("node"))
        versions = matrix.get_versions()
        entry = matrix.get_version("20.10.0")
    """

    def __init__(self, flavor: Flavor, clock: Callable[[], datetime] = _utc_now, max_workers: int = 3) -> None:
        """
        Initialize the service.

        Args:
            flavor: Flavor to compute versions for
            clock: Returns the reference time for lifecycle checks
            max_workers: Threads used to fetch inputs concurrently
        """
        self.flavor = flavor
        self._clock = clock
        self._max_workers = max_workers

    def resolve_inputs(self, records: bool = True, schedule: bool = True, tags: bool = True) -> SelectionInputs:
        """
        Fetch the requested inputs concurrently.

        Selection never starts on partial data: the first source failure is
        raised once every fetch has finished.

        Args:
            records: Fetch the version universe
            schedule: Fetch the lifecycle schedule (if the flavor has one)
            tags: Fetch the published image tags (if the flavor has a tag source)

        Returns:
            Fully resolved SelectionInputs

        Raises:
            VersionFetchError: If any upstream fetch fails
            ConfigurationError: If a source is missing required configuration
        """
        flavor = self.flavor
        tasks: Dict[str, Callable[[], Any]] = {}
        if records:
            tasks["records"] = flavor.record_source.fetch_records
        if schedule and flavor.schedule_source is not None:
            tasks["schedule"] = flavor.schedule_source.fetch_schedule
        if tags and flavor.tag_source is not None:
            tasks["tags"] = flavor.tag_source.fetch_tags

        logger.debug(f"Resolving {sorted(tasks)} for flavor '{flavor.name}'")
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {key: executor.submit(task) for key, task in tasks.items()}
        resolved = {key: future.result() for key, future in futures.items()}

        return SelectionInputs(
            records=resolved.get("records", []),
            schedule=resolved.get("schedule", {}),
            tags=resolved.get("tags", []),
            now=self._clock(),
        )

    def get_versions(self) -> Payload:
        """
        Return the validated matrix of versions to build.

        Raises:
            VersionValidationError: If the formatted list violates a list rule
        """
        inputs = self.resolve_inputs()
        selected = self.flavor.selector.select(inputs)
        payload = to_payload(self.flavor.formatter.format_versions(selected))
        self.flavor.validator.validate_versions(payload)
        return payload

    def get_version(self, version: str) -> Dict[str, Any]:
        """
        Return the formatted entry of one upstream version.

        ``is-latest`` is computed against every version the query may resolve
        to, not only against the versions currently being built.

        Raises:
            VersionNotFoundError: If the version is invalid or not a candidate
            VersionValidationError: If the formatted entry is malformed
        """
        cleaned = _clean_or_raise(version)
        inputs = self.resolve_inputs(schedule=False, tags=False)
        candidates = self.flavor.selector.lookup_candidates(inputs)

        record = _find_record(candidates, cleaned)
        if record is None:
            raise VersionNotFoundError(f"Version {version} is not a valid {self.flavor.lookup_description} version.")

        latest_version = max_version(clean_version(candidate.version) for candidate in candidates)
        entry = self.flavor.formatter.format_version(record, latest_version).to_dict()
        if not self.flavor.validator.is_valid_regular_version(entry):
            raise VersionValidationError(f"Invalid regular version object for version: {version}")
        return entry

    def get_image_versions(self) -> Payload:
        """
        Return the validated matrix of published images still supported.

        Raises:
            FlavorNotImplementedError: If the flavor publishes no images
            VersionValidationError: If the formatted list violates a list rule
        """
        self._require_images()
        inputs = self.resolve_inputs(records=False)
        images = self.flavor.selector.select_images(inputs)
        payload = to_payload(self.flavor.formatter.format_versions(images))
        self.flavor.validator.validate_versions(payload)
        return payload

    def get_image_version(self, version: str) -> Dict[str, Any]:
        """
        Return the formatted entry of one published image.

        Every published image may be queried, including lines that are no
        longer supported.

        Raises:
            FlavorNotImplementedError: If the flavor publishes no images
            VersionNotFoundError: If the version is invalid or has no image
        """
        self._require_images()
        cleaned = _clean_or_raise(version)
        inputs = self.resolve_inputs(records=False, schedule=False)
        images = self.flavor.selector.published_images(inputs)

        versions = self.flavor.formatter.format_versions(images)
        for entry in to_payload(versions):
            if entry["version"] != "latest" and versions_equal(entry["version"], cleaned):
                return entry
        raise VersionNotFoundError(f"An image for version {version} was not found.")

    def _require_images(self) -> None:
        if self.flavor.tag_source is None:
            raise FlavorNotImplementedError(f"Published image versions are not implemented for {self.flavor.name}")


def _clean_or_raise(version: str) -> str:
    cleaned = clean_version(version)
    if cleaned is None:
        raise VersionNotFoundError(f"Invalid version: {version}")
    return cleaned


def _find_record(records: List[VersionRecord], cleaned: str) -> Optional[VersionRecord]:
    for record in records:
        candidate = clean_version(record.version)
        if candidate is not None and versions_equal(candidate, cleaned):
            return record
    return None
