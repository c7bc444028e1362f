"""Source protocols for upstream version data.

The selection core only ever sees fully resolved results of these sources:
a list of VersionRecord, a Schedule, and a list of RegistryTag.
"""

from typing import List, Protocol

from ..models import RegistryTag, Schedule, VersionRecord


class VersionRecordSource(Protocol):
    """
    Protocol for sources of raw version records (the "version universe").

    Example:
        class NodeDistSource:
            name = "nodejs.org"

            def fetch_records(self) -> List[VersionRecord]:
                ...
    """

    @property
    def name(self) -> str:
        """Human-readable name of this source, used for logging."""
        ...

    def fetch_records(self) -> List[VersionRecord]:
        """
        Fetch all version records.

        Raises:
            VersionFetchError: If the data cannot be fetched
        """
        ...


class ScheduleSource(Protocol):
    """Protocol for sources of release-line lifecycle dates."""

    @property
    def name(self) -> str: ...

    def fetch_schedule(self) -> Schedule:
        """
        Fetch the release schedule keyed by major version.

        Raises:
            VersionFetchError: If the data cannot be fetched
        """
        ...


class RegistryTagSource(Protocol):
    """Protocol for sources of already-published image tags."""

    @property
    def name(self) -> str: ...

    def fetch_tags(self) -> List[RegistryTag]:
        """
        Fetch every published image tag.

        Raises:
            VersionFetchError: If the data cannot be fetched
        """
        ...
