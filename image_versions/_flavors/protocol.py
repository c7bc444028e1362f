"""Capability contracts for version flavors.

A flavor (Node.js, Jekyll, ...) is assembled from three capabilities:
a selector deciding which records to build, a formatter turning records into
workflow versions, and a shape check used by the shared list validator.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Mapping, Protocol

from ..models import RegistryTag, RegularVersion, Schedule, VersionRecord, WorkflowVersion


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SelectionInputs:
    """
    Fully resolved inputs of one selection run.

    Attributes:
        records: Every upstream version record (the version universe)
        schedule: Lifecycle dates keyed by major version
        tags: Already-published image tags
        now: Reference time for lifecycle checks (timezone-aware)
    """

    records: List[VersionRecord]
    schedule: Schedule = field(default_factory=dict)
    tags: List[RegistryTag] = field(default_factory=list)
    now: datetime = field(default_factory=_utc_now)


class VersionSelector(Protocol):
    """Decides which upstream records should have images built."""

    @property
    def name(self) -> str: ...

    def select(self, inputs: SelectionInputs) -> List[VersionRecord]:
        """Return the eligible records, one per major line, sorted ascending."""
        ...

    def lookup_candidates(self, inputs: SelectionInputs) -> List[VersionRecord]:
        """Return the records a single-version query may resolve to."""
        ...

    def published_images(self, inputs: SelectionInputs) -> List[VersionRecord]:
        """
        Return every published image, newest per major line, sorted ascending.

        Raises:
            FlavorNotImplementedError: If the flavor has no published images
        """
        ...

    def select_images(self, inputs: SelectionInputs) -> List[VersionRecord]:
        """
        Return the published images that are still supported.

        Raises:
            FlavorNotImplementedError: If the flavor has no published images
        """
        ...


class VersionFormatter(Protocol):
    """Turns version records into workflow versions."""

    def format_version(self, record: VersionRecord, latest_version: str) -> RegularVersion:
        """Format one record; ``is-latest`` is set when it equals ``latest_version``."""
        ...

    def format_versions(self, records: List[VersionRecord]) -> List[WorkflowVersion]:
        """Format records and append the ``latest`` sentinel."""
        ...


class RegularVersionShape(Protocol):
    """Per-field validation of a regular (non-sentinel) version entry."""

    @property
    def name(self) -> str: ...

    def is_valid(self, entry: Mapping[str, Any]) -> bool: ...
