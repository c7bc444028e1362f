"""Formatting of selected records into workflow versions."""

from typing import Callable, List

from ..exceptions import VersionValidationError
from ..models import LatestVersion, RegularVersion, VersionRecord, WorkflowVersion
from ..versioning import clean_version, major_of, max_version, versions_equal


def _require_clean(record: VersionRecord) -> str:
    cleaned = clean_version(record.version)
    if cleaned is None:
        raise VersionValidationError(f"Cannot format invalid version: {record.version!r}")
    return cleaned


def format_version_list(
    records: List[VersionRecord],
    format_version: Callable[[VersionRecord, str], RegularVersion],
) -> List[WorkflowVersion]:
    """
    Format records and append the ``latest`` sentinel.

    Exactly the entry holding the highest version gets ``is-latest: true``.
    The sentinel is appended even when ``records`` is empty; rejecting such a
    list is the validator's job.

    Args:
        records: Records to format, in output order
        format_version: Flavor-specific single-record formatter

    Returns:
        Regular versions followed by the sentinel
    """
    latest_version = max_version(_require_clean(record) for record in records)
    versions: List[WorkflowVersion] = [format_version(record, latest_version) for record in records]
    versions.append(LatestVersion())
    return versions


class NodeFormatter:
    """Formats Node.js LTS records as ``Node <version> LTS (<Codename>)``."""

    def format_version(self, record: VersionRecord, latest_version: str) -> RegularVersion:
        version = _require_clean(record)
        codename = record.lts if isinstance(record.lts, str) else ""
        return RegularVersion(
            version=version,
            image_version=str(major_of(version)),
            image_name=f"Node {version} LTS ({codename})",
            image_code_name=codename.lower(),
            is_latest=versions_equal(version, latest_version),
        )

    def format_versions(self, records: List[VersionRecord]) -> List[WorkflowVersion]:
        return format_version_list(records, self.format_version)


class ToolFormatter:
    """Formats plain tool releases as ``<Tool> <version>``."""

    def __init__(self, title: str) -> None:
        self.title = title

    def format_version(self, record: VersionRecord, latest_version: str) -> RegularVersion:
        version = _require_clean(record)
        return RegularVersion(
            version=version,
            image_version=str(major_of(version)),
            image_name=f"{self.title} {version}",
            is_latest=versions_equal(version, latest_version),
        )

    def format_versions(self, records: List[VersionRecord]) -> List[WorkflowVersion]:
        return format_version_list(records, self.format_version)
