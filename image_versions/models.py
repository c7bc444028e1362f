"""Data models for upstream version records and formatted build versions.

Formatted versions serialize to the hyphenated keys that GitHub Actions
workflows read from the build matrix (``image-version``, ``is-latest`` ...).
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from .logging_config import logger
from .versioning import clean_version

LATEST = "latest"

# Published image descriptions look like "Node 20.10.0 LTS (Iron)"
NODE_IMAGE_DESCRIPTION_RE = re.compile(r"^Node (\d+\.\d+\.\d+) LTS \(([A-Z][a-z]+)\)", re.IGNORECASE)

SCHEDULE_KEY_RE = re.compile(r"^v(\d+)$")


@dataclass(frozen=True)
class VersionRecord:
    """
    One upstream release.

    Attributes:
        version: Version string as published upstream (e.g. "v20.10.0")
        lts: LTS codename, or False for a non-LTS release
        date: Release date as published upstream
    """

    version: str
    lts: Union[bool, str] = False
    date: Optional[str] = None

    @property
    def is_lts(self) -> bool:
        return self.lts is not False

    @property
    def codename(self) -> Optional[str]:
        """LTS codename when the record carries one."""
        if isinstance(self.lts, str) and self.lts:
            return self.lts
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VersionRecord":
        """Build a record from a Node.js distribution index entry."""
        lts = data.get("lts", False)
        if not isinstance(lts, (bool, str)):
            lts = False
        return cls(version=str(data.get("version", "")), lts=lts, date=data.get("date"))


def _parse_schedule_date(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        parsed = date.fromisoformat(value.strip())
    except ValueError:
        logger.debug(f"Ignoring unparseable schedule date: {value!r}")
        return None
    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ScheduleEntry:
    """
    Lifecycle dates of one major release line.

    A line is active LTS while ``lts_start <= now < end``. Missing dates mean
    the line is never active.
    """

    major: int
    lts_start: Optional[datetime] = None
    end: Optional[datetime] = None
    codename: Optional[str] = None

    def is_active_lts(self, now: datetime) -> bool:
        if self.lts_start is None or self.end is None:
            return False
        return self.lts_start <= now < self.end

    @classmethod
    def from_dict(cls, major: int, data: Mapping[str, Any]) -> "ScheduleEntry":
        codename = data.get("codename")
        return cls(
            major=major,
            lts_start=_parse_schedule_date(data.get("lts")),
            end=_parse_schedule_date(data.get("end")),
            codename=codename if isinstance(codename, str) and codename else None,
        )


Schedule = Dict[int, ScheduleEntry]


def parse_schedule(data: Mapping[str, Any]) -> Schedule:
    """
    Parse the Node.js release schedule mapping.

    Keys that are not of the form ``v<major>`` (e.g. "v0.10") are ignored.

    Args:
        data: Raw schedule JSON object

    Returns:
        Mapping of major version to ScheduleEntry
    """
    schedule: Schedule = {}
    for key, value in data.items():
        match = SCHEDULE_KEY_RE.match(str(key))
        if not match or not isinstance(value, Mapping):
            continue
        major = int(match.group(1))
        schedule[major] = ScheduleEntry.from_dict(major, value)
    return schedule


@dataclass(frozen=True)
class RegistryTag:
    """An image already published to the container registry."""

    version: str
    codename: str

    @classmethod
    def from_description(cls, description: Optional[str]) -> Optional["RegistryTag"]:
        """
        Extract the Node version and codename from an image description.

        Returns:
            RegistryTag, or None if the description does not describe a Node LTS image
        """
        if not description:
            return None
        match = NODE_IMAGE_DESCRIPTION_RE.match(description)
        if not match:
            return None
        version, codename = match.groups()
        if clean_version(version) is None:
            return None
        return cls(version=version, codename=codename.capitalize())

    def to_record(self) -> VersionRecord:
        return VersionRecord(version=self.version, lts=self.codename)


@dataclass(frozen=True)
class RegularVersion:
    """A formatted, display-ready build version."""

    version: str
    image_version: str
    image_name: str
    is_latest: bool = False
    image_code_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "version": self.version,
            "image-version": self.image_version,
            "image-name": self.image_name,
        }
        if self.image_code_name is not None:
            data["image-code-name"] = self.image_code_name
        data["is-latest"] = self.is_latest
        return data


@dataclass(frozen=True)
class LatestVersion:
    """The floating ``latest`` sentinel that ends every version list."""

    version: str = LATEST
    image_version: str = LATEST
    is_latest: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "image-version": self.image_version,
            "is-latest": self.is_latest,
        }


WorkflowVersion = Union[RegularVersion, LatestVersion]


def to_payload(versions: List[WorkflowVersion]) -> List[Dict[str, Any]]:
    """Serialize formatted versions to JSON-ready dicts."""
    return [version.to_dict() for version in versions]
