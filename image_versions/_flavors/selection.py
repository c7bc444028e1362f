"""Eligible version selection.

Node.js rules:

1. LTS candidates are records whose ``lts`` field is not ``false``.
2. A candidate is active when the schedule says its major line is in active
   LTS right now.
3. Active candidates are reduced to the highest version per major.
4. Lines that were published before but are no longer active LTS are carried
   forward when upstream has a strictly newer patch than the published image.
5. Both groups are merged per major (strictly greater wins) and sorted.

Version strings that cannot be parsed are skipped at every step.
"""

from typing import Dict, Iterable, List, Optional, Set

from ..exceptions import FlavorNotImplementedError
from ..logging_config import logger
from ..models import RegistryTag, Schedule, VersionRecord
from ..versioning import clean_version, is_greater, major_of, sort_versions
from .protocol import SelectionInputs


def lts_candidates(records: Iterable[VersionRecord]) -> List[VersionRecord]:
    """Return the records carrying an LTS designation."""
    return [record for record in records if record.is_lts]


def is_active_lts(schedule: Schedule, major: int, now) -> bool:
    """Check whether a major line is in active LTS at ``now``."""
    entry = schedule.get(major)
    return entry is not None and entry.is_active_lts(now)


def active_lts_versions(records: Iterable[VersionRecord], schedule: Schedule, now) -> List[VersionRecord]:
    """Return the LTS records whose major line is currently active."""
    active: List[VersionRecord] = []
    for record in lts_candidates(records):
        major = major_of(record.version)
        if major is None:
            continue
        if is_active_lts(schedule, major, now):
            active.append(record)
    return active


def merge_by_major(
    records: Iterable[VersionRecord],
    into: Optional[Dict[int, VersionRecord]] = None,
) -> Dict[int, VersionRecord]:
    """
    Keep the highest record per major version.

    A record replaces the stored one only if its version is strictly greater,
    so the result does not depend on how ties are ordered.

    Args:
        records: Records to merge
        into: Existing mapping to merge into (modified in place)

    Returns:
        Mapping of major version to record
    """
    merged: Dict[int, VersionRecord] = {} if into is None else into
    for record in records:
        cleaned = clean_version(record.version)
        if cleaned is None:
            continue
        major = major_of(cleaned)
        stored = merged.get(major)
        if stored is not None and not is_greater(cleaned, stored.version):
            continue
        merged[major] = record
    return merged


def latest_by_major(records: Iterable[VersionRecord]) -> List[VersionRecord]:
    """Return the highest record of each major line, in first-seen major order."""
    return list(merge_by_major(records).values())


def major_versions(records: Iterable[VersionRecord]) -> Set[int]:
    """Return the set of major versions present in ``records``."""
    majors = (major_of(record.version) for record in records)
    return {major for major in majors if major is not None}


def versions_with_major(records: Iterable[VersionRecord], major: int) -> List[VersionRecord]:
    """Return the records belonging to one major line."""
    return [record for record in records if major_of(record.version) == major]


def latest_tags_by_major(tags: Iterable[RegistryTag]) -> List[RegistryTag]:
    """Return the newest published tag of each major line."""
    return [
        RegistryTag(version=record.version, codename=str(record.lts))
        for record in latest_by_major(tag.to_record() for tag in tags)
    ]


def newer_eol_versions(
    records: List[VersionRecord],
    tags: Iterable[RegistryTag],
    active_majors: Set[int],
) -> List[VersionRecord]:
    """
    Return newer releases of published lines that are no longer active LTS.

    For every published major line outside ``active_majors``, the highest
    record of that line is included when it is strictly greater than the
    published version.
    """
    newer: List[VersionRecord] = []
    for tag in latest_tags_by_major(tags):
        major = major_of(tag.version)
        if major is None or major in active_majors:
            continue

        candidates = latest_by_major(versions_with_major(records, major))
        if not candidates:
            logger.debug(f"No upstream records for published major {major}, skipping")
            continue

        candidate = candidates[0]
        if not is_greater(candidate.version, tag.version):
            continue

        logger.info(f"Carrying forward EOL line {major}: {candidate.version} is newer than published {tag.version}")
        newer.append(candidate)
    return newer


def sort_records(records: Iterable[VersionRecord]) -> List[VersionRecord]:
    """Sort records ascending by version (records must have valid versions)."""
    by_version = {}
    for record in records:
        by_version.setdefault(record.version, record)
    return [by_version[version] for version in sort_versions(by_version)]


class NodeSelector:
    """Selection rules for Node.js LTS release lines."""

    @property
    def name(self) -> str:
        return "node"

    def select(self, inputs: SelectionInputs) -> List[VersionRecord]:
        active = active_lts_versions(inputs.records, inputs.schedule, inputs.now)
        active_latest = latest_by_major(active)
        eol = newer_eol_versions(inputs.records, inputs.tags, major_versions(active))

        eligible = merge_by_major(active_latest)
        merge_by_major(eol, into=eligible)

        selected = sort_records(eligible.values())
        logger.info(f"Selected {len(selected)} eligible Node.js versions: {[r.version for r in selected]}")
        return selected

    def lookup_candidates(self, inputs: SelectionInputs) -> List[VersionRecord]:
        return [record for record in lts_candidates(inputs.records) if clean_version(record.version) is not None]

    def published_images(self, inputs: SelectionInputs) -> List[VersionRecord]:
        return sort_records(tag.to_record() for tag in latest_tags_by_major(inputs.tags))

    def select_images(self, inputs: SelectionInputs) -> List[VersionRecord]:
        return [
            record
            for record in self.published_images(inputs)
            if is_active_lts(inputs.schedule, major_of(record.version), inputs.now)
        ]


class ToolSelector:
    """
    Selection rules for tools versioned with plain release numbers.

    The highest release of each major line is eligible, limited to the
    newest ``major_lines`` lines.
    """

    def __init__(self, name: str, major_lines: int = 2) -> None:
        if major_lines < 1:
            raise ValueError("major_lines must be at least 1")
        self._name = name
        self.major_lines = major_lines

    @property
    def name(self) -> str:
        return self._name

    def select(self, inputs: SelectionInputs) -> List[VersionRecord]:
        latest = sort_records(latest_by_major(inputs.records))
        selected = latest[-self.major_lines :]
        logger.info(f"Selected {len(selected)} eligible {self._name} versions: {[r.version for r in selected]}")
        return selected

    def lookup_candidates(self, inputs: SelectionInputs) -> List[VersionRecord]:
        return [record for record in inputs.records if clean_version(record.version) is not None]

    def published_images(self, inputs: SelectionInputs) -> List[VersionRecord]:
        raise FlavorNotImplementedError(f"Published image versions are not implemented for {self._name}")

    def select_images(self, inputs: SelectionInputs) -> List[VersionRecord]:
        raise FlavorNotImplementedError(f"Published image versions are not implemented for {self._name}")
