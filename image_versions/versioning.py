"""Semantic version helpers.

Upstream feeds publish versions in slightly different shapes (``v20.10.0``,
``=18.17.1``, ``4.3.4``). Every comparison in the selection logic goes through
these helpers so that unparseable strings are handled consistently.
"""

from typing import Iterable, List, Optional

from semantic_version import Version


def clean_version(value: object) -> Optional[str]:
    """
    Normalize a version string to plain ``MAJOR.MINOR.PATCH`` form.

    Leading/trailing whitespace and leading ``v`` or ``=`` characters are
    stripped before parsing.

    Args:
        value: Raw version value from an upstream feed

    Returns:
        The cleaned version string, or None if it is not a valid semantic version
    """
    if not isinstance(value, str):
        return None

    candidate = value.strip().lstrip("=v").strip()
    if not candidate:
        return None

    try:
        return str(Version(candidate))
    except ValueError:
        return None


def parse_version(value: object) -> Optional[Version]:
    """Parse a raw version string, returning None when it is not valid."""
    cleaned = clean_version(value)
    if cleaned is None:
        return None
    return Version(cleaned)


def major_of(value: object) -> Optional[int]:
    """Return the major version number of a raw version string, or None."""
    version = parse_version(value)
    if version is None:
        return None
    return version.major


def is_greater(candidate: str, stored: str) -> bool:
    """Check whether ``candidate`` is strictly greater than ``stored``."""
    return Version(clean_version(candidate) or candidate) > Version(clean_version(stored) or stored)


def versions_equal(left: str, right: str) -> bool:
    """Check whether two version strings denote the same version."""
    return Version(clean_version(left) or left) == Version(clean_version(right) or right)


def sort_versions(versions: Iterable[str]) -> List[str]:
    """
    Sort version strings ascending by semantic version precedence.

    The sort is stable, so equal versions keep their input order.

    Raises:
        ValueError: If any version is not a valid semantic version
    """
    return sorted(versions, key=lambda version: Version(clean_version(version) or version))


def max_version(versions: Iterable[str]) -> Optional[str]:
    """Return the highest version string, or None for an empty input."""
    ordered = sort_versions(versions)
    return ordered[-1] if ordered else None
