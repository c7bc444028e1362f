"""Validation of formatted version lists.

The structural rules are shared by every flavor; only the per-field shape of
a regular entry differs. ``VersionListValidator`` is therefore composed with a
flavor-specific shape check rather than subclassed.

Usage:
    validator = VersionListValidator(NodeVersionShape())
    validator.validate_versions(payload)  # raises VersionValidationError
"""

import json
import re
from typing import Any, List, Mapping, Sequence

from ..exceptions import VersionValidationError
from ..models import LATEST
from ..versioning import sort_versions
from .protocol import RegularVersionShape

VERSION_RE = re.compile(r"\d+\.\d+\.\d+")
MAJOR_RE = re.compile(r"\d+")
NODE_IMAGE_NAME_RE = re.compile(r"Node \d+\.\d+\.\d+ LTS \([A-Z][a-z]+\)")
CODE_NAME_RE = re.compile(r"[a-z]+")
EMBEDDED_CODE_NAME_RE = re.compile(r"\(([^)]+)\)\Z")


def _matches(pattern: "re.Pattern[str]", value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def _dump(entry: Any) -> str:
    return json.dumps(entry, default=str)


class NodeVersionShape:
    """
    Field checks for Node.js entries.

    Besides the per-field patterns, ``image-code-name`` must equal the
    lowercased codename in parentheses at the end of ``image-name``.
    """

    @property
    def name(self) -> str:
        return "node"

    def is_valid(self, entry: Mapping[str, Any]) -> bool:
        image_name = entry.get("image-name")
        image_code_name = entry.get("image-code-name")

        code_name_match = EMBEDDED_CODE_NAME_RE.search(image_name) if isinstance(image_name, str) else None
        is_valid_code_name = code_name_match is not None and image_code_name == code_name_match.group(1).lower()

        return (
            _matches(VERSION_RE, entry.get("version"))
            and _matches(MAJOR_RE, entry.get("image-version"))
            and _matches(NODE_IMAGE_NAME_RE, image_name)
            and _matches(CODE_NAME_RE, image_code_name)
            and isinstance(entry.get("is-latest"), bool)
            and is_valid_code_name
        )


class ToolVersionShape:
    """Field checks for tools named ``<Tool> <version>`` without a codename."""

    def __init__(self, title: str) -> None:
        self.title = title
        self._image_name_re = re.compile(re.escape(title) + r" \d+\.\d+\.\d+")

    @property
    def name(self) -> str:
        return self.title.lower()

    def is_valid(self, entry: Mapping[str, Any]) -> bool:
        return (
            _matches(VERSION_RE, entry.get("version"))
            and _matches(MAJOR_RE, entry.get("image-version"))
            and _matches(self._image_name_re, entry.get("image-name"))
            and isinstance(entry.get("is-latest"), bool)
        )


class VersionListValidator:
    """
    Gate check for a formatted version list before CI trusts it.

    Checks run in a fixed order and stop at the first violation.
    """

    def __init__(self, shape: RegularVersionShape) -> None:
        self.shape = shape

    def is_valid_regular_version(self, entry: Any) -> bool:
        """Check the field shape of one regular entry."""
        return isinstance(entry, Mapping) and self.shape.is_valid(entry)

    def validate_versions(self, versions: Sequence[Any]) -> None:
        """
        Validate a full version list.

        Args:
            versions: Serialized version entries, sentinel included

        Raises:
            VersionValidationError: Naming the violated rule and, where relevant, the offending entry
        """
        if not isinstance(versions, Sequence) or isinstance(versions, (str, bytes)) or len(versions) < 2:
            raise VersionValidationError("Version list is too short: it must contain at least two elements.")

        regular_versions: List[Any] = [entry for entry in versions if not _is_latest_entry(entry)]
        for entry in regular_versions:
            if not self.is_valid_regular_version(entry):
                raise VersionValidationError(f"Invalid regular version object: {_dump(entry)}")

        latest_versions = [entry for entry in versions if _is_latest_entry(entry)]
        if not latest_versions:
            raise VersionValidationError("Missing latest version object.")
        if len(latest_versions) > 1:
            raise VersionValidationError(
                f"Multiple latest version objects: found {len(latest_versions)}, expected exactly one."
            )

        latest_version = latest_versions[0]
        if latest_version.get("image-version") != LATEST or latest_version.get("is-latest") is not True:
            raise VersionValidationError(f"Invalid latest version object: {_dump(latest_version)}")

        regular_version_numbers = [entry["version"] for entry in regular_versions]
        try:
            sorted_version_numbers = sort_versions(regular_version_numbers)
        except ValueError as e:
            raise VersionValidationError(f"Regular versions cannot be compared: {e}")
        if regular_version_numbers != sorted_version_numbers:
            raise VersionValidationError("Regular versions are not sorted ascending by version number.")

        if not regular_versions or regular_versions[-1].get("is-latest") is not True:
            raise VersionValidationError("The last regular version must be latest (is-latest: true).")

        if not _is_latest_entry(versions[-1]):
            raise VersionValidationError("Invalid order: latest must be last in the version list.")


def _is_latest_entry(entry: Any) -> bool:
    return isinstance(entry, Mapping) and entry.get("version") == LATEST
