"""Version flavors: selection, formatting and validation per upstream family.

Example:
    from image_versions._flavors import FlavorRegistry, NodeSelector

    registry = FlavorRegistry()
    registry.register(node_flavor)
    flavor = registry.get_required("node")
"""

from .formatting import NodeFormatter, ToolFormatter, format_version_list
from .protocol import RegularVersionShape, SelectionInputs, VersionFormatter, VersionSelector
from .registry import Flavor, FlavorRegistry
from .selection import (
    NodeSelector,
    ToolSelector,
    active_lts_versions,
    latest_by_major,
    lts_candidates,
    merge_by_major,
    newer_eol_versions,
    sort_records,
)
from .validation import NodeVersionShape, ToolVersionShape, VersionListValidator

__all__ = [
    # Protocols
    "VersionSelector",
    "VersionFormatter",
    "RegularVersionShape",
    "SelectionInputs",
    # Registry
    "Flavor",
    "FlavorRegistry",
    # Selection
    "NodeSelector",
    "ToolSelector",
    "lts_candidates",
    "active_lts_versions",
    "merge_by_major",
    "latest_by_major",
    "newer_eol_versions",
    "sort_records",
    # Formatting
    "NodeFormatter",
    "ToolFormatter",
    "format_version_list",
    # Validation
    "VersionListValidator",
    "NodeVersionShape",
    "ToolVersionShape",
]
