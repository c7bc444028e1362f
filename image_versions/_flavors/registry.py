"""Flavor registry mapping flavor names to their capabilities."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..exceptions import ConfigurationError
from ..logging_config import logger
from .._sources.protocol import RegistryTagSource, ScheduleSource, VersionRecordSource
from .protocol import VersionFormatter, VersionSelector
from .validation import VersionListValidator


@dataclass
class Flavor:
    """
    Everything needed to compute the build versions of one upstream family.

    Attributes:
        name: Registry key (e.g. "node")
        title: Display name used in messages (e.g. "Node.js")
        lookup_description: What a single-version query must match, for error messages
        selector: Eligibility rules
        formatter: Record to workflow version formatting
        validator: Version list validator with the flavor's shape check
        record_source: Source of the version universe
        schedule_source: Optional lifecycle schedule source
        tag_source: Optional source of already-published image tags
    """

    name: str
    title: str
    lookup_description: str
    selector: VersionSelector
    formatter: VersionFormatter
    validator: VersionListValidator
    record_source: VersionRecordSource
    schedule_source: Optional[ScheduleSource] = None
    tag_source: Optional[RegistryTagSource] = None


class FlavorRegistry:
    """
    Registry of available flavors.

    Example:
        registry = FlavorRegistry()
        registry.register(node_flavor)
        flavor = registry.get_required("node")
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._flavors: Dict[str, Flavor] = {}

    def register(self, flavor: Flavor) -> None:
        """
        Register a flavor.

        Args:
            flavor: Flavor to register (replaces any flavor with the same name)
        """
        self._flavors[flavor.name] = flavor
        logger.debug(f"Registered flavor: {flavor.name}")

    def get(self, name: str) -> Optional[Flavor]:
        """Get a flavor by name, or None if it is not registered."""
        return self._flavors.get(name)

    def get_required(self, name: str) -> Flavor:
        """
        Get a flavor by name.

        Raises:
            ConfigurationError: If the flavor is not registered
        """
        flavor = self._flavors.get(name)
        if flavor is None:
            available = sorted(self._flavors.keys())
            raise ConfigurationError(f"Unsupported version flavor: '{name}'. Supported flavors: {available}")
        return flavor

    def names(self) -> List[str]:
        """Return the registered flavor names, sorted."""
        return sorted(self._flavors.keys())

    def list_flavors(self) -> List[Dict[str, Any]]:
        """
        List all registered flavors.

        Returns:
            List of dicts with flavor info
        """
        return [
            {
                "name": name,
                "title": self._flavors[name].title,
                "images": self._flavors[name].tag_source is not None,
            }
            for name in self.names()
        ]

    def clear(self) -> None:
        """Remove all registered flavors."""
        self._flavors.clear()
