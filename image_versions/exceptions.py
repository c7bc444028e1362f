"""Custom exceptions for image-versions-action."""


class ImageVersionsError(Exception):
    """Base exception for all image version operations."""


class ConfigurationError(ImageVersionsError):
    """Raised when configuration validation fails."""


class VersionFetchError(ImageVersionsError):
    """Raised when upstream version data cannot be fetched."""


class VersionValidationError(ImageVersionsError):
    """Raised when a formatted version list violates its invariants."""


class VersionNotFoundError(ImageVersionsError):
    """Raised when a requested version is invalid or not available."""


class FlavorNotImplementedError(ImageVersionsError, NotImplementedError):
    """Raised when a flavor does not implement the requested operation."""
