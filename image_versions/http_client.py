"""HTTP client utilities with consistent user agent."""

from typing import Optional

import requests


def _get_package_version() -> str:
    """Get the package version for User-Agent header."""
    from image_versions import __version__

    return __version__


USER_AGENT = f"image-versions-action/{_get_package_version()}"

GITHUB_API_ACCEPT = "application/vnd.github+json"


def get_default_headers(token: Optional[str] = None, accept: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        token: Optional authentication token to include
        accept: Optional Accept header value (e.g., "application/vnd.github+json")

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if accept:
        headers["Accept"] = accept
    return headers


def create_session() -> requests.Session:
    """
    Create a requests session for one run.

    The token is not attached to the session; sources that talk to the
    GitHub API add it per request so it never reaches other hosts.

    Returns:
        Configured requests.Session
    """
    session = requests.Session()
    session.headers.update(get_default_headers())
    return session
