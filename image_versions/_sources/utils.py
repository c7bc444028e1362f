"""Shared HTTP helpers for version data sources."""

from typing import Any, Dict, Optional, Tuple

import requests

from image_versions.exceptions import VersionFetchError

DEFAULT_TIMEOUT = 30  # seconds


def get_json(
    session: requests.Session,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Tuple[Any, requests.Response]:
    """
    GET a URL and decode its JSON body.

    Args:
        session: requests.Session to use
        url: URL to fetch
        headers: Extra request headers
        params: Query parameters
        timeout: Request timeout in seconds

    Returns:
        Tuple of (decoded JSON, response)

    Raises:
        VersionFetchError: On connection errors, timeouts, non-2xx responses or invalid JSON
    """
    try:
        response = session.get(url, headers=headers, params=params, timeout=timeout)
    except requests.exceptions.Timeout:
        raise VersionFetchError(f"Request to {url} timed out")
    except requests.exceptions.ConnectionError:
        raise VersionFetchError(f"Failed to connect to {url}")
    except requests.exceptions.RequestException as e:
        raise VersionFetchError(f"Request to {url} failed: {e}")

    if not response.ok:
        raise VersionFetchError(f"Failed to fetch version data from {url}: [{response.status_code}] {response.reason}")

    try:
        return response.json(), response
    except ValueError as e:
        raise VersionFetchError(f"Invalid JSON response from {url}: {e}")


def next_page_url(response: requests.Response) -> Optional[str]:
    """Return the ``rel="next"`` URL of a paginated GitHub API response, if any."""
    return response.links.get("next", {}).get("url")


def get_paginated_json(
    session: requests.Session,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    per_page: int = 100,
) -> list:
    """
    Fetch every page of a paginated GitHub API list endpoint.

    The first request asks for page 1; later pages follow the ``Link`` header
    until no ``rel="next"`` link is left.

    Raises:
        VersionFetchError: If any page fails or is not a JSON list
    """
    items: list = []
    page_url: Optional[str] = url
    params: Optional[Dict[str, Any]] = {"page": 1, "per_page": per_page}

    while page_url is not None:
        data, response = get_json(session, page_url, headers=headers, params=params)
        if not isinstance(data, list):
            raise VersionFetchError(f"Unexpected response format from {page_url}: expected a list")
        items.extend(data)
        page_url = next_page_url(response)
        # The next link already carries the query string
        params = None

    return items
