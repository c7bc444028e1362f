"""Shared test data builders."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import requests

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def json_response(data: Any, status_code: int = 200, links: Optional[Dict[str, Dict[str, str]]] = None) -> Mock:
    """Build a mock requests.Response carrying a JSON body."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK" if response.ok else "Error"
    response.json.return_value = data
    response.links = links or {}
    return response


def node_entry(version: str, lts: Any = False, date: str = "2023-01-01") -> Dict[str, Any]:
    return {"version": version, "lts": lts, "date": date, "files": []}


def package_version(version_id: int, description: Optional[str]) -> Dict[str, Any]:
    return {"id": version_id, "name": f"sha256:{version_id:064x}", "description": description}


def node_entries() -> List[Dict[str, Any]]:
    """Raw distribution index entries matching the node_records fixture."""
    return [
        node_entry("v21.5.0", False, "2023-12-19"),
        node_entry("v20.10.0", "Iron", "2023-11-22"),
        node_entry("v20.9.0", "Iron", "2023-10-24"),
        node_entry("v18.17.1", "Hydrogen", "2023-08-09"),
        node_entry("v18.17.0", "Hydrogen", "2023-07-18"),
        node_entry("v16.20.2", "Gallium", "2023-08-09"),
        node_entry("v16.20.1", "Gallium", "2023-06-20"),
    ]


def schedule_json() -> Dict[str, Any]:
    """Raw schedule.json matching the node_schedule fixture."""
    return {
        "v0.12": {"start": "2015-02-06", "end": "2016-12-31"},
        "v16": {"start": "2021-04-20", "lts": "2021-10-26", "end": "2023-09-11", "codename": "Gallium"},
        "v18": {"start": "2022-04-19", "lts": "2022-10-25", "end": "2025-04-30", "codename": "Hydrogen"},
        "v20": {"start": "2023-04-18", "lts": "2023-10-24", "end": "2026-04-30", "codename": "Iron"},
        "v21": {"start": "2023-10-17", "end": "2024-06-01"},
    }
