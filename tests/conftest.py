"""Pytest configuration and shared fixtures for all tests."""

import pytest

from image_versions.models import RegistryTag, ScheduleEntry, VersionRecord

from .helpers import utc


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Disable Sentry telemetry for all tests.

    This fixture runs automatically for every test to prevent Sentry events
    from being sent during test runs. Tests that specifically need to test
    Sentry functionality (like test_sentry_filtering.py) should override
    this by setting TELEMETRY=true in their own fixtures or patches.
    """
    monkeypatch.setenv("TELEMETRY", "false")
    monkeypatch.delenv("SENTRY_DSN", raising=False)


@pytest.fixture
def node_records():
    """A small Node.js distribution index, newest first as published."""
    return [
        VersionRecord("v21.5.0", False, "2023-12-19"),
        VersionRecord("v20.10.0", "Iron", "2023-11-22"),
        VersionRecord("v20.9.0", "Iron", "2023-10-24"),
        VersionRecord("v18.17.1", "Hydrogen", "2023-08-09"),
        VersionRecord("v18.17.0", "Hydrogen", "2023-07-18"),
        VersionRecord("v16.20.2", "Gallium", "2023-08-09"),
        VersionRecord("v16.20.1", "Gallium", "2023-06-20"),
    ]


@pytest.fixture
def node_schedule():
    """Schedule with 18 and 20 in active LTS at NOW, 16 past end of life."""
    return {
        16: ScheduleEntry(16, lts_start=utc(2021, 10, 26), end=utc(2023, 9, 11), codename="Gallium"),
        18: ScheduleEntry(18, lts_start=utc(2022, 10, 25), end=utc(2025, 4, 30), codename="Hydrogen"),
        20: ScheduleEntry(20, lts_start=utc(2023, 10, 24), end=utc(2026, 4, 30), codename="Iron"),
        21: ScheduleEntry(21, lts_start=None, end=utc(2024, 6, 1)),
    }


@pytest.fixture
def node_tags():
    """Images already published to the registry."""
    return [
        RegistryTag("20.9.0", "Iron"),
        RegistryTag("18.17.1", "Hydrogen"),
        RegistryTag("16.20.1", "Gallium"),
    ]
