"""Tests for version record and formatted version models."""

from datetime import datetime, timezone

from image_versions.models import (
    LatestVersion,
    RegistryTag,
    RegularVersion,
    ScheduleEntry,
    VersionRecord,
    parse_schedule,
    to_payload,
)


class TestVersionRecord:
    def test_from_dict_with_codename(self):
        record = VersionRecord.from_dict({"version": "v20.10.0", "lts": "Iron", "date": "2023-11-22"})
        assert record == VersionRecord("v20.10.0", "Iron", "2023-11-22")
        assert record.is_lts
        assert record.codename == "Iron"

    def test_from_dict_non_lts(self):
        record = VersionRecord.from_dict({"version": "v21.5.0", "lts": False})
        assert not record.is_lts
        assert record.codename is None

    def test_from_dict_unexpected_lts_type_is_not_lts(self):
        record = VersionRecord.from_dict({"version": "v21.5.0", "lts": None})
        assert record.lts is False


class TestSchedule:
    def test_parse_schedule_ignores_minor_keys(self):
        schedule = parse_schedule(
            {
                "v0.10": {"start": "2013-03-11", "end": "2016-10-31"},
                "v18": {"start": "2022-04-19", "lts": "2022-10-25", "end": "2025-04-30", "codename": "Hydrogen"},
                "v21": {"start": "2023-10-17", "end": "2024-06-01"},
            }
        )
        assert sorted(schedule) == [18, 21]
        assert schedule[18].codename == "Hydrogen"
        assert schedule[18].lts_start == datetime(2022, 10, 25, tzinfo=timezone.utc)
        assert schedule[21].lts_start is None

    def test_active_window_is_half_open(self):
        entry = ScheduleEntry(
            18,
            lts_start=datetime(2022, 10, 25, tzinfo=timezone.utc),
            end=datetime(2025, 4, 30, tzinfo=timezone.utc),
        )
        assert entry.is_active_lts(datetime(2022, 10, 25, tzinfo=timezone.utc))
        assert entry.is_active_lts(datetime(2025, 4, 29, 23, 59, tzinfo=timezone.utc))
        assert not entry.is_active_lts(datetime(2025, 4, 30, tzinfo=timezone.utc))
        assert not entry.is_active_lts(datetime(2022, 10, 24, tzinfo=timezone.utc))

    def test_missing_dates_are_never_active(self):
        entry = ScheduleEntry(21, lts_start=None, end=datetime(2024, 6, 1, tzinfo=timezone.utc))
        assert not entry.is_active_lts(datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_unparseable_date_is_missing(self):
        entry = ScheduleEntry.from_dict(18, {"lts": "soon", "end": "2025-04-30"})
        assert entry.lts_start is None


class TestRegistryTag:
    def test_from_description(self):
        tag = RegistryTag.from_description("Node 20.10.0 LTS (Iron) on Ubuntu 24.04")
        assert tag == RegistryTag("20.10.0", "Iron")
        assert tag.to_record() == VersionRecord("20.10.0", "Iron")

    def test_from_description_normalizes_codename_case(self):
        tag = RegistryTag.from_description("node 18.17.1 lts (HYDROGEN)")
        assert tag == RegistryTag("18.17.1", "Hydrogen")

    def test_from_description_rejects_other_images(self):
        assert RegistryTag.from_description(None) is None
        assert RegistryTag.from_description("") is None
        assert RegistryTag.from_description("Jekyll 4.3.4") is None
        assert RegistryTag.from_description("Node 21.5.0 (current)") is None


class TestPayload:
    def test_regular_version_keys(self):
        entry = RegularVersion(
            version="20.10.0",
            image_version="20",
            image_name="Node 20.10.0 LTS (Iron)",
            image_code_name="iron",
            is_latest=True,
        ).to_dict()
        assert entry == {
            "version": "20.10.0",
            "image-version": "20",
            "image-name": "Node 20.10.0 LTS (Iron)",
            "image-code-name": "iron",
            "is-latest": True,
        }

    def test_code_name_omitted_when_absent(self):
        entry = RegularVersion(version="4.3.4", image_version="4", image_name="Jekyll 4.3.4").to_dict()
        assert "image-code-name" not in entry
        assert entry["is-latest"] is False

    def test_to_payload_with_sentinel(self):
        payload = to_payload([LatestVersion()])
        assert payload == [{"version": "latest", "image-version": "latest", "is-latest": True}]
